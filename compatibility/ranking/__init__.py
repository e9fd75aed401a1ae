"""Ranking module for scoring candidate pools."""

from .ranker import CandidateRanker, RankedCandidate, DEFAULT_MIN_SCORE

__all__ = ["CandidateRanker", "RankedCandidate", "DEFAULT_MIN_SCORE"]
