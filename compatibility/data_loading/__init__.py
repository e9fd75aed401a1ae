"""Data loading module for questionnaires, answer sets and candidate pools."""

from .loaders import load_questionnaire, load_answer_set, load_candidate_pool

__all__ = ["load_questionnaire", "load_answer_set", "load_candidate_pool"]
