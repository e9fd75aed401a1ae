"""
Candidate ranking for the matches view.

Scores one user's answers against every candidate in an already-assembled
pool, sorts by compatibility (highest first) and drops candidates below a
minimum score. Assembling the pool (gender preference, existing
connections) happens before this step.

Ties keep the pool's input order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Mapping, Optional

import pandas as pd

from ..scoring.engine import CompatibilityEngine, CompatibilityResult

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 0.6


@dataclass(frozen=True)
class RankedCandidate:
    """
    A scored candidate.

    Attributes:
        user_id: Candidate identifier from the pool
        result: Category-weighted compatibility result
        simple_score: Exact-match compatibility for the same pair
    """
    user_id: str
    result: CompatibilityResult
    simple_score: float

    @property
    def score(self) -> float:
        return self.result.score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "simple_score": self.simple_score,
            **self.result.to_dict()
        }


class CandidateRanker:
    """
    Ranks a candidate pool by compatibility.

    Attributes:
        engine: Engine used for both scorers
        min_score: Inclusive cutoff; candidates scoring lower are dropped
        top_k: Keep at most this many candidates (None keeps all)
    """

    def __init__(
        self,
        engine: CompatibilityEngine,
        min_score: float = DEFAULT_MIN_SCORE,
        top_k: Optional[int] = None
    ):
        if not 0 <= min_score <= 1:
            raise ValueError(f"min_score must be in [0, 1], got {min_score}")
        if top_k is not None and top_k < 1:
            raise ValueError(f"top_k must be a positive integer, got {top_k}")
        self.engine = engine
        self.min_score = min_score
        self.top_k = top_k

    def score_pool(
        self,
        answers: Mapping[Any, Any],
        candidates: Mapping[str, Mapping[Any, Any]]
    ) -> List[RankedCandidate]:
        """
        Score every candidate without sorting or filtering.

        Args:
            answers: The viewing user's answers
            candidates: Candidate user id -> answers

        Returns:
            One RankedCandidate per candidate, in pool order
        """
        return [
            RankedCandidate(
                user_id=str(user_id),
                result=self.engine.calculate_compatibility(answers, candidate_answers),
                simple_score=self.engine.calculate_simple_compatibility(answers, candidate_answers)
            )
            for user_id, candidate_answers in candidates.items()
        ]

    def rank(
        self,
        answers: Mapping[Any, Any],
        candidates: Mapping[str, Mapping[Any, Any]]
    ) -> List[RankedCandidate]:
        """
        Score, sort and filter a candidate pool.

        Args:
            answers: The viewing user's answers
            candidates: Candidate user id -> answers

        Returns:
            Candidates with score >= min_score, best first
        """
        scored = self.score_pool(answers, candidates)
        ranked = sorted(scored, key=lambda c: c.score, reverse=True)
        ranked = [c for c in ranked if c.score >= self.min_score]
        if self.top_k is not None:
            ranked = ranked[:self.top_k]

        logger.info(
            f"Ranked {len(scored)} candidates: {len(ranked)} at or above "
            f"min_score={self.min_score}"
        )
        return ranked

    def to_frame(self, ranked: List[RankedCandidate]) -> pd.DataFrame:
        """
        Tabulate ranked candidates.

        Columns: user_id, score, percentage, simple_score, then one column
        per category (in category order) holding its average similarity.
        """
        category_names = [c.name for c in self.engine.config.categories]
        columns = ["user_id", "score", "percentage", "simple_score"] + category_names

        rows = []
        for candidate in ranked:
            row = {
                "user_id": candidate.user_id,
                "score": candidate.score,
                "percentage": candidate.result.percentage,
                "simple_score": candidate.simple_score,
            }
            for name in category_names:
                row[name] = candidate.result.category_scores.get(name, 0.0)
            rows.append(row)

        return pd.DataFrame(rows, columns=columns)
