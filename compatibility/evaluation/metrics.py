"""
Evaluation metrics for compatibility scoring over a candidate pool.

There are no ground-truth match outcomes, so evaluation describes how the
scorer behaves rather than how well it predicts:
1. Score distribution across the pool
2. Agreement between the category-weighted and the exact-match scorer
3. How often each category passes its threshold gate

This module DOES NOT claim real-world predictive accuracy.
"""

import logging
import json
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence, Union

import numpy as np
from scipy.stats import spearmanr

from ..ranking.ranker import RankedCandidate
from ..scoring.engine import CompatibilityResult

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = [0.1, 0.25, 0.5, 0.75, 0.9]


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class ScorerAgreement:
    """How the category-weighted and exact-match scorers relate on one pool."""
    n_pairs: int
    rank_correlation: float  # Spearman; NaN when either side is constant
    mean_gap: float          # mean(rich - simple)
    n_simple_above: int      # pairs where the exact-match score is higher

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_pairs": int(self.n_pairs),
            "rank_correlation": None if np.isnan(self.rank_correlation) else float(self.rank_correlation),
            "mean_gap": float(self.mean_gap),
            "n_simple_above": int(self.n_simple_above)
        }


@dataclass
class EvaluationReport:
    """
    Evaluation report for one candidate pool.

    Contains distribution statistics, scorer agreement and per-category
    inclusion rates.
    """
    pool_size: int
    distribution_stats: ScoreDistributionStats
    scorer_agreement: Optional[ScorerAgreement] = None
    category_inclusion_rates: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "pool_size": self.pool_size,
            "distribution_stats": self.distribution_stats.to_dict(),
            "category_inclusion_rates": dict(self.category_inclusion_rates)
        }
        if self.scorer_agreement:
            result["scorer_agreement"] = self.scorer_agreement.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Evaluation Report ({self.pool_size} pairs)",
            "=" * 50,
            "",
            "Score Distribution:",
            f"  Mean: {self.distribution_stats.mean:.4f}",
            f"  Std:  {self.distribution_stats.std:.4f}",
            f"  Min:  {self.distribution_stats.min:.4f}",
            f"  Max:  {self.distribution_stats.max:.4f}",
        ]

        for q_name, q_value in self.distribution_stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.4f}")

        if self.scorer_agreement:
            lines.extend([
                "",
                "Scorer Agreement (category-weighted vs exact-match):",
                f"  Rank correlation: {self.scorer_agreement.rank_correlation:.4f}",
                f"  Mean gap: {self.scorer_agreement.mean_gap:.4f}",
                f"  Exact-match higher: {self.scorer_agreement.n_simple_above} pairs",
            ])

        if self.category_inclusion_rates:
            lines.extend(["", "Category Inclusion Rates:"])
            for name, rate in self.category_inclusion_rates.items():
                lines.append(f"  {name}: {rate:.2%}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: List[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Compatibility scores (at least one)
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution statistics of an empty score list")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_scorer_agreement(
    rich_scores: Sequence[float],
    simple_scores: Sequence[float]
) -> ScorerAgreement:
    """
    Compare category-weighted scores with exact-match scores for the same pairs.

    Args:
        rich_scores: calculate_compatibility scores
        simple_scores: calculate_simple_compatibility scores, same order

    Returns:
        ScorerAgreement instance
    """
    rich = np.asarray(rich_scores, dtype=float)
    simple = np.asarray(simple_scores, dtype=float)
    if len(rich) != len(simple):
        raise ValueError(
            f"Score arrays must have same length: {len(rich)} vs {len(simple)}"
        )

    n_pairs = len(rich)
    if n_pairs < 2 or np.all(rich == rich[0]) or np.all(simple == simple[0]):
        logger.warning("Rank correlation needs at least 2 pairs with varying scores")
        correlation = float("nan")
    else:
        correlation, _ = spearmanr(rich, simple)

    return ScorerAgreement(
        n_pairs=n_pairs,
        rank_correlation=float(correlation),
        mean_gap=float(np.mean(rich - simple)) if n_pairs else 0.0,
        n_simple_above=int(np.sum(simple > rich))
    )


def compute_category_inclusion_rates(results: Sequence[CompatibilityResult]) -> Dict[str, float]:
    """
    Share of results in which each category passed its threshold.

    Returns:
        Category name -> inclusion rate in [0, 1], in category order
    """
    counts: Dict[str, int] = {}
    for result in results:
        for detail in result.details:
            counts.setdefault(detail.category, 0)
            if detail.included:
                counts[detail.category] += 1

    n_results = len(results)
    if n_results == 0:
        return {}
    return {name: count / n_results for name, count in counts.items()}


def create_evaluation_report(
    scored: Sequence[Union[RankedCandidate, CompatibilityResult]],
    simple_scores: Optional[Sequence[float]] = None,
    quantiles: List[float] = DEFAULT_QUANTILES
) -> EvaluationReport:
    """
    Create a complete evaluation report.

    Args:
        scored: RankedCandidates (which carry their exact-match score) or
            bare CompatibilityResults
        simple_scores: Exact-match scores for bare results, same order
        quantiles: Quantiles to compute

    Returns:
        EvaluationReport instance
    """
    results = []
    candidate_simple = []
    for item in scored:
        if isinstance(item, RankedCandidate):
            results.append(item.result)
            candidate_simple.append(item.simple_score)
        else:
            results.append(item)

    if simple_scores is None and len(candidate_simple) == len(results):
        simple_scores = candidate_simple

    rich_scores = [r.score for r in results]
    dist_stats = compute_score_distribution_stats(rich_scores, quantiles)

    agreement = None
    if simple_scores is not None:
        agreement = compute_scorer_agreement(rich_scores, simple_scores)

    return EvaluationReport(
        pool_size=len(results),
        distribution_stats=dist_stats,
        scorer_agreement=agreement,
        category_inclusion_rates=compute_category_inclusion_rates(results)
    )
