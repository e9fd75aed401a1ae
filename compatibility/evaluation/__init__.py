"""Evaluation module for compatibility score analysis."""

from .metrics import (
    compute_score_distribution_stats,
    compute_scorer_agreement,
    compute_category_inclusion_rates,
    EvaluationReport,
    create_evaluation_report
)

__all__ = [
    "compute_score_distribution_stats",
    "compute_scorer_agreement",
    "compute_category_inclusion_rates",
    "EvaluationReport",
    "create_evaluation_report"
]
