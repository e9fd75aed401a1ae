"""Compatibility scoring engine."""

from .similarity import similarity
from .engine import (
    CompatibilityEngine,
    CompatibilityResult,
    CategoryBreakdown,
    CategoryScore,
    QuestionSimilarity,
    create_engine,
    calculate_compatibility,
    calculate_simple_compatibility,
)

__all__ = [
    "similarity",
    "CompatibilityEngine",
    "CompatibilityResult",
    "CategoryBreakdown",
    "CategoryScore",
    "QuestionSimilarity",
    "create_engine",
    "calculate_compatibility",
    "calculate_simple_compatibility",
]
