"""
Compatibility scoring between two users' questionnaire answers.

This module provides the engine that:
1. Compares answers question by question (exact match or curated partial credit)
2. Averages similarities within each category
3. Gates each category on its threshold
4. Combines the admitted categories into a weighted average

Threshold gate:
    score = sum(avg_c * weight_c) / sum(weight_c)   over categories with avg_c >= threshold_c
    score = 0                                       if no category is admitted

A couple that strongly agrees on core values but little else still scores
well, because the categories they disagree on drop out instead of dragging
the average down.

The simple scorer is kept for call sites that show a plain percentage: a
weighted share of exactly matching answers over the whole question registry,
with no categories, thresholds or partial credit.
"""

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional, Tuple

from ..questionnaire.answers import normalize_answers
from ..questionnaire.reference import reference_config
from ..questionnaire.schema import Category, QuestionnaireConfig
from .similarity import similarity as answer_similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionSimilarity:
    """Similarity of both users' answers to one question."""
    question_id: int
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"question_id": self.question_id, "similarity": self.similarity}


@dataclass(frozen=True)
class CategoryScore:
    """
    Average similarity of a category.

    Attributes:
        average_score: Mean similarity over the category's questions [0, 1]
        per_question: Per-question similarities, in category order
    """
    average_score: float
    per_question: Tuple[QuestionSimilarity, ...]


@dataclass(frozen=True)
class CategoryBreakdown:
    """
    One category's entry in CompatibilityResult.details.

    Attributes:
        category: Category name
        score: Average similarity of the category [0, 1]
        questions: Per-question similarities, in category order
        included: Whether the category met its threshold and counted
    """
    category: str
    score: float
    questions: Tuple[QuestionSimilarity, ...]
    included: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "score": self.score,
            "questions": [q.to_dict() for q in self.questions],
            "included": self.included
        }


@dataclass(frozen=True)
class CompatibilityResult:
    """
    Result of compatibility scoring.

    Attributes:
        score: Weighted average over admitted categories [0, 1]
        category_scores: Category name -> average similarity, for every category
        details: Per-category breakdown in category declaration order

    category_scores is wrapped read-only, so results compare by value but
    are not hashable.
    """
    score: float
    category_scores: Mapping[str, float] = field(default_factory=dict)
    details: Tuple[CategoryBreakdown, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "category_scores", MappingProxyType(dict(self.category_scores)))
        object.__setattr__(self, "details", tuple(self.details))

    @property
    def percentage(self) -> int:
        """Score as a whole percentage, rounded half up."""
        return int(math.floor(self.score * 100 + 0.5))

    @property
    def included_categories(self) -> List[str]:
        return [d.category for d in self.details if d.included]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "percentage": self.percentage,
            "category_scores": dict(self.category_scores),
            "details": [d.to_dict() for d in self.details]
        }


class CompatibilityEngine:
    """
    Category-weighted compatibility scorer.

    The engine holds no mutable state beyond its immutable configuration,
    so one instance can serve any number of concurrent callers.

    Attributes:
        config: Validated questionnaire configuration
    """

    def __init__(self, config: QuestionnaireConfig):
        """
        Initialize the engine.

        Args:
            config: QuestionnaireConfig (already validated on construction)
        """
        self.config = config
        logger.info(
            f"Initialized CompatibilityEngine with {len(config.questions)} questions "
            f"in {len(config.categories)} categories"
        )

    def similarity(
        self,
        question_id: int,
        answer_a: Optional[str],
        answer_b: Optional[str]
    ) -> float:
        """Similarity of two answers to one question (see scoring.similarity)."""
        return answer_similarity(self.config, question_id, answer_a, answer_b)

    def score_category(
        self,
        category: Category,
        answers_a: Mapping[int, str],
        answers_b: Mapping[int, str]
    ) -> CategoryScore:
        """
        Average the similarities of a category's questions.

        Unanswered questions contribute 0.

        Args:
            category: Category to score (has at least one question)
            answers_a: First user's normalized answers
            answers_b: Second user's normalized answers

        Returns:
            CategoryScore with per-question entries in category order
        """
        per_question = tuple(
            QuestionSimilarity(
                question_id=question_id,
                similarity=self.similarity(
                    question_id,
                    answers_a.get(question_id),
                    answers_b.get(question_id)
                )
            )
            for question_id in category.questions
        )
        total = sum(q.similarity for q in per_question)
        return CategoryScore(
            average_score=total / len(category.questions),
            per_question=per_question
        )

    def calculate_compatibility(
        self,
        answers_a: Mapping[Any, Any],
        answers_b: Mapping[Any, Any]
    ) -> CompatibilityResult:
        """
        Compute the category-weighted compatibility of two answer sets.

        Args:
            answers_a: First user's answers (stored or normalized form)
            answers_b: Second user's answers (stored or normalized form)

        Returns:
            CompatibilityResult; score is 0 when no category meets its threshold
        """
        normalized_a = normalize_answers(answers_a)
        normalized_b = normalize_answers(answers_b)

        weighted_score_sum = 0.0
        total_weight_used = 0.0
        category_scores: Dict[str, float] = {}
        details: List[CategoryBreakdown] = []

        for category in self.config.categories:
            category_score = self.score_category(category, normalized_a, normalized_b)
            average = category_score.average_score
            included = average >= category.threshold

            category_scores[category.name] = average
            details.append(CategoryBreakdown(
                category=category.name,
                score=average,
                questions=category_score.per_question,
                included=included
            ))

            if included:
                weighted_score_sum += average * category.weight
                total_weight_used += category.weight

        score = weighted_score_sum / total_weight_used if total_weight_used > 0 else 0.0

        logger.debug(
            f"Compatibility score={score:.4f} "
            f"(categories admitted: {[d.category for d in details if d.included]})"
        )

        return CompatibilityResult(
            score=score,
            category_scores=category_scores,
            details=tuple(details)
        )

    def calculate_simple_compatibility(
        self,
        answers_a: Mapping[Any, Any],
        answers_b: Mapping[Any, Any]
    ) -> float:
        """
        Weighted share of exactly matching answers over the question registry.

        Ignores categories, thresholds and the similarity table. Unanswered
        questions never match.

        Returns:
            Score in [0, 1]
        """
        normalized_a = normalize_answers(answers_a)
        normalized_b = normalize_answers(answers_b)

        total_weight = 0.0
        matched_weight = 0.0
        for question_id in self.config.question_ids:
            weight = self.config.question_weight(question_id)
            total_weight += weight

            answer_a = normalized_a.get(question_id)
            if answer_a is not None and answer_a == normalized_b.get(question_id):
                matched_weight += weight

        return matched_weight / total_weight

    def predict_batch(
        self,
        pairs: List[Tuple[Mapping[Any, Any], Mapping[Any, Any]]]
    ) -> List[CompatibilityResult]:
        """
        Compute compatibility for multiple answer-set pairs.

        Args:
            pairs: List of (answers_a, answers_b) tuples

        Returns:
            List of CompatibilityResult objects, in input order
        """
        return [self.calculate_compatibility(a, b) for a, b in pairs]


def create_engine(config: Optional[QuestionnaireConfig] = None) -> CompatibilityEngine:
    """
    Factory function to create a CompatibilityEngine.

    Args:
        config: Questionnaire configuration (default: the reference questionnaire)

    Returns:
        Configured CompatibilityEngine instance
    """
    if config is None:
        config = reference_config()
    return CompatibilityEngine(config)


@lru_cache(maxsize=1)
def _default_engine() -> CompatibilityEngine:
    return create_engine()


def calculate_compatibility(
    answers_a: Mapping[Any, Any],
    answers_b: Mapping[Any, Any]
) -> CompatibilityResult:
    """Category-weighted compatibility against the reference questionnaire."""
    return _default_engine().calculate_compatibility(answers_a, answers_b)


def calculate_simple_compatibility(
    answers_a: Mapping[Any, Any],
    answers_b: Mapping[Any, Any]
) -> float:
    """Exact-match compatibility against the reference questionnaire."""
    return _default_engine().calculate_simple_compatibility(answers_a, answers_b)
