"""Questionnaire registry: questions, categories, weights and similarity table."""

from .schema import (
    Question,
    Category,
    QuestionnaireConfig,
    ConfigurationError,
    make_pair_key,
)
from .reference import reference_config
from .answers import AnswerSet, normalize_answers, validate_answers, is_complete

__all__ = [
    "Question",
    "Category",
    "QuestionnaireConfig",
    "ConfigurationError",
    "make_pair_key",
    "reference_config",
    "AnswerSet",
    "normalize_answers",
    "validate_answers",
    "is_complete",
]
