"""
Answer sets and profile completeness.

An AnswerSet maps question id -> chosen answer for one user. Profiles are
stored as JSON, so ids usually arrive as strings ("4": "Exercise");
normalize_answers() turns them into the int-keyed form the scorer uses.

Scoring never rejects an answer set. Validation here is for the profile
flow: a dating profile only counts as complete when every question has a
valid answer.
"""

import logging
from typing import Dict, Any, List, Mapping, Optional

from .schema import QuestionnaireConfig

logger = logging.getLogger(__name__)

AnswerSet = Dict[int, str]


def _parse_question_id(key: Any) -> Optional[int]:
    """Question id from an int or a string of digits; None for anything else."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        text = key.strip()
        if text.lstrip("-").isdigit():
            try:
                return int(text)
            except ValueError:
                return None
    return None


def normalize_answers(raw: Optional[Mapping[Any, Any]]) -> AnswerSet:
    """
    Coerce a stored answer mapping into an AnswerSet.

    Keys must be ints or strings of digits ("4"); anything else (floats,
    booleans, other objects) is dropped, as are empty/None answers, so
    they behave as unanswered.

    Args:
        raw: Mapping as stored (string or int keys), or None

    Returns:
        New int-keyed dictionary
    """
    answers: AnswerSet = {}
    if not raw:
        return answers

    for key, value in raw.items():
        question_id = _parse_question_id(key)
        if question_id is None:
            logger.debug(f"Dropping answer with non-integer question id: {key!r}")
            continue
        if value is None or value == "":
            continue
        answers[question_id] = str(value)
    return answers


def validate_answers(config: QuestionnaireConfig, answers: Mapping[Any, Any]) -> List[str]:
    """
    Check answers against the questionnaire.

    Args:
        config: Questionnaire the answers were given for
        answers: Raw or normalized answer mapping

    Returns:
        List of problems (empty if every given answer is valid)
    """
    issues = []
    for question_id, value in normalize_answers(answers).items():
        question = config.get_question(question_id)
        if question is None:
            issues.append(f"Unknown question id: {question_id}")
        elif not question.is_valid_answer(value):
            issues.append(
                f"Invalid answer for question {question_id}: {value!r} "
                f"(valid options: {', '.join(question.options)})"
            )
    return issues


def missing_questions(config: QuestionnaireConfig, answers: Mapping[Any, Any]) -> List[int]:
    """Question ids that have no answer, in registry order."""
    given = normalize_answers(answers)
    return [qid for qid in config.question_ids if qid not in given]


def is_complete(config: QuestionnaireConfig, answers: Mapping[Any, Any]) -> bool:
    """A profile is complete when every question has a valid answer."""
    return not missing_questions(config, answers) and not validate_answers(config, answers)
