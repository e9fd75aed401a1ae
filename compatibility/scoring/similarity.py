"""
Answer similarity lookup.

similarity = 1.0   if both users gave the same answer
           = table  if the ordered pair "A-B" is listed for the question
           = 0.0    otherwise

A missing answer (None) never matches anything, not even another missing
answer: two users who both skipped a question score 0 on it.
"""

from typing import Optional

from ..questionnaire.schema import QuestionnaireConfig

EXACT_MATCH = 1.0
NO_MATCH = 0.0


def similarity(
    config: QuestionnaireConfig,
    question_id: int,
    answer_a: Optional[str],
    answer_b: Optional[str]
) -> float:
    """
    Partial-credit similarity between two answers to the same question.

    Args:
        config: Questionnaire providing the similarity table
        question_id: Question both answers belong to
        answer_a: First user's answer, or None if unanswered
        answer_b: Second user's answer, or None if unanswered

    Returns:
        Similarity in [0, 1]; unknown questions and unlisted pairs give 0
    """
    if answer_a is None or answer_b is None:
        return NO_MATCH

    if answer_a == answer_b:
        return EXACT_MATCH

    curated = config.lookup_similarity(question_id, answer_a, answer_b)
    if curated is None:
        return NO_MATCH
    return curated
