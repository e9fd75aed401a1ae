"""Compatibility engine: category scoring, threshold gate and the simple scorer."""

import pytest

from compatibility.questionnaire import QuestionnaireConfig
from compatibility.scoring import (
    CompatibilityEngine,
    CompatibilityResult,
    calculate_compatibility,
    calculate_simple_compatibility,
    create_engine,
)

CATEGORY_ORDER = ["CORE_VALUES", "LIFESTYLE", "INTERESTS", "PREFERENCES"]


def _with(answers, **changes):
    """Copy answers with question ids given as q<id>=answer."""
    updated = dict(answers)
    for key, value in changes.items():
        updated[int(key[1:])] = value
    return updated


# ---------------------------------------------------------------------------
# Category scoring
# ---------------------------------------------------------------------------


def test_score_category_averages_in_declared_order(engine, reference, person_a):
    other = _with(person_a, q2="VideoChat", q12="Cat")
    preferences = reference.get_category("PREFERENCES")

    category_score = engine.score_category(preferences, person_a, other)

    assert [q.question_id for q in category_score.per_question] == [2, 11, 12, 13, 18, 20]
    assert [q.similarity for q in category_score.per_question] == [0.8, 1.0, 0.0, 1.0, 1.0, 1.0]
    assert category_score.average_score == pytest.approx(4.8 / 6)


# ---------------------------------------------------------------------------
# Category-weighted compatibility
# ---------------------------------------------------------------------------


def test_identical_answers_score_one(engine, person_a):
    result = engine.calculate_compatibility(person_a, person_a)

    assert result.score == 1.0
    assert all(score == 1.0 for score in result.category_scores.values())
    assert result.included_categories == CATEGORY_ORDER


def test_details_follow_category_declaration_order(engine, reference, person_a, person_c):
    result = engine.calculate_compatibility(person_a, person_c)

    assert [d.category for d in result.details] == CATEGORY_ORDER
    assert list(result.category_scores) == CATEGORY_ORDER
    for detail in result.details:
        category = reference.get_category(detail.category)
        assert tuple(q.question_id for q in detail.questions) == category.questions


def test_score_is_symmetric_with_reference_table(engine, person_a, person_c):
    near = _with(person_a, q2="VideoChat", q4="Write", q10="OneOnOne", q14="Thai")
    mixed = _with(person_c, q4="Music", q10="Crowds")

    for answers_a, answers_b in [(person_a, near), (person_a, person_c), (near, mixed)]:
        forward = engine.calculate_compatibility(answers_a, answers_b)
        backward = engine.calculate_compatibility(answers_b, answers_a)
        assert forward.score == backward.score
        assert forward.category_scores == backward.category_scores


def test_all_categories_below_threshold_scores_zero(engine, person_a, person_c):
    result = engine.calculate_compatibility(person_a, person_c)

    assert result.score == 0
    assert result.included_categories == []
    # Breakdown is still reported for every category
    assert set(result.category_scores) == set(CATEGORY_ORDER)


def test_category_exactly_at_threshold_is_included(engine, person_a, person_c):
    # CORE_VALUES all match; LIFESTYLE matches 2 of 4 (= 0.5 threshold);
    # INTERESTS and PREFERENCES share nothing
    other = dict(person_c)
    for qid in (4, 6, 7, 9, 17, 19, 10, 15):
        other[qid] = person_a[qid]

    result = engine.calculate_compatibility(person_a, other)

    assert result.category_scores["LIFESTYLE"] == 0.5
    assert result.included_categories == ["CORE_VALUES", "LIFESTYLE"]
    assert result.score == pytest.approx((1.0 * 2.5 + 0.5 * 2.0) / 4.5)


def test_category_below_threshold_is_dropped_not_averaged(engine, person_a, person_c):
    # Only one LIFESTYLE match (0.25 < 0.5): the category drops out entirely,
    # leaving the perfect CORE_VALUES score alone
    other = dict(person_c)
    for qid in (4, 6, 7, 9, 17, 19, 15):
        other[qid] = person_a[qid]

    result = engine.calculate_compatibility(person_a, other)

    assert result.category_scores["LIFESTYLE"] == 0.25
    assert result.included_categories == ["CORE_VALUES"]
    assert result.score == 1.0


def test_texting_vs_videochat_gets_partial_credit(engine, person_a):
    other = _with(person_a, q2="VideoChat")

    result = engine.calculate_compatibility(person_a, other)

    preferences = result.category_scores["PREFERENCES"]
    assert preferences == pytest.approx((0.8 + 5 * 1.0) / 6)
    assert 0 < preferences < 1
    assert result.details[3].questions[0].similarity == 0.8
    expected = (2.5 + 2.0 + 1.5 + preferences * 1.0) / 7.0
    assert result.score == pytest.approx(expected)


def test_switching_to_exact_match_never_lowers_score(engine, person_a):
    base = _with(person_a, q11="Bold", q12="Cat", q3="Metal")
    improved = _with(base, q11="Systematic")

    before = engine.calculate_compatibility(person_a, base)
    after = engine.calculate_compatibility(person_a, improved)

    assert after.category_scores["PREFERENCES"] >= before.category_scores["PREFERENCES"]
    assert after.score >= before.score


def test_missing_answers_degrade_without_raising(engine, person_a):
    partial = {qid: answer for qid, answer in person_a.items() if qid != 18}

    result = engine.calculate_compatibility(partial, partial)
    by_question = {q.question_id: q.similarity for q in result.details[3].questions}

    assert by_question[18] == 0.0
    assert result.category_scores["PREFERENCES"] == pytest.approx(5 / 6)


def test_empty_answer_sets_score_zero(engine, person_a):
    assert engine.calculate_compatibility({}, {}).score == 0
    assert engine.calculate_compatibility(person_a, {}).score == 0
    assert engine.calculate_compatibility(None, person_a).score == 0


def test_stored_string_keys_are_accepted(engine, person_a):
    stored = {str(qid): answer for qid, answer in person_a.items()}
    stored["not-a-question"] = "ignored"

    assert engine.calculate_compatibility(stored, person_a).score == 1.0


def test_repeated_calls_are_identical(engine, person_a, person_c):
    other = _with(person_c, q2="VideoChat", q4="Exercise", q10="OneOnOne")

    first = engine.calculate_compatibility(person_a, other)
    second = engine.calculate_compatibility(person_a, other)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_questionnaire_without_categories_scores_zero(mini_dict):
    mini_dict["categories"] = {}
    engine = CompatibilityEngine(QuestionnaireConfig.from_dict(mini_dict))

    result = engine.calculate_compatibility({1: "Tea"}, {1: "Tea"})

    assert result.score == 0
    assert result.details == ()


def test_fixture_questionnaire_partial_credit(mini_engine):
    # ALPHA: (0.5 + 1.0) / 2 = 0.75 >= 0.5; BETA: (1 + 0) / 2 = 0.5 >= 0.3
    result = mini_engine.calculate_compatibility(
        {1: "Tea", 2: "Cats", 3: "Beach", 4: "Early"},
        {1: "Mate", 2: "Cats", 3: "Beach", 4: "Late"},
    )

    assert result.category_scores == {"ALPHA": 0.75, "BETA": 0.5}
    assert result.score == pytest.approx((0.75 * 2.0 + 0.5 * 1.0) / 3.0)


def test_predict_batch_keeps_input_order(engine, person_a, person_c):
    results = engine.predict_batch([(person_a, person_a), (person_a, person_c)])

    assert [r.score for r in results] == [1.0, 0.0]


# ---------------------------------------------------------------------------
# Simple (exact-match) scorer
# ---------------------------------------------------------------------------


def test_simple_score_identity(engine, person_a):
    assert engine.calculate_simple_compatibility(person_a, person_a) == 1.0


def test_simple_score_uses_question_weights(engine, person_a):
    # Question 4 weighs 2.0 out of a total weight of 28.0
    other = _with(person_a, q4="Sleep")

    assert engine.calculate_simple_compatibility(person_a, other) == pytest.approx(26 / 28)


def test_simple_score_gives_no_partial_credit(engine, person_a):
    other = _with(person_a, q2="VideoChat")

    simple = engine.calculate_simple_compatibility(person_a, other)
    rich = engine.calculate_compatibility(person_a, other).score

    assert simple == pytest.approx(27 / 28)
    assert simple <= rich


def test_simple_score_treats_missing_answers_as_mismatch(engine):
    assert engine.calculate_simple_compatibility({}, {}) == 0.0


def test_simple_score_defaults_unlisted_weights_to_one(mini_engine):
    # Weights: q1 = 2.0, q2..q4 default to 1.0
    score = mini_engine.calculate_simple_compatibility(
        {1: "Tea", 2: "Cats", 3: "Beach", 4: "Early"},
        {1: "Mate", 2: "Cats", 3: "Beach", 4: "Early"},
    )

    assert score == pytest.approx(3 / 5)


# ---------------------------------------------------------------------------
# Result object and module-level entry points
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("score, expected", [
    (0.0, 0), (0.125, 13), (0.6, 60), (0.994, 99), (0.996, 100), (1.0, 100),
])
def test_percentage_rounds_half_up(score, expected):
    assert CompatibilityResult(score=score).percentage == expected


def test_result_to_dict(engine, person_a):
    data = engine.calculate_compatibility(person_a, _with(person_a, q2="Calling")).to_dict()

    assert set(data) == {"score", "percentage", "category_scores", "details"}
    preferences = data["details"][3]
    assert preferences["category"] == "PREFERENCES"
    assert preferences["included"] is True
    assert preferences["questions"][0] == {"question_id": 2, "similarity": 0.0}


def test_module_level_functions_use_reference_questionnaire(engine, person_a, person_c):
    other = _with(person_c, q2="VideoChat", q19="Serious")

    assert calculate_compatibility(person_a, other) == engine.calculate_compatibility(person_a, other)
    assert calculate_simple_compatibility(person_a, other) == \
        engine.calculate_simple_compatibility(person_a, other)


def test_create_engine_defaults_to_reference(reference, mini_config):
    assert create_engine().config is reference
    assert create_engine(mini_config).config is mini_config


def test_result_is_read_only(engine, person_a):
    result = engine.calculate_compatibility(person_a, person_a)

    with pytest.raises(TypeError):
        result.category_scores["CORE_VALUES"] = 0.0
    with pytest.raises(TypeError):
        hash(result)
    assert result == engine.calculate_compatibility(person_a, person_a)
