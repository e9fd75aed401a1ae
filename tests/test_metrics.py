"""Evaluation metrics over scored candidate pools."""

import json
import math

import numpy as np
import pytest

from compatibility.evaluation import (
    compute_category_inclusion_rates,
    compute_score_distribution_stats,
    compute_scorer_agreement,
    create_evaluation_report,
)
from compatibility.ranking import CandidateRanker


@pytest.fixture
def scored_pool(engine, person_a, person_c):
    near = dict(person_a)
    near[2] = "VideoChat"
    return CandidateRanker(engine).score_pool(
        person_a, {"twin": dict(person_a), "near": near, "stranger": person_c}
    )


def test_distribution_stats():
    stats = compute_score_distribution_stats([0.0, 0.25, 0.5, 0.75, 1.0], quantiles=[0.5, 0.9])

    assert stats.mean == pytest.approx(0.5)
    assert stats.std == pytest.approx(np.std([0.0, 0.25, 0.5, 0.75, 1.0]))
    assert stats.min == 0.0
    assert stats.max == 1.0
    assert stats.quantiles == {"p50": pytest.approx(0.5), "p90": pytest.approx(0.9)}


def test_distribution_stats_rejects_empty():
    with pytest.raises(ValueError, match="empty"):
        compute_score_distribution_stats([])


def test_scorer_agreement():
    agreement = compute_scorer_agreement([0.9, 0.5, 0.1], [0.8, 0.6, 0.0])

    assert agreement.n_pairs == 3
    assert agreement.rank_correlation == pytest.approx(1.0)
    assert agreement.mean_gap == pytest.approx((0.1 - 0.1 + 0.1) / 3)
    assert agreement.n_simple_above == 1


def test_scorer_agreement_constant_scores(caplog):
    agreement = compute_scorer_agreement([0.5, 0.5], [0.2, 0.7])

    assert math.isnan(agreement.rank_correlation)
    assert agreement.to_dict()["rank_correlation"] is None
    assert "Rank correlation" in caplog.text


def test_scorer_agreement_length_mismatch():
    with pytest.raises(ValueError, match="same length"):
        compute_scorer_agreement([0.1, 0.2], [0.1])


def test_category_inclusion_rates(scored_pool):
    rates = compute_category_inclusion_rates([c.result for c in scored_pool])

    # twin and near pass every gate, stranger passes none
    assert rates == {
        "CORE_VALUES": pytest.approx(2 / 3),
        "LIFESTYLE": pytest.approx(2 / 3),
        "INTERESTS": pytest.approx(2 / 3),
        "PREFERENCES": pytest.approx(2 / 3),
    }


def test_category_inclusion_rates_empty():
    assert compute_category_inclusion_rates([]) == {}


def test_report_from_ranked_candidates(scored_pool):
    report = create_evaluation_report(scored_pool, quantiles=[0.5])

    assert report.pool_size == 3
    assert report.distribution_stats.max == 1.0
    assert report.distribution_stats.min == 0.0
    assert report.scorer_agreement is not None
    assert report.scorer_agreement.n_pairs == 3


def test_report_from_bare_results_without_simple_scores(scored_pool):
    report = create_evaluation_report([c.result for c in scored_pool])

    assert report.scorer_agreement is None
    assert "scorer_agreement" not in report.to_dict()


def test_report_save_and_summary(tmp_path, scored_pool):
    report = create_evaluation_report(scored_pool)
    path = tmp_path / "report.json"

    report.save(str(path))
    data = json.loads(path.read_text())

    assert data["pool_size"] == 3
    assert set(data["distribution_stats"]["quantiles"]) == {"p10", "p25", "p50", "p75", "p90"}
    assert "CORE_VALUES" in data["category_inclusion_rates"]

    summary = report.summary()
    assert "Evaluation Report (3 pairs)" in summary
    assert "Category Inclusion Rates:" in summary
