"""Tests for the Aggregator (geometric mean and status bands)."""
from decimal import Decimal

import pytest

from memory_score.exceptions import InvalidMetricValue
from memory_score.models.enums import OverallStatus, StageStatus
from memory_score.scoring.aggregator import (
    Aggregator,
    classify_overall,
    classify_stage,
    overall_score,
)

SIX_STAGES = {"create": 70, "expand": 60, "strengthen": 55, "retrieve": 45, "reinstate": 40, "defend": 65}


class TestOverallScore:
    """Geometric-mean aggregation."""

    agg = Aggregator()

    def test_six_stage_scenario(self):
        """exp(mean(ln)) of {70,60,55,45,40,65} ≈ 54.74 → 55."""
        result = self.agg.aggregate(SIX_STAGES)
        assert result.overall == 55
        assert result.overall_status is OverallStatus.VULNERABLE
        assert Decimal("54.7") < result.geometric_mean < Decimal("54.8")

    def test_overall_score_helper(self):
        score = overall_score(SIX_STAGES)
        assert score.value == 55
        assert score.status is OverallStatus.VULNERABLE
        assert score.to_dict() == {"value": 55, "status": "VULNERABLE"}

    def test_sample_brand(self, sample_stage_scores):
        result = self.agg.aggregate(sample_stage_scores)
        assert result.overall == 83
        assert result.overall_status is OverallStatus.DOMINANT

    def test_uniform_scores(self):
        assert self.agg.aggregate({"a": 64, "b": 64, "c": 64}).overall == 64

    def test_zero_stage_floored_to_one(self):
        # sqrt(1 × 100) = 10
        assert self.agg.aggregate({"a": 0, "b": 100}).overall == 10

    def test_all_zero(self):
        result = self.agg.aggregate({"a": 0, "b": 0})
        assert result.overall == 1
        assert result.overall_status is OverallStatus.DORMANT

    def test_imbalance_penalised(self):
        result = self.agg.aggregate({"a": 90, "b": 90, "c": 5, "d": 5, "e": 5, "f": 5})
        assert result.overall == 13
        assert result.arithmetic_mean > Decimal(33)
        assert result.overall < result.arithmetic_mean

    def test_stage_statuses_and_attention(self):
        result = self.agg.aggregate(SIX_STAGES)
        assert result.stage_statuses["create"] is StageStatus.HEALTHY
        assert result.stage_statuses["reinstate"] is StageStatus.AT_RISK
        assert result.needs_attention == ("strengthen", "retrieve", "reinstate")

    def test_custom_attention_threshold(self):
        result = Aggregator(attention_threshold=50).aggregate(SIX_STAGES)
        assert result.needs_attention == ("retrieve", "reinstate")

    def test_to_dict(self):
        data = self.agg.aggregate(SIX_STAGES).to_dict()
        assert data["overall"] == 55
        assert data["overall_status"] == "VULNERABLE"
        assert data["stage_statuses"]["create"] == "Healthy"

    def test_input_not_mutated(self):
        scores = dict(SIX_STAGES)
        self.agg.aggregate(scores)
        assert scores == SIX_STAGES


class TestAggregatorValidation:

    agg = Aggregator()

    @pytest.mark.parametrize(
        "scores",
        [{}, {"a": 101}, {"a": -1}, {"a": "50"}, {"a": None}, {"a": True}, [50, 60]],
    )
    def test_rejected(self, scores):
        with pytest.raises(InvalidMetricValue):
            self.agg.aggregate(scores)


class TestStatusBands:
    """Bands are total, non-overlapping and threshold-only."""

    @pytest.mark.parametrize(
        "score,status",
        [
            (100, OverallStatus.DOMINANT),
            (80, OverallStatus.DOMINANT),
            (79, OverallStatus.ESTABLISHED),
            (60, OverallStatus.ESTABLISHED),
            (59, OverallStatus.VULNERABLE),
            (40, OverallStatus.VULNERABLE),
            (39, OverallStatus.FRAGILE),
            (20, OverallStatus.FRAGILE),
            (19, OverallStatus.DORMANT),
            (0, OverallStatus.DORMANT),
        ],
    )
    def test_overall_bands(self, score, status):
        assert classify_overall(score) is status

    @pytest.mark.parametrize(
        "score,status",
        [
            (100, StageStatus.OPTIMAL),
            (80, StageStatus.OPTIMAL),
            (79, StageStatus.HEALTHY),
            (60, StageStatus.HEALTHY),
            (59, StageStatus.AT_RISK),
            (40, StageStatus.AT_RISK),
            (39, StageStatus.IMPAIRED),
            (0, StageStatus.IMPAIRED),
        ],
    )
    def test_stage_bands(self, score, status):
        assert classify_stage(score) is status

    def test_labels(self):
        assert StageStatus.AT_RISK.value == "At-Risk"
        assert OverallStatus.DOMINANT.value == "DOMINANT"
