"""Tests for the MemoryScoreEngine facade and the diagnostic report."""
import copy

import pytest
from pydantic import ValidationError

from memory_score import MemoryScoreEngine as PackageEngine
from memory_score.config import Settings
from memory_score.exceptions import InvalidMetricValue, InvalidStageDefinition
from memory_score.models.catalog import (
    DIAGNOSTIC_STAGES,
    FRAMEWORK_STAGES,
    SAMPLE_COMPETITOR_SCORES,
    SAMPLE_FRAMEWORK_METRICS,
    STAGE_IDS,
)
from memory_score.models.enums import OverallStatus, ReferenceKind, StageStatus
from memory_score.models.presentation import STAGE_PRESENTATION
from memory_score.models.schema import SignalDefinition, StageDefinition
from memory_score.scoring.engine import MemoryScoreEngine


class TestEngineSetup:

    def test_default_catalog_from_settings(self, settings):
        engine = MemoryScoreEngine(settings=settings)
        assert engine.list_stages() == DIAGNOSTIC_STAGES
        assert engine.stage_ids == STAGE_IDS

    def test_framework_catalog_from_settings(self):
        engine = MemoryScoreEngine(settings=Settings(_env_file=None, stage_catalog="framework"))
        assert engine.list_stages() == FRAMEWORK_STAGES

    def test_package_export(self):
        assert PackageEngine is MemoryScoreEngine

    def test_invalid_stage_prevents_construction(self, settings):
        bad = StageDefinition("s", (SignalDefinition("a", 0),))
        with pytest.raises(InvalidStageDefinition):
            MemoryScoreEngine(stages=[bad], settings=settings)

    def test_duplicate_stage_id_prevents_construction(self, settings):
        stage = StageDefinition("s", (SignalDefinition("a", 10),))
        with pytest.raises(InvalidStageDefinition):
            MemoryScoreEngine(stages=[stage, stage], settings=settings)

    def test_list_stages_is_immutable(self, engine):
        assert isinstance(engine.list_stages(), tuple)


class TestScoreAll:

    def test_sample_brand(self, engine, sample_metrics, sample_stage_scores):
        scores = engine.score_all(sample_metrics)
        assert scores == sample_stage_scores
        assert list(scores) == list(STAGE_IDS)

    def test_idempotent(self, engine, sample_metrics):
        assert engine.score_all(sample_metrics) == engine.score_all(sample_metrics)

    def test_inputs_not_mutated(self, engine, sample_metrics):
        snapshot = copy.deepcopy(sample_metrics)
        engine.score_all(sample_metrics)
        assert sample_metrics == snapshot

    def test_detailed(self, engine, sample_metrics):
        detailed = engine.score_all_detailed(sample_metrics)
        assert detailed["create"].score == 89
        assert [int(s.signal_score) for s in detailed["create"].signal_scores] == [89, 91, 88]

    def test_missing_stage(self, engine, sample_metrics):
        del sample_metrics["defend"]
        with pytest.raises(InvalidMetricValue) as exc_info:
            engine.score_all(sample_metrics)
        assert exc_info.value.stage_id == "defend"

    def test_negative_value(self, engine, sample_metrics):
        sample_metrics["expand"]["occasions"] = -2
        with pytest.raises(InvalidMetricValue):
            engine.score_all(sample_metrics)

    def test_wrong_numeric_kind(self, engine, sample_metrics):
        sample_metrics["expand"]["occasions"] = "4"
        with pytest.raises(InvalidMetricValue):
            engine.score_all(sample_metrics)

    def test_non_mapping(self, engine):
        with pytest.raises(InvalidMetricValue):
            engine.score_all(None)

    def test_framework_sample(self, settings):
        engine = MemoryScoreEngine(stages=FRAMEWORK_STAGES, settings=settings)
        assert engine.score_all(SAMPLE_FRAMEWORK_METRICS) == {
            "create": 34,
            "expand": 43,
            "strengthen": 57,
            "retrieve": 18,
            "reinstate": 75,
            "defend": 65,
        }


class TestAnalytics:

    def test_overall_score(self, engine, sample_stage_scores):
        score = engine.overall_score(sample_stage_scores)
        assert score.value == 83
        assert score.status is OverallStatus.DOMINANT

    def test_decay_defaults_from_settings(self, engine):
        result = engine.project_decay(55)
        assert [p.projected_score for p in result.points] == [55, 45, 36, 30, 24]

    def test_decay_overrides(self, engine):
        result = engine.project_decay(55, horizon=[0, 1], rate=0.5)
        assert [p.projected_score for p in result.points] == [55, 28]

    def test_decay_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("MEMORY_SCORE_DECAY_RATE", "0.1")
        monkeypatch.setenv("MEMORY_SCORE_DECAY_HORIZON", "[0, 2]")
        engine = MemoryScoreEngine(settings=Settings(_env_file=None))
        result = engine.project_decay(50)
        # 50 × 0.9² = 40.5
        assert [p.projected_score for p in result.points] == [50, 41]

    def test_flat_reference_covers_every_stage(self, engine, sample_stage_scores):
        ref = engine.flat_reference(60)
        assert tuple(ref.scores) == STAGE_IDS
        result = engine.compare(sample_stage_scores, ref)
        assert result.vulnerabilities == ()

    def test_competitor_reference(self, engine, sample_stage_scores, competitor_scores):
        ref = engine.competitor_reference("Competitor A", competitor_scores)
        assert engine.compare(sample_stage_scores, ref).total_gap == 164

    def test_priority_stages_default_limit(self, engine, sample_stage_scores):
        assert engine.priority_stages(sample_stage_scores) == ["defend", "expand", "retrieve"]

    def test_priority_stages_explicit_zero_rejected(self, engine, sample_stage_scores):
        with pytest.raises(ValueError):
            engine.priority_stages(sample_stage_scores, limit=0)


class TestDiagnose:

    def test_full_report(self, engine, sample_metrics, sample_stage_scores):
        ref = engine.competitor_reference("Competitor A", SAMPLE_COMPETITOR_SCORES)
        report = engine.diagnose(sample_metrics, ref)

        assert report.stage_scores == sample_stage_scores
        assert report.stages[0].status is StageStatus.OPTIMAL
        assert report.overall.value == 83
        assert report.overall.status is OverallStatus.DOMINANT
        assert report.overall.arithmetic_mean == pytest.approx(497 / 6)
        assert [p.projected_score for p in report.decay.points] == [83, 68, 55, 45, 37]
        assert report.decay.below_threshold is True
        assert report.decay.first_breach_offset == 16
        assert report.decay.periods_until_below == 15
        assert report.comparison.reference_kind is ReferenceKind.COMPETITOR
        assert report.comparison.total_gap == 164
        assert report.priority_stages == ["defend", "expand", "retrieve"]
        assert report.needs_attention == []

    def test_without_reference(self, engine, sample_metrics):
        assert engine.diagnose(sample_metrics).comparison is None

    def test_report_is_frozen(self, engine, sample_metrics):
        report = engine.diagnose(sample_metrics)
        with pytest.raises(ValidationError):
            report.priority_stages = []

    def test_report_json(self, engine, sample_metrics):
        data = engine.diagnose(sample_metrics, engine.flat_reference(80)).model_dump(mode="json")
        assert data["overall"]["status"] == "DOMINANT"
        assert data["stages"][0]["status"] == "Optimal"
        assert data["comparison"]["vulnerabilities"] == ["expand", "defend"]


class TestPresentationLookup:

    def test_covers_every_stage(self):
        assert set(STAGE_PRESENTATION) == set(STAGE_IDS)
        assert {s.id for s in FRAMEWORK_STAGES} == set(STAGE_IDS)

    def test_each_stage_has_interventions(self):
        for presentation in STAGE_PRESENTATION.values():
            assert presentation.interventions
            assert presentation.hex_color.startswith("#")
