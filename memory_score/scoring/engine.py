"""Memory Score engine facade.

Orchestrates the full pipeline for the presentation layer:
  validate stages → Stage Scores → Overall + bands → Decay → Gaps

The engine holds only immutable configuration (validated stage definitions
and settings). Every call recomputes from its arguments; nothing is cached.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import structlog

from memory_score.config import Settings, get_settings
from memory_score.exceptions import InvalidMetricValue
from memory_score.models.catalog import CATALOGS
from memory_score.models.report import (
    ComparisonOut,
    DecayOut,
    DecayPointOut,
    DiagnosticReport,
    GapOut,
    OverallScoreOut,
    StageScoreOut,
)
from memory_score.models.schema import StageDefinition, validate_stage_set
from memory_score.scoring.aggregator import AggregateResult, Aggregator, OverallScore
from memory_score.scoring.comparator import (
    Comparator,
    ComparisonResult,
    ReferenceVector,
    priority_stages,
)
from memory_score.scoring.decay import DecayProjection, DecayProjector
from memory_score.scoring.stage_scorer import StageScorer, StageScoreResult

logger = structlog.get_logger(__name__)


class MemoryScoreEngine:
    """Score brands against a fixed set of stage definitions.

    Parameters
    ----------
    stages:
        Stage definitions in lifecycle order. Defaults to the catalog named
        by ``settings.stage_catalog``.
    settings:
        Override the cached ``Settings`` (thresholds, decay defaults).

    Raises
    ------
    InvalidStageDefinition
        If any stage is malformed; no engine is built from a bad schema.
    """

    def __init__(
        self,
        stages: Optional[Iterable[StageDefinition]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._stages: Tuple[StageDefinition, ...] = validate_stage_set(
            stages if stages is not None else CATALOGS[self.settings.stage_catalog]
        )
        self.scorer = StageScorer()
        self.aggregator = Aggregator(attention_threshold=self.settings.attention_threshold)
        self.projector = DecayProjector(threshold=self.settings.vulnerable_threshold)
        self.comparator = Comparator()

        logger.info(
            "engine_initialized",
            stages=[s.id for s in self._stages],
            decay_rate=self.settings.decay_rate,
            vulnerable_threshold=self.settings.vulnerable_threshold,
        )

    # ── schema ───────────────────────────────────────────────────────────────

    def list_stages(self) -> Tuple[StageDefinition, ...]:
        return self._stages

    @property
    def stage_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self._stages)

    # ── scoring ──────────────────────────────────────────────────────────────

    def score_all_detailed(self, metric_inputs: Mapping[str, Mapping[str, Any]]) -> Dict[str, StageScoreResult]:
        """Score every stage, keeping the per-signal audit trail."""
        if not isinstance(metric_inputs, Mapping):
            raise InvalidMetricValue("Metric inputs must be a mapping of stage id → values")
        results: Dict[str, StageScoreResult] = {}
        for stage in self._stages:
            if stage.id not in metric_inputs:
                raise InvalidMetricValue(
                    f"Missing metric inputs for stage '{stage.id}'", stage_id=stage.id
                )
            results[stage.id] = self.scorer.calculate(stage, metric_inputs[stage.id])
        return results

    def score_all(self, metric_inputs: Mapping[str, Mapping[str, Any]]) -> Dict[str, int]:
        """Stage id → score, in definition order.

        Raises:
            InvalidMetricValue: On a missing stage or any bad raw value.
        """
        return {k: r.score for k, r in self.score_all_detailed(metric_inputs).items()}

    def aggregate(self, stage_scores: Mapping[str, Any]) -> AggregateResult:
        return self.aggregator.aggregate(stage_scores)

    def overall_score(self, stage_scores: Mapping[str, Any]) -> OverallScore:
        return self.aggregator.aggregate(stage_scores).overall_score

    # ── analytics ────────────────────────────────────────────────────────────

    def project_decay(
        self,
        overall_score: int,
        horizon: Optional[Sequence[int]] = None,
        rate: Optional[float] = None,
    ) -> DecayProjection:
        """Project ``overall_score``; horizon and rate default to settings."""
        return self.projector.project(
            overall_score,
            horizon if horizon is not None else self.settings.decay_horizon,
            rate if rate is not None else self.settings.decay_rate,
        )

    def flat_reference(self, value: int, label: str = "Category Benchmark") -> ReferenceVector:
        """Flat benchmark across every defined stage; ``value`` is required."""
        return ReferenceVector.flat(value, self.stage_ids, label=label)

    def competitor_reference(self, name: str, scores: Mapping[str, int]) -> ReferenceVector:
        return ReferenceVector.competitor(name, scores)

    def compare(self, stage_scores: Mapping[str, Any], reference: ReferenceVector) -> ComparisonResult:
        return self.comparator.compare(stage_scores, reference)

    def priority_stages(self, stage_scores: Mapping[str, Any], limit: Optional[int] = None) -> List[str]:
        """Weakest stages first (ties in definition order)."""
        return priority_stages(stage_scores, limit if limit is not None else self.settings.priority_limit)

    # ── full diagnostic ──────────────────────────────────────────────────────

    def diagnose(
        self,
        metric_inputs: Mapping[str, Mapping[str, Any]],
        reference: Optional[ReferenceVector] = None,
    ) -> DiagnosticReport:
        """Run the whole chain and return an immutable report.

        Args:
            metric_inputs: Stage id → signal key → raw value.
            reference: Optional competitor or flat benchmark to compare with.
        """
        scores = self.score_all(metric_inputs)
        agg = self.aggregate(scores)
        decay = self.project_decay(agg.overall)
        until = self.projector.periods_until_below(
            agg.overall, self.settings.decay_rate, limit=self.settings.breach_search_limit
        )

        comparison = None
        if reference is not None:
            cmp = self.compare(scores, reference)
            comparison = ComparisonOut(
                reference_kind=cmp.reference_kind,
                reference_label=cmp.reference_label,
                gaps=[GapOut(**g.to_dict()) for g in cmp.gaps],
                advantages=list(cmp.advantages),
                vulnerabilities=list(cmp.vulnerabilities),
                total_gap=cmp.total_gap,
            )

        return DiagnosticReport(
            stages=[
                StageScoreOut(stage_id=k, score=v, status=agg.stage_statuses[k])
                for k, v in scores.items()
            ],
            overall=OverallScoreOut(
                value=agg.overall,
                status=agg.overall_status,
                arithmetic_mean=float(agg.arithmetic_mean),
            ),
            decay=DecayOut(
                rate=float(decay.rate),
                threshold=decay.threshold,
                points=[DecayPointOut(**p.to_dict()) for p in decay.points],
                below_threshold=decay.below_threshold,
                first_breach_offset=decay.first_breach_offset,
                periods_until_below=until,
            ),
            comparison=comparison,
            priority_stages=self.priority_stages(scores),
            needs_attention=list(agg.needs_attention),
        )
