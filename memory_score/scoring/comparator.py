"""Comparator: per-stage gaps against a competitor or a flat benchmark.

  gap_i = own_i − reference_i

A stage is an advantage when gap > 0 and a vulnerability when gap < 0; a
zero gap belongs to neither. Records keep the order of the brand's stage
scores, so Σ gap_i == own_total − reference_total.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import structlog

from memory_score.exceptions import InvalidMetricValue, MissingReferenceStage
from memory_score.models.enums import ReferenceKind
from memory_score.scoring.aggregator import validate_scores
from memory_score.scoring.utils import is_number

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReferenceVector:
    """Reference scores to compare a brand against.

    Build with :meth:`competitor` or :meth:`flat`; the flat constant has no
    default so a comparison baseline is always stated by the caller.
    """

    kind: ReferenceKind
    label: str
    scores: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def competitor(cls, name: str, scores: Mapping[str, int]) -> "ReferenceVector":
        return cls(kind=ReferenceKind.COMPETITOR, label=name, scores=dict(scores))

    @classmethod
    def flat(
        cls,
        value: int,
        stage_ids: Iterable[str],
        label: str = "Category Benchmark",
    ) -> "ReferenceVector":
        if not is_number(value) or not 0 <= value <= 100 or value != int(value):
            raise InvalidMetricValue(
                f"Flat benchmark must be a whole number in [0, 100], got {value!r}", value=value
            )
        return cls(
            kind=ReferenceKind.BENCHMARK,
            label=label,
            scores={stage_id: value for stage_id in stage_ids},
        )


@dataclass(frozen=True)
class GapRecord:
    """Brand vs reference for one stage."""

    stage_id: str
    own_score: int
    reference_score: int
    gap: int

    def to_dict(self) -> dict:
        return {
            "stage_id": self.stage_id,
            "own_score": self.own_score,
            "reference_score": self.reference_score,
            "gap": self.gap,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Gap analysis with advantage/vulnerability partition."""

    reference_kind: ReferenceKind
    reference_label: str
    gaps: Tuple[GapRecord, ...]
    advantages: Tuple[str, ...]
    vulnerabilities: Tuple[str, ...]
    own_total: int
    reference_total: int

    @property
    def total_gap(self) -> int:
        return sum(g.gap for g in self.gaps)

    def to_dict(self) -> dict:
        return {
            "reference_kind": self.reference_kind.value,
            "reference_label": self.reference_label,
            "gaps": [g.to_dict() for g in self.gaps],
            "advantages": list(self.advantages),
            "vulnerabilities": list(self.vulnerabilities),
            "own_total": self.own_total,
            "reference_total": self.reference_total,
            "total_gap": self.total_gap,
        }


def _integral_scores(scores: Mapping[str, Any], what: str) -> Dict[str, int]:
    """Validate scores and require whole numbers so every gap is an int."""
    validate_scores(scores, what=what)
    out: Dict[str, int] = {}
    for stage_id, score in scores.items():
        if score != int(score):
            raise InvalidMetricValue(
                f"{what.capitalize()} for '{stage_id}' must be a whole number, got {score!r}",
                stage_id=stage_id,
                value=score,
            )
        out[stage_id] = int(score)
    return out


class Comparator:
    """Compare brand stage scores with a reference vector."""

    def compare(self, stage_scores: Mapping[str, Any], reference: ReferenceVector) -> ComparisonResult:
        """Compute per-stage gaps.

        Args:
            stage_scores: Brand's stage id → score, in definition order.
            reference: Competitor or flat-benchmark vector. Stages it has
                beyond ``stage_scores`` are ignored.

        Raises:
            MissingReferenceStage: If ``reference`` lacks a scored stage.
            InvalidMetricValue: If any score is outside [0, 100] or is not a
                whole number.
        """
        own_scores = _integral_scores(stage_scores, "stage score")
        for stage_id in own_scores:
            if stage_id not in reference.scores:
                raise MissingReferenceStage(stage_id)
        ref_scores = _integral_scores(
            {k: reference.scores[k] for k in own_scores}, "reference score"
        )

        gaps = []
        for stage_id, own in own_scores.items():
            ref = ref_scores[stage_id]
            gaps.append(GapRecord(stage_id, own, ref, own - ref))

        result = ComparisonResult(
            reference_kind=reference.kind,
            reference_label=reference.label,
            gaps=tuple(gaps),
            advantages=tuple(g.stage_id for g in gaps if g.gap > 0),
            vulnerabilities=tuple(g.stage_id for g in gaps if g.gap < 0),
            own_total=sum(g.own_score for g in gaps),
            reference_total=sum(g.reference_score for g in gaps),
        )
        logger.info("comparison_computed", **result.to_dict())
        return result


def order_by_score(stage_scores: Mapping[str, Any]) -> List[str]:
    """Stage ids weakest first; ties keep the mapping's definition order."""
    validate_scores(stage_scores)
    # sorted() is stable, so equal scores stay in input order
    return sorted(stage_scores, key=lambda stage_id: stage_scores[stage_id])


def priority_stages(stage_scores: Mapping[str, Any], limit: int = 3) -> List[str]:
    """The ``limit`` weakest stages, for weakest-first intervention views."""
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return order_by_score(stage_scores)[:limit]


def compare(stage_scores: Mapping[str, Any], reference: ReferenceVector) -> Tuple[GapRecord, ...]:
    """Gap records only; see :class:`Comparator` for the full result."""
    return Comparator().compare(stage_scores, reference).gaps

