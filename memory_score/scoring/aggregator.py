"""Aggregator: overall Memory Score and status bands.

Formula
-------
  Overall = round( exp( mean( ln(max(score_i, 1)) ) ) )

The geometric mean rewards balance across stages: a brand strong in two
stages and near zero in four lands far below its arithmetic mean. Flooring
each score at 1 keeps a single zero stage from forcing the product to 0.

Bands
-----
  Overall:  ≥80 DOMINANT, ≥60 ESTABLISHED, ≥40 VULNERABLE, ≥20 FRAGILE, else DORMANT
  Stage:    ≥80 Optimal,  ≥60 Healthy,     ≥40 At-Risk,    else Impaired
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Tuple

import structlog

from memory_score.exceptions import InvalidMetricValue
from memory_score.models.enums import (
    OVERALL_STATUS_BANDS,
    STAGE_STATUS_BANDS,
    OverallStatus,
    StageStatus,
)
from memory_score.scoring.utils import geometric_mean, is_number, mean, round_score, to_decimal

logger = structlog.get_logger(__name__)

ATTENTION_THRESHOLD: int = 60   # stages below Healthy are flagged for attention


def classify_overall(score: float) -> OverallStatus:
    """Map an overall score to its status band."""
    for lower, status in OVERALL_STATUS_BANDS:
        if score >= lower:
            return status
    return OverallStatus.DORMANT


def classify_stage(score: float) -> StageStatus:
    """Map a stage score to its status band."""
    for lower, status in STAGE_STATUS_BANDS:
        if score >= lower:
            return status
    return StageStatus.IMPAIRED


def validate_scores(scores: Mapping[str, Any], what: str = "stage score") -> Dict[str, Decimal]:
    """Check a stage id → score mapping and convert it to Decimals.

    Raises:
        InvalidMetricValue: If the mapping is empty or any score is
            non-numeric or outside [0, 100].
    """
    if not isinstance(scores, Mapping) or not scores:
        raise InvalidMetricValue(f"At least one {what} is required", value=scores)
    out: Dict[str, Decimal] = {}
    for stage_id, score in scores.items():
        if not is_number(score) or not 0 <= score <= 100:
            raise InvalidMetricValue(
                f"{what.capitalize()} for '{stage_id}' must be in [0, 100], got {score!r}",
                stage_id=stage_id,
                value=score,
            )
        out[stage_id] = to_decimal(score)
    return out


@dataclass(frozen=True)
class OverallScore:
    """Overall Memory Score and its band."""

    value: int
    status: OverallStatus

    def to_dict(self) -> dict:
        return {"value": self.value, "status": self.status.value}


@dataclass(frozen=True)
class AggregateResult:
    """Aggregation result with audit trail."""

    overall: int
    overall_status: OverallStatus
    geometric_mean: Decimal
    arithmetic_mean: Decimal            # for comparison only; not used in the score
    stage_statuses: Dict[str, StageStatus]
    needs_attention: Tuple[str, ...]    # stages below the attention threshold, input order

    @property
    def overall_score(self) -> OverallScore:
        return OverallScore(self.overall, self.overall_status)

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "overall_status": self.overall_status.value,
            "geometric_mean": float(self.geometric_mean),
            "arithmetic_mean": float(self.arithmetic_mean),
            "stage_statuses": {k: v.value for k, v in self.stage_statuses.items()},
            "needs_attention": list(self.needs_attention),
        }


class Aggregator:
    """Combine stage scores into the overall Memory Score.

    Parameters
    ----------
    attention_threshold:
        Stage scores strictly below this are listed in ``needs_attention``
        (default 60, the lower bound of Healthy).
    """

    def __init__(self, attention_threshold: int = ATTENTION_THRESHOLD) -> None:
        self.attention_threshold = attention_threshold

    def aggregate(self, stage_scores: Mapping[str, Any]) -> AggregateResult:
        """Aggregate stage scores.

        Args:
            stage_scores: Mapping of stage id → score in [0, 100].

        Returns:
            AggregateResult; identical for any ordering of ``stage_scores``
            apart from the order of ``stage_statuses``/``needs_attention``.
        """
        scores = validate_scores(stage_scores)

        geo = geometric_mean(scores.values())
        overall = round_score(geo)

        result = AggregateResult(
            overall=overall,
            overall_status=classify_overall(overall),
            geometric_mean=geo,
            arithmetic_mean=mean(sorted(scores.values())),
            stage_statuses={k: classify_stage(v) for k, v in scores.items()},
            needs_attention=tuple(k for k, v in scores.items() if v < self.attention_threshold),
        )
        logger.info("overall_aggregated", **result.to_dict())
        return result


def overall_score(stage_scores: Mapping[str, Any]) -> OverallScore:
    """Overall score and band for a stage id → score mapping."""
    return Aggregator().aggregate(stage_scores).overall_score
