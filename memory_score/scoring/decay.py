"""Decay Projector: forward projection of the overall score.

Formula
-------
  projected(t) = round( overall × (1 − rate)^t )

The zero-offset point is always present and equals the input score. The
projection flags (but does not reject) any point falling below the
VULNERABLE threshold so the caller can warn about it.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence, Tuple

import structlog

from memory_score.exceptions import InvalidHorizon, InvalidMetricValue
from memory_score.models.enums import VULNERABLE_THRESHOLD
from memory_score.scoring.utils import as_decimal, is_number, round_score

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DecayPoint:
    """Projected score at one offset (time units from now)."""

    offset: int
    projected_score: int

    def to_dict(self) -> dict:
        return {"offset": self.offset, "projected_score": self.projected_score}


@dataclass(frozen=True)
class DecayProjection:
    """Decay projection with threshold crossing."""

    points: Tuple[DecayPoint, ...]
    rate: Decimal
    threshold: int
    below_threshold: bool
    first_breach_offset: Optional[int]   # first horizon offset projected below threshold

    def to_dict(self) -> dict:
        return {
            "points": [p.to_dict() for p in self.points],
            "rate": float(self.rate),
            "threshold": self.threshold,
            "below_threshold": self.below_threshold,
            "first_breach_offset": self.first_breach_offset,
        }


def _validate_score(overall_score: Any) -> int:
    if not is_number(overall_score) or not 0 <= overall_score <= 100 or overall_score != int(overall_score):
        raise InvalidMetricValue(
            f"Overall score must be an integer in [0, 100], got {overall_score!r}",
            value=overall_score,
        )
    return int(overall_score)


def _validate_rate(rate: Any) -> Decimal:
    if not is_number(rate) or not 0 <= rate < 1:
        raise InvalidHorizon(f"Decay rate must be in [0, 1), got {rate!r}")
    return as_decimal(rate)


def _validate_horizon(horizon: Sequence[Any]) -> Tuple[int, ...]:
    offsets = tuple(horizon) if horizon is not None else ()
    if not offsets:
        raise InvalidHorizon("Horizon must contain at least one offset")
    for offset in offsets:
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise InvalidHorizon(f"Horizon offsets must be integers, got {offset!r}")
        if offset < 0:
            raise InvalidHorizon(f"Horizon offsets must be non-negative, got {offset}")
    for prev, cur in zip(offsets, offsets[1:]):
        if cur <= prev:
            raise InvalidHorizon(f"Horizon must be strictly ascending, got {list(offsets)}")
    if offsets[0] != 0:
        offsets = (0,) + offsets
    return offsets


def project_score(overall_score: int, rate: Decimal, offset: int) -> int:
    """Projected score after ``offset`` periods; exact at offset 0."""
    if offset == 0:
        return overall_score
    return round_score(Decimal(overall_score) * (Decimal(1) - rate) ** offset)


class DecayProjector:
    """Project the overall score forward under constant multiplicative decay.

    Parameters
    ----------
    threshold:
        Score below which a point is flagged (default 40, VULNERABLE).
    """

    def __init__(self, threshold: int = VULNERABLE_THRESHOLD) -> None:
        self.threshold = threshold

    def project(self, overall_score: int, horizon: Sequence[int], rate: float) -> DecayProjection:
        """Project ``overall_score`` over ``horizon`` offsets.

        Args:
            overall_score: Integer overall score in [0, 100].
            horizon: Strictly ascending, non-negative integer offsets. 0 is
                prepended when absent.
            rate: Decline per period in [0, 1).

        Raises:
            InvalidHorizon: On a malformed horizon or rate.
            InvalidMetricValue: If ``overall_score`` is not an integer in [0, 100].
        """
        score = _validate_score(overall_score)
        rate_dec = _validate_rate(rate)
        offsets = _validate_horizon(horizon)

        points = tuple(DecayPoint(t, project_score(score, rate_dec, t)) for t in offsets)
        breach = next((p.offset for p in points if p.projected_score < self.threshold), None)

        result = DecayProjection(
            points=points,
            rate=rate_dec,
            threshold=self.threshold,
            below_threshold=breach is not None,
            first_breach_offset=breach,
        )
        logger.info("decay_projected", overall_score=score, **result.to_dict())
        return result

    def periods_until_below(self, overall_score: int, rate: float, limit: int = 520) -> Optional[int]:
        """First whole period at which the projection drops below the threshold.

        Returns 0 if the score is already below, or None if it stays at or
        above the threshold for ``limit`` periods (always the case at rate 0).
        """
        score = _validate_score(overall_score)
        rate_dec = _validate_rate(rate)
        for t in range(limit + 1):
            if project_score(score, rate_dec, t) < self.threshold:
                return t
        return None


def project_decay(overall_score: int, horizon: Sequence[int], rate: float) -> Tuple[DecayPoint, ...]:
    """Projected points only, using the VULNERABLE threshold."""
    return DecayProjector().project(overall_score, horizon, rate).points
