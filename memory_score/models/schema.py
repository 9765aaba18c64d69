"""Metric schema: the scoring-relevant definition of each stage.

Only fields that influence a score live here (benchmark or weight,
inversion, bounds, amplification). Labels, colors and narrative copy are
kept in ``memory_score.models.presentation``, keyed by the same stage id.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from memory_score.exceptions import InvalidStageDefinition
from memory_score.models.enums import ScoringMethod
from memory_score.scoring.utils import as_decimal, is_number

PERCENT_BOUNDS: Tuple[float, float] = (0.0, 100.0)

# Weights given as floats (e.g. thirds) may miss 1 by float noise
_WEIGHT_TOLERANCE = Decimal("1e-9")


@dataclass(frozen=True)
class SignalDefinition:
    """One raw measured input feeding a stage.

    ``benchmark_or_weight`` is the reference value under
    ``ScoringMethod.BENCHMARK_RATIO`` and the signal's weight under
    ``ScoringMethod.WEIGHTED``.

    ``normalize`` only matters under ``WEIGHTED``: when False the raw value
    enters the weighted sum in its own units instead of being rescaled to
    0–100 by ``bounds`` (the bounds still validate the input).
    """

    key: str
    benchmark_or_weight: float
    inverted: bool = False
    bounds: Tuple[float, float] = PERCENT_BOUNDS
    normalize: bool = True


@dataclass(frozen=True)
class BenchmarkAmplifier:
    """Scale a stage by how far one signal sits above or below a benchmark.

    factor = 1 + (raw[signal_key] - benchmark) / 100

    When ``benchmark_key`` is set and present in the stage's raw values, that
    value replaces ``benchmark`` so callers can supply a per-brand category
    benchmark alongside the signals.
    """

    signal_key: str
    benchmark: float
    benchmark_key: Optional[str] = None


@dataclass(frozen=True)
class StageDefinition:
    """One phase of the brand-memory lifecycle and its signals.

    ``intercept`` is added to the combined value before amplification and
    clamping.
    """

    id: str
    signals: Tuple[SignalDefinition, ...]
    method: ScoringMethod = ScoringMethod.BENCHMARK_RATIO
    amplifier: Optional[BenchmarkAmplifier] = None
    intercept: float = 0.0

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "signals", tuple(self.signals))

    @property
    def signal_keys(self) -> Tuple[str, ...]:
        return tuple(s.key for s in self.signals)

    def signal(self, key: str) -> Optional[SignalDefinition]:
        for s in self.signals:
            if s.key == key:
                return s
        return None


def validate_stage_definition(stage: StageDefinition) -> None:
    """Reject a malformed stage before it can produce a misleading score.

    Raises:
        InvalidStageDefinition: On empty id or signal set, duplicate keys,
            non-positive benchmark/weight, bad bounds, weights that do not
            sum to 1 (WEIGHTED), a non-finite intercept, or a bad amplifier.
    """
    if not isinstance(stage.id, str) or not stage.id.strip():
        raise InvalidStageDefinition("Stage id must be a non-empty string")
    if not isinstance(stage.method, ScoringMethod):
        raise InvalidStageDefinition(
            f"Unknown scoring method {stage.method!r}", stage_id=stage.id
        )
    if not stage.signals:
        raise InvalidStageDefinition("Stage has no signals", stage_id=stage.id)

    seen: set[str] = set()
    for signal in stage.signals:
        if not isinstance(signal.key, str) or not signal.key:
            raise InvalidStageDefinition("Signal key must be a non-empty string", stage_id=stage.id)
        if signal.key in seen:
            raise InvalidStageDefinition(
                f"Duplicate signal key '{signal.key}'",
                stage_id=stage.id,
                signal_key=signal.key,
            )
        seen.add(signal.key)

        if not is_number(signal.benchmark_or_weight) or signal.benchmark_or_weight <= 0:
            raise InvalidStageDefinition(
                f"Benchmark/weight must be > 0, got {signal.benchmark_or_weight!r}",
                stage_id=stage.id,
                signal_key=signal.key,
            )

        if len(signal.bounds) != 2 or not all(is_number(b) for b in signal.bounds):
            raise InvalidStageDefinition(
                f"Bounds must be a numeric (min, max) pair, got {signal.bounds!r}",
                stage_id=stage.id,
                signal_key=signal.key,
            )
        lo, hi = signal.bounds
        if lo < 0 or lo >= hi:
            raise InvalidStageDefinition(
                f"Bounds must satisfy 0 <= min < max, got {signal.bounds!r}",
                stage_id=stage.id,
                signal_key=signal.key,
            )

    if stage.method is ScoringMethod.WEIGHTED:
        total = sum((as_decimal(s.benchmark_or_weight) for s in stage.signals), Decimal(0))
        if abs(total - 1) > _WEIGHT_TOLERANCE:
            raise InvalidStageDefinition(
                f"Weights must sum to 1, got {total}", stage_id=stage.id
            )

    if not is_number(stage.intercept):
        raise InvalidStageDefinition(
            f"Intercept must be a finite number, got {stage.intercept!r}", stage_id=stage.id
        )

    amp = stage.amplifier
    if amp is not None:
        target = stage.signal(amp.signal_key)
        if target is None:
            raise InvalidStageDefinition(
                f"Amplifier references unknown signal '{amp.signal_key}'",
                stage_id=stage.id,
                signal_key=amp.signal_key,
            )
        if target.inverted:
            raise InvalidStageDefinition(
                "Amplifier signal must not be inverted",
                stage_id=stage.id,
                signal_key=amp.signal_key,
            )
        if not is_number(amp.benchmark) or not 0 < amp.benchmark <= 100:
            raise InvalidStageDefinition(
                f"Amplifier benchmark must be in (0, 100], got {amp.benchmark!r}",
                stage_id=stage.id,
                signal_key=amp.signal_key,
            )
        if amp.benchmark_key is not None:
            if not isinstance(amp.benchmark_key, str) or not amp.benchmark_key:
                raise InvalidStageDefinition(
                    "Amplifier benchmark key must be a non-empty string", stage_id=stage.id
                )
            if amp.benchmark_key in seen:
                raise InvalidStageDefinition(
                    f"Amplifier benchmark key '{amp.benchmark_key}' collides with a signal",
                    stage_id=stage.id,
                    signal_key=amp.benchmark_key,
                )


def validate_stage_set(stages: Iterable[StageDefinition]) -> Tuple[StageDefinition, ...]:
    """Validate every stage and the uniqueness of their ids."""
    stages = tuple(stages)
    if not stages:
        raise InvalidStageDefinition("At least one stage is required")
    ids: set[str] = set()
    for stage in stages:
        validate_stage_definition(stage)
        if stage.id in ids:
            raise InvalidStageDefinition(f"Duplicate stage id '{stage.id}'", stage_id=stage.id)
        ids.add(stage.id)
    return stages
