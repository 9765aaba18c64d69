"""Stage Scorer: one stage's 0–100 score from its raw metric values.

Benchmark-ratio method
----------------------
  signal = clamp(raw / benchmark × 100)               (regular)
  signal = clamp(benchmark / max(raw, 1) × 100)       (inverted)
  stage  = round(mean(round(signal_i)))

Each signal is rounded half-up before averaging, and the mean is rounded
half-up again.

Weighted method
---------------
  normalized = (raw − min) / (max − min) × 100        (raw as-is when normalize=False)
  normalized = 100 − normalized                       (inverted)
  stage      = round(clamp(Σ weight_i × normalized_i + intercept))

Either method may carry a benchmark amplifier applied before the final
clamp:  × (1 + (raw[amp_key] − amp_benchmark) / 100)
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Tuple

import structlog

from memory_score.exceptions import InvalidMetricValue
from memory_score.models.enums import ScoringMethod
from memory_score.models.schema import SignalDefinition, StageDefinition, validate_stage_definition
from memory_score.scoring.utils import HUNDRED, as_decimal, clamp, is_number, mean, round_score

logger = structlog.get_logger(__name__)

_ONE = Decimal(1)


@dataclass(frozen=True)
class SignalScore:
    """Per-signal audit record."""

    key: str
    raw_value: Decimal
    signal_score: Decimal   # ratio: rounded 0–100; weighted: normalized 0–100
    contribution: Decimal   # share of the combined (pre-amplifier) stage value

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "raw_value": float(self.raw_value),
            "signal_score": float(self.signal_score),
            "contribution": float(self.contribution),
        }


@dataclass(frozen=True)
class StageScoreResult:
    """Stage score with full audit trail."""

    stage_id: str
    score: int
    method: ScoringMethod
    combined: Decimal          # before amplification, clamping and rounding
    amplification: Decimal     # 1 when the stage has no amplifier
    signal_scores: Tuple[SignalScore, ...]

    def to_dict(self) -> dict:
        return {
            "stage_id": self.stage_id,
            "score": self.score,
            "method": self.method.value,
            "combined": float(self.combined),
            "amplification": float(self.amplification),
            "signals": [s.to_dict() for s in self.signal_scores],
        }


def resolve_raw_value(
    stage: StageDefinition,
    signal: SignalDefinition,
    raw_values: Mapping[str, Any],
) -> Decimal:
    """Validate one raw value against its signal definition.

    Raises:
        InvalidMetricValue: If the value is missing, non-numeric, negative
            or outside the signal's declared bounds.
    """
    if signal.key not in raw_values:
        raise InvalidMetricValue(
            f"Missing value for signal '{signal.key}' in stage '{stage.id}'",
            stage_id=stage.id,
            signal_key=signal.key,
        )
    value = raw_values[signal.key]
    if not is_number(value):
        raise InvalidMetricValue(
            f"Signal '{signal.key}' must be a finite number, got {value!r}",
            stage_id=stage.id,
            signal_key=signal.key,
            value=value,
        )
    if value < 0:
        raise InvalidMetricValue(
            f"Signal '{signal.key}' must not be negative, got {value!r}",
            stage_id=stage.id,
            signal_key=signal.key,
            value=value,
        )
    lo, hi = signal.bounds
    if not lo <= value <= hi:
        raise InvalidMetricValue(
            f"Signal '{signal.key}' = {value!r} is outside bounds [{lo}, {hi}]",
            stage_id=stage.id,
            signal_key=signal.key,
            value=value,
        )
    return as_decimal(value)


def resolve_amplifier_benchmark(stage: StageDefinition, raw_values: Mapping[str, Any]) -> Decimal:
    """Per-brand amplifier benchmark from the raw values, else the stage default."""
    amp = stage.amplifier
    if amp.benchmark_key is None or amp.benchmark_key not in raw_values:
        return as_decimal(amp.benchmark)
    value = raw_values[amp.benchmark_key]
    if not is_number(value) or not 0 < value <= 100:
        raise InvalidMetricValue(
            f"Category benchmark '{amp.benchmark_key}' must be in (0, 100], got {value!r}",
            stage_id=stage.id,
            signal_key=amp.benchmark_key,
            value=value,
        )
    return as_decimal(value)


class StageScorer:
    """Compute a stage score from raw metric values and its definition.

    Stateless; a single instance may be shared between threads.
    """

    def calculate(self, stage: StageDefinition, raw_values: Mapping[str, Any]) -> StageScoreResult:
        """Score one stage.

        Args:
            stage: Stage definition (validated on every call).
            raw_values: Mapping of signal key → raw value. Never mutated.

        Returns:
            StageScoreResult with per-signal audit trail.
        """
        validate_stage_definition(stage)
        if not isinstance(raw_values, Mapping):
            raise InvalidMetricValue(
                f"Raw values for stage '{stage.id}' must be a mapping",
                stage_id=stage.id,
                value=raw_values,
            )

        raws = {s.key: resolve_raw_value(stage, s, raw_values) for s in stage.signals}

        known = set(raws)
        if stage.amplifier is not None and stage.amplifier.benchmark_key:
            known.add(stage.amplifier.benchmark_key)
        extra = set(raw_values) - known
        if extra:
            logger.debug("unknown_signals_ignored", stage_id=stage.id, keys=sorted(map(str, extra)))

        if stage.method is ScoringMethod.WEIGHTED:
            signal_scores, combined = self._weighted(stage, raws)
        else:
            signal_scores, combined = self._benchmark_ratio(stage, raws)
        combined += as_decimal(stage.intercept)

        amplification = _ONE
        if stage.amplifier is not None:
            amp_raw = raws[stage.amplifier.signal_key]
            benchmark = resolve_amplifier_benchmark(stage, raw_values)
            amplification = _ONE + (amp_raw - benchmark) / HUNDRED

        result = StageScoreResult(
            stage_id=stage.id,
            score=round_score(clamp(combined * amplification)),
            method=stage.method,
            combined=combined,
            amplification=amplification,
            signal_scores=tuple(signal_scores),
        )
        logger.info("stage_scored", **result.to_dict())
        return result

    # ── methods ──────────────────────────────────────────────────────────────

    @staticmethod
    def _benchmark_ratio(
        stage: StageDefinition, raws: Mapping[str, Decimal]
    ) -> Tuple[list[SignalScore], Decimal]:
        n = Decimal(len(stage.signals))
        scores = []
        for signal in stage.signals:
            raw = raws[signal.key]
            benchmark = as_decimal(signal.benchmark_or_weight)
            if signal.inverted:
                ratio = benchmark / max(raw, _ONE) * HUNDRED
            else:
                ratio = raw / benchmark * HUNDRED
            rounded = Decimal(round_score(clamp(ratio)))
            scores.append(SignalScore(signal.key, raw, rounded, rounded / n))
        # Taken from the integer scores directly, not from the divided shares
        return scores, mean([s.signal_score for s in scores])

    @staticmethod
    def _weighted(
        stage: StageDefinition, raws: Mapping[str, Decimal]
    ) -> Tuple[list[SignalScore], Decimal]:
        scores = []
        for signal in stage.signals:
            raw = raws[signal.key]
            lo, hi = (as_decimal(b) for b in signal.bounds)
            normalized = (raw - lo) / (hi - lo) * HUNDRED if signal.normalize else raw
            if signal.inverted:
                normalized = HUNDRED - normalized
            weight = as_decimal(signal.benchmark_or_weight)
            scores.append(SignalScore(signal.key, raw, normalized, weight * normalized))
        return scores, sum((s.contribution for s in scores), Decimal(0))


_default_scorer = StageScorer()


def score_stage(stage: StageDefinition, raw_values: Mapping[str, Any]) -> int:
    """Score one stage and return the integer 0–100 stage score."""
    return _default_scorer.calculate(stage, raw_values).score
