"""Error taxonomy for the Memory Score engine.

Every failure is a local validation failure surfaced synchronously:

  InvalidMetricValue     - bad raw input (negative, non-numeric, out of bounds)
  InvalidStageDefinition - malformed configuration (benchmark, keys, bounds)
  InvalidHorizon         - malformed decay request
  MissingReferenceStage  - comparison vector does not cover a scored stage

Nothing here is transient, so nothing is retryable.
"""
from typing import Any, Optional


class MemoryScoreError(ValueError):
    """Base class for all engine validation failures."""


class InvalidMetricValue(MemoryScoreError):
    """A raw metric (or a score fed back in) is not usable."""

    def __init__(
        self,
        message: str,
        stage_id: Optional[str] = None,
        signal_key: Optional[str] = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.stage_id = stage_id
        self.signal_key = signal_key
        self.value = value


class InvalidStageDefinition(MemoryScoreError):
    """A stage or signal definition is malformed and must not be scored."""

    def __init__(
        self,
        message: str,
        stage_id: Optional[str] = None,
        signal_key: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.stage_id = stage_id
        self.signal_key = signal_key


class InvalidHorizon(MemoryScoreError):
    """Decay horizon or rate is malformed."""


class MissingReferenceStage(MemoryScoreError):
    """The reference vector omits a stage present in the brand's scores."""

    def __init__(self, stage_id: str) -> None:
        super().__init__(f"Reference vector has no score for stage '{stage_id}'")
        self.stage_id = stage_id
