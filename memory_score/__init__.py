"""Memory Score brand diagnostic engine.

Maps raw brand-tracking metrics to six memory-stage scores, then derives the
overall Memory Score, a decay projection and a competitive gap analysis:
  raw metrics → Stage Scores → Overall (geometric mean) → Decay / Gaps
"""
from memory_score.exceptions import (
    InvalidHorizon,
    InvalidMetricValue,
    InvalidStageDefinition,
    MemoryScoreError,
    MissingReferenceStage,
)
from memory_score.scoring.engine import MemoryScoreEngine

__version__ = "1.0.0"

__all__ = [
    "MemoryScoreEngine",
    "MemoryScoreError",
    "InvalidMetricValue",
    "InvalidStageDefinition",
    "InvalidHorizon",
    "MissingReferenceStage",
]
