"""Enumeration types for the Memory Score engine."""
from enum import Enum


class ScoringMethod(str, Enum):
    """How a stage combines its signals into one score."""
    BENCHMARK_RATIO = "benchmark_ratio"  # mean of per-signal ratios to benchmark
    WEIGHTED = "weighted"  # weighted sum of bound-normalized signals


class OverallStatus(str, Enum):
    """Status bands for the overall Memory Score."""
    DOMINANT = "DOMINANT"
    ESTABLISHED = "ESTABLISHED"
    VULNERABLE = "VULNERABLE"
    FRAGILE = "FRAGILE"
    DORMANT = "DORMANT"


class StageStatus(str, Enum):
    """Status bands for a single stage score."""
    OPTIMAL = "Optimal"
    HEALTHY = "Healthy"
    AT_RISK = "At-Risk"
    IMPAIRED = "Impaired"


class ReferenceKind(str, Enum):
    """What a comparison vector represents."""
    COMPETITOR = "competitor"
    BENCHMARK = "benchmark"


# Lower bounds, highest band first; anything below the last bound is the floor band
OVERALL_STATUS_BANDS: tuple[tuple[int, OverallStatus], ...] = (
    (80, OverallStatus.DOMINANT),
    (60, OverallStatus.ESTABLISHED),
    (40, OverallStatus.VULNERABLE),
    (20, OverallStatus.FRAGILE),
)

STAGE_STATUS_BANDS: tuple[tuple[int, StageStatus], ...] = (
    (80, StageStatus.OPTIMAL),
    (60, StageStatus.HEALTHY),
    (40, StageStatus.AT_RISK),
)

# Score below which the overall brand memory is considered vulnerable
VULNERABLE_THRESHOLD: int = 40
