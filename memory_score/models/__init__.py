"""Schema, catalog and report models for the Memory Score engine."""

# Enums
from memory_score.models.enums import (
    OverallStatus,
    ReferenceKind,
    ScoringMethod,
    StageStatus,
    VULNERABLE_THRESHOLD,
)

# Metric schema
from memory_score.models.schema import (
    BenchmarkAmplifier,
    SignalDefinition,
    StageDefinition,
    validate_stage_definition,
    validate_stage_set,
)

# Built-in catalogs
from memory_score.models.catalog import (
    CATALOGS,
    CATEGORY_BENCHMARK,
    DIAGNOSTIC_STAGES,
    FRAMEWORK_STAGES,
    SAMPLE_COMPETITOR_SCORES,
    SAMPLE_METRICS,
    STAGE_IDS,
)

# Report
from memory_score.models.report import (
    ComparisonOut,
    DecayOut,
    DecayPointOut,
    DiagnosticReport,
    GapOut,
    OverallScoreOut,
    StageScoreOut,
)

__all__ = [
    # Enums
    "OverallStatus",
    "ReferenceKind",
    "ScoringMethod",
    "StageStatus",
    "VULNERABLE_THRESHOLD",
    # Schema
    "BenchmarkAmplifier",
    "SignalDefinition",
    "StageDefinition",
    "validate_stage_definition",
    "validate_stage_set",
    # Catalogs
    "CATALOGS",
    "CATEGORY_BENCHMARK",
    "DIAGNOSTIC_STAGES",
    "FRAMEWORK_STAGES",
    "SAMPLE_COMPETITOR_SCORES",
    "SAMPLE_METRICS",
    "STAGE_IDS",
    # Report
    "ComparisonOut",
    "DecayOut",
    "DecayPointOut",
    "DiagnosticReport",
    "GapOut",
    "OverallScoreOut",
    "StageScoreOut",
]
