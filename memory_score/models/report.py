"""Diagnostic report Pydantic models handed to the presentation layer."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from memory_score.models.enums import OverallStatus, ReferenceKind, StageStatus


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class StageScoreOut(_Frozen):
    """One stage's score and band."""
    stage_id: str
    score: int = Field(..., ge=0, le=100)
    status: StageStatus


class OverallScoreOut(_Frozen):
    """Overall Memory Score."""
    value: int = Field(..., ge=0, le=100)
    status: OverallStatus
    arithmetic_mean: float = Field(..., description="Unpenalized mean, for context only")


class DecayPointOut(_Frozen):
    """One projected point."""
    offset: int = Field(..., ge=0)
    projected_score: int = Field(..., ge=0, le=100)


class DecayOut(_Frozen):
    """Decay projection and threshold warning."""
    rate: float = Field(..., ge=0, lt=1)
    threshold: int
    points: List[DecayPointOut]
    below_threshold: bool
    first_breach_offset: Optional[int] = None
    periods_until_below: Optional[int] = Field(
        default=None,
        description="First whole period projected below the threshold, if within the search limit",
    )


class GapOut(_Frozen):
    """Brand vs reference for one stage."""
    stage_id: str
    own_score: int
    reference_score: int
    gap: int


class ComparisonOut(_Frozen):
    """Gap analysis against one reference vector."""
    reference_kind: ReferenceKind
    reference_label: str
    gaps: List[GapOut]
    advantages: List[str]
    vulnerabilities: List[str]
    total_gap: int


class DiagnosticReport(_Frozen):
    """Everything a dashboard needs from one set of metric inputs."""
    stages: List[StageScoreOut]
    overall: OverallScoreOut
    decay: DecayOut
    comparison: Optional[ComparisonOut] = None
    priority_stages: List[str]
    needs_attention: List[str]

    @property
    def stage_scores(self) -> Dict[str, int]:
        return {s.stage_id: s.score for s in self.stages}
