"""Presentation-only stage metadata, keyed by stage id.

Nothing in ``memory_score.scoring`` reads this module: labels, colors and
copy can change freely without touching a single score.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from memory_score.models.catalog import CREATE, DEFEND, EXPAND, REINSTATE, RETRIEVE, STRENGTHEN


@dataclass(frozen=True)
class StagePresentation:
    """Display copy for one stage."""

    name: str
    short_name: str
    hex_color: str
    cognitive_process: str
    interventions: Tuple[str, ...]


STAGE_PRESENTATION: Dict[str, StagePresentation] = {
    CREATE: StagePresentation(
        name="CREATE MEMORY",
        short_name="Create",
        hex_color="#10b981",
        cognitive_process="Initial encoding; formation of brand-category association; entry into awareness set",
        interventions=(
            "Increase reach among non-aware segments",
            "Deploy high-attention, emotionally distinctive creative",
            "Establish clear category membership cues",
        ),
    ),
    EXPAND: StagePresentation(
        name="EXPAND MEMORY",
        short_name="Expand",
        hex_color="#3b82f6",
        cognitive_process="Spreading activation; formation of multiple retrieval pathways; CEP linkage",
        interventions=(
            "Develop campaigns targeting new Category Entry Points",
            "Create occasion-specific messaging variants",
            "Expand brand narrative beyond core positioning",
        ),
    ),
    STRENGTHEN: StagePresentation(
        name="STRENGTHEN MEMORY",
        short_name="Strengthen",
        hex_color="#8b5cf6",
        cognitive_process="Memory consolidation; trace reinforcement; affective encoding maintenance",
        interventions=(
            "Maintain continuous media presence (avoid dark periods)",
            "Deploy loyalty-focused messaging to existing customers",
            "Refresh creative while maintaining brand codes",
        ),
    ),
    RETRIEVE: StagePresentation(
        name="RETRIEVE MEMORY",
        short_name="Retrieve",
        hex_color="#f59e0b",
        cognitive_process="Cue-dependent retrieval; retrieval fluency; mental availability activation",
        interventions=(
            "Increase recency of exposure (continuous presence)",
            "Deploy point-of-sale and contextual triggers",
            "Strengthen distinctive brand assets as retrieval cues",
        ),
    ),
    REINSTATE: StagePresentation(
        name="REINSTATE MEMORY",
        short_name="Reinstate",
        hex_color="#f43f5e",
        cognitive_process="Memory reactivation; context reinstatement; retrieval pathway restoration",
        interventions=(
            "Develop win-back campaigns with memory reinstatement cues",
            "Use personalized retargeting referencing past behavior",
            "Recreate original purchase context in messaging",
        ),
    ),
    DEFEND: StagePresentation(
        name="DEFEND MEMORY",
        short_name="Defend",
        hex_color="#64748b",
        cognitive_process="Competitive interference defense; memory inhibition resistance; differentiation",
        interventions=(
            "Audit competitor messaging and ownership",
            "Strengthen distinctive positioning",
            "Increase SOV during competitive heavy-ups",
        ),
    ),
}
