"""Built-in stage catalogs and sample inputs.

Two calibrations of the same six-stage lifecycle:

DIAGNOSTIC_STAGES
    Every signal is scored against a category benchmark (ratio method).
FRAMEWORK_STAGES
    Each stage is a weighted sum of bound-normalized signals; create and
    retrieve are amplified by how far their lead signal beats the category
    benchmark.
"""
from typing import Dict, Tuple

from memory_score.models.enums import ScoringMethod
from memory_score.models.schema import BenchmarkAmplifier, SignalDefinition, StageDefinition

# ── Stage ids (definition order is the lifecycle order) ──────────────────────
CREATE = "create"
EXPAND = "expand"
STRENGTHEN = "strengthen"
RETRIEVE = "retrieve"
REINSTATE = "reinstate"
DEFEND = "defend"

STAGE_IDS: Tuple[str, ...] = (CREATE, EXPAND, STRENGTHEN, RETRIEVE, REINSTATE, DEFEND)

_COUNT_BOUNDS = (0.0, 15.0)
_DAYS_BOUNDS = (0.0, 365.0)

# Optional per-brand amplifier benchmark passed alongside a stage's signals
CATEGORY_BENCHMARK = "category_benchmark"


DIAGNOSTIC_STAGES: Tuple[StageDefinition, ...] = (
    StageDefinition(CREATE, (
        SignalDefinition("awareness", 65),
        SignalDefinition("consideration", 35),
        SignalDefinition("recall", 25),
    )),
    StageDefinition(EXPAND, (
        SignalDefinition("associations", 8, bounds=_COUNT_BOUNDS),
        SignalDefinition("occasions", 5, bounds=_COUNT_BOUNDS),
        SignalDefinition("cross_category", 30),
    )),
    StageDefinition(STRENGTHEN, (
        SignalDefinition("loyalty", 55),
        SignalDefinition("repeat_purchase", 45),
        SignalDefinition("favourability", 60),
    )),
    StageDefinition(RETRIEVE, (
        SignalDefinition("top_of_mind", 20),
        SignalDefinition("purchase_intent", 40),
        SignalDefinition("pos_recall", 35),
    )),
    StageDefinition(REINSTATE, (
        SignalDefinition("lapse_rate", 25, inverted=True),
        SignalDefinition("time_since_purchase", 60, inverted=True, bounds=_DAYS_BOUNDS),
        SignalDefinition("reengagement", 15),
    )),
    StageDefinition(DEFEND, (
        SignalDefinition("switching", 20, inverted=True),
        SignalDefinition("competitor_strength", 30, inverted=True),
        SignalDefinition("differentiation", 50),
    )),
)


FRAMEWORK_STAGES: Tuple[StageDefinition, ...] = (
    StageDefinition(
        CREATE,
        (
            SignalDefinition("brand_awareness", 0.3),
            SignalDefinition("first_time_consideration", 0.3),
            SignalDefinition("unprompted_recall", 0.4),
        ),
        method=ScoringMethod.WEIGHTED,
        amplifier=BenchmarkAmplifier("brand_awareness", 45, benchmark_key=CATEGORY_BENCHMARK),
    ),
    StageDefinition(
        EXPAND,
        (
            SignalDefinition("brand_associations_count", 0.4, bounds=(0.0, 10.0)),
            SignalDefinition("categories_purchased", 0.3, bounds=(0.0, 5.0)),
            SignalDefinition("usage_occasions", 0.3, bounds=(0.0, 8.0)),
        ),
        method=ScoringMethod.WEIGHTED,
    ),
    StageDefinition(
        STRENGTHEN,
        (
            SignalDefinition("brand_loyalty", 0.3),
            SignalDefinition("repeat_purchase", 0.25),
            SignalDefinition("favourability", 0.25),
            SignalDefinition("prompted_recall", 0.2),
        ),
        method=ScoringMethod.WEIGHTED,
    ),
    StageDefinition(
        RETRIEVE,
        (
            SignalDefinition("top_of_mind_awareness", 0.4),
            SignalDefinition("purchase_intent", 0.35),
            SignalDefinition("spontaneous_recall_pos", 0.25),
        ),
        method=ScoringMethod.WEIGHTED,
        amplifier=BenchmarkAmplifier("top_of_mind_awareness", 22, benchmark_key=CATEGORY_BENCHMARK),
    ),
    StageDefinition(
        REINSTATE,
        (
            SignalDefinition("lapsed_usage", 0.4, inverted=True),
            SignalDefinition("time_since_last_purchase", 0.3, inverted=True, bounds=_DAYS_BOUNDS, normalize=False),
            SignalDefinition("reengagement_response", 0.3),
        ),
        method=ScoringMethod.WEIGHTED,
        # 100 − (0.4·lapsed + 0.3·days) + 0.3·reengagement, with days in raw units
        intercept=30,
    ),
    StageDefinition(
        DEFEND,
        (
            SignalDefinition("switching_behavior", 0.35, inverted=True),
            SignalDefinition("competitor_association_strength", 0.3, inverted=True),
            SignalDefinition("differentiation_score", 0.35),
        ),
        method=ScoringMethod.WEIGHTED,
    ),
)


CATALOGS: Dict[str, Tuple[StageDefinition, ...]] = {
    "diagnostic": DIAGNOSTIC_STAGES,
    "framework": FRAMEWORK_STAGES,
}


# ── Sample brand inputs ───────────────────────────────────────────────────────
SAMPLE_METRICS: Dict[str, Dict[str, float]] = {
    CREATE: {"awareness": 58, "consideration": 32, "recall": 22},
    EXPAND: {"associations": 6, "occasions": 4, "cross_category": 25},
    STRENGTHEN: {"loyalty": 48, "repeat_purchase": 40, "favourability": 55},
    RETRIEVE: {"top_of_mind": 15, "purchase_intent": 35, "pos_recall": 28},
    REINSTATE: {"lapse_rate": 30, "time_since_purchase": 75, "reengagement": 12},
    DEFEND: {"switching": 28, "competitor_strength": 38, "differentiation": 42},
}

SAMPLE_FRAMEWORK_METRICS: Dict[str, Dict[str, float]] = {
    CREATE: {
        "brand_awareness": 50, "first_time_consideration": 30, "unprompted_recall": 20, CATEGORY_BENCHMARK: 45,
    },
    EXPAND: {"brand_associations_count": 5, "categories_purchased": 2, "usage_occasions": 3},
    STRENGTHEN: {"brand_loyalty": 60, "repeat_purchase": 45, "favourability": 55, "prompted_recall": 70},
    RETRIEVE: {
        "top_of_mind_awareness": 15, "purchase_intent": 25, "spontaneous_recall_pos": 20, CATEGORY_BENCHMARK: 22,
    },
    REINSTATE: {"lapsed_usage": 30, "time_since_last_purchase": 60, "reengagement_response": 15},
    DEFEND: {"switching_behavior": 20, "competitor_association_strength": 40, "differentiation_score": 55},
}

SAMPLE_COMPETITOR_SCORES: Dict[str, int] = {
    CREATE: 65,
    EXPAND: 55,
    STRENGTHEN: 60,
    RETRIEVE: 50,
    REINSTATE: 45,
    DEFEND: 58,
}
