"""Pytest fixtures and configuration."""
import copy
import logging

import pytest
import structlog

from memory_score.config import Settings
from memory_score.models.catalog import (
    DIAGNOSTIC_STAGES,
    SAMPLE_COMPETITOR_SCORES,
    SAMPLE_METRICS,
)
from memory_score.models.schema import SignalDefinition, StageDefinition
from memory_score.scoring.engine import MemoryScoreEngine

# Keep per-calculation audit events out of test output
structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))


# Stage scores of SAMPLE_METRICS under DIAGNOSTIC_STAGES
SAMPLE_STAGE_SCORES = {
    "create": 89,
    "expand": 79,
    "strengthen": 89,
    "retrieve": 81,
    "reinstate": 81,
    "defend": 78,
}


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def engine(settings):
    """Engine over the diagnostic catalog."""
    return MemoryScoreEngine(stages=DIAGNOSTIC_STAGES, settings=settings)


@pytest.fixture
def sample_metrics():
    """Fresh copy of the sample brand's raw metrics."""
    return copy.deepcopy(SAMPLE_METRICS)


@pytest.fixture
def sample_stage_scores():
    return dict(SAMPLE_STAGE_SCORES)


@pytest.fixture
def competitor_scores():
    return dict(SAMPLE_COMPETITOR_SCORES)


@pytest.fixture
def create_stage():
    """Create stage from the diagnostic catalog."""
    return DIAGNOSTIC_STAGES[0]


@pytest.fixture
def lapse_stage():
    """Single inverted signal."""
    return StageDefinition("reinstate", (SignalDefinition("lapseRate", 25, inverted=True),))
