"""Tests for Settings."""
import pytest
from pydantic import ValidationError

from memory_score.config import Settings, get_settings


class TestSettings:

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.decay_rate == 0.05
        assert s.decay_horizon == [0, 4, 8, 12, 16]
        assert s.vulnerable_threshold == 40
        assert s.attention_threshold == 60
        assert s.flat_benchmark == 60
        assert s.priority_limit == 3
        assert s.stage_catalog == "diagnostic"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MEMORY_SCORE_FLAT_BENCHMARK", "55")
        monkeypatch.setenv("MEMORY_SCORE_STAGE_CATALOG", "framework")
        s = Settings(_env_file=None)
        assert s.flat_benchmark == 55
        assert s.stage_catalog == "framework"

    @pytest.mark.parametrize(
        "field,value",
        [("decay_rate", 1.0), ("decay_rate", -0.1), ("vulnerable_threshold", 101),
         ("stage_catalog", "unknown"), ("priority_limit", 0)],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
