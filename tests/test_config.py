# tests/test_config.py

"""
Configuration Tests - weight validation and policy defaults
"""

import pytest
from pydantic import ValidationError

from competency.config import Settings, get_settings


class TestSettings:

    def test_defaults_valid(self):
        settings = Settings()
        assert abs(sum(settings.skill_weights.values()) - 1.0) < 1e-9
        assert abs(sum(settings.rd_category_weights.values()) - 1.0) < 1e-9

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_default_language_table(self):
        settings = Settings()
        assert settings.LANGUAGE_WEIGHTS["English"] == 1.0
        assert settings.LANGUAGE_WEIGHTS["Korean"] == 0.3
        assert settings.DEFAULT_LANGUAGE_WEIGHT == 0.6

    def test_default_membership_terms(self):
        settings = Settings()
        assert "기술연구소" in settings.RD_DEPARTMENT_TERMS
        assert settings.RD_DEPARTMENT_CODES == ["RD"]

    def test_skill_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="Skill weights"):
            Settings(W_EXPERIENCE=0.5)

    def test_rd_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="R&D category weights"):
            Settings(W_RD_ACHIEVEMENT=0.5)

    def test_weight_bounds(self):
        with pytest.raises(ValidationError):
            Settings(W_TECHNICAL=1.5)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("W_EXPERIENCE", "0.30")
        monkeypatch.setenv("W_SOFT_SKILL", "0.0")
        settings = Settings()
        assert settings.skill_weights["experience"] == 0.30
        assert settings.skill_weights["soft_skill"] == 0.0

    def test_production_rejects_debug(self):
        with pytest.raises(ValidationError, match="DEBUG"):
            Settings(APP_ENV="production", DEBUG=True)
