"""
Tests for application settings.
"""

from pathlib import Path

import pytest

from inspomatch.config import AppSettings, EmbedderSettings, ScoringSettings, VectorStoreSettings


class TestDefaults:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.embedder.dim == 1408
        assert settings.vector_store.dim == 1408
        assert settings.scoring.min_score == 40
        assert settings.scoring.diversity_boost is True
        assert settings.scoring.vector_weight >= settings.scoring.tag_weight
        assert settings.search.max_results == 20


class TestValidation:
    def test_tag_weight_cannot_dominate(self):
        with pytest.raises(ValueError):
            ScoringSettings(vector_weight=0.2, tag_weight=0.5)

    def test_weights_cannot_both_be_zero(self):
        with pytest.raises(ValueError):
            ScoringSettings(vector_weight=0.0, tag_weight=0.0)

    def test_min_score_bounds(self):
        with pytest.raises(ValueError):
            ScoringSettings(min_score=101)

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError):
            AppSettings(embedder=EmbedderSettings(dim=512), vector_store=VectorStoreSettings(dim=1408))


class TestFromEnv:
    def test_no_overrides(self):
        assert AppSettings.from_env({}) == AppSettings()

    def test_overrides(self):
        settings = AppSettings.from_env(
            {
                "INSPOMATCH_LOG_LEVEL": "debug",
                "INSPOMATCH_INDEX_PATH": "/tmp/idx",
                "INSPOMATCH_MIN_SCORE": "55",
                "INSPOMATCH_DIVERSITY_BOOST": "false",
                "INSPOMATCH_MAX_RESULTS": "5",
            }
        )
        assert settings.log_level == "DEBUG"
        assert settings.vector_store.index_path == Path("/tmp/idx")
        assert settings.scoring.min_score == 55
        assert settings.scoring.diversity_boost is False
        assert settings.search.max_results == 5

    def test_invalid_override_rejected(self):
        with pytest.raises(ValueError):
            AppSettings.from_env({"INSPOMATCH_MIN_SCORE": "250"})
