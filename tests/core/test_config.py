"""Tests for engine configuration.

Tests cover:
- Default thresholds
- Similarity band validation
- Liability weight presets and overrides
- Cached settings accessor
"""

import pytest
from pydantic import ValidationError

from truth_engine.core.config import LIABILITY_WEIGHT_PRESETS, Settings, get_settings


class TestSettingsDefaults:
    """Tests for default values."""

    def test_similarity_defaults(self) -> None:
        """Should ship the documented similarity bands."""
        settings = Settings(_env_file=None)

        assert settings.similarity_related_threshold == 0.25
        assert settings.similarity_drift_upper == 0.45
        assert settings.similarity_high_threshold == 0.70

    def test_detection_defaults(self) -> None:
        """Should ship the documented detection thresholds."""
        settings = Settings(_env_file=None)

        assert settings.entity_overlap_threshold == 0.3
        assert settings.financial_drift_min_percent == 10.0
        assert settings.impossible_sequence_minutes == 5
        assert settings.ghosting_gap_days == 7
        assert settings.withdrawal_rate_ratio == 0.3
        assert settings.withdrawal_min_events == 5
        assert settings.delayed_response_days == 3
        assert settings.detection_max_workers == 1

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read values from environment variables."""
        monkeypatch.setenv("GHOSTING_GAP_DAYS", "14")

        settings = Settings(_env_file=None)

        assert settings.ghosting_gap_days == 14


class TestSimilarityBands:
    """Tests for similarity threshold validation."""

    def test_related_must_be_below_drift_upper(self) -> None:
        """Should reject related >= drift_upper."""
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                similarity_related_threshold=0.5,
                similarity_drift_upper=0.4,
            )

    def test_drift_upper_may_equal_high(self) -> None:
        """Should accept drift_upper == high."""
        settings = Settings(
            _env_file=None,
            similarity_drift_upper=0.7,
            similarity_high_threshold=0.7,
        )

        assert settings.similarity_drift_upper == settings.similarity_high_threshold


class TestLiabilityWeights:
    """Tests for liability weight resolution."""

    def test_standard_preset_is_default(self) -> None:
        """Should resolve the standard preset by default."""
        settings = Settings(_env_file=None)

        assert settings.liability_weights == LIABILITY_WEIGHT_PRESETS["standard"]

    def test_behavioral_preset(self) -> None:
        """Should resolve the behavioral preset."""
        settings = Settings(_env_file=None, liability_weight_preset="behavioral")

        assert settings.liability_weights["behavioral"] == 0.25
        assert settings.liability_weights["consistency"] == 0.15

    def test_explicit_override(self) -> None:
        """Should replace a single preset weight with an explicit value."""
        settings = Settings(_env_file=None, liability_weight_causal=0.5)

        weights = settings.liability_weights

        assert weights["causal"] == 0.5
        assert weights["contradiction"] == 0.30

    def test_presets_sum_to_one(self) -> None:
        """Should keep every preset normalized."""
        for weights in LIABILITY_WEIGHT_PRESETS.values():
            assert sum(weights.values()) == pytest.approx(1.0)


class TestGetSettings:
    """Tests for the cached accessor."""

    def test_returns_cached_instance(self) -> None:
        """Should return the same instance on every call."""
        assert get_settings() is get_settings()
