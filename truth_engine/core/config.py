"""Engine configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Liability weight presets. Both sets appear in case material; neither is canonical.
LIABILITY_WEIGHT_PRESETS: dict[str, dict[str, float]] = {
    "standard": {
        "contradiction": 0.30,
        "behavioral": 0.20,
        "evidence": 0.15,
        "consistency": 0.20,
        "causal": 0.15,
    },
    "behavioral": {
        "contradiction": 0.30,
        "behavioral": 0.25,
        "evidence": 0.15,
        "consistency": 0.15,
        "causal": 0.15,
    },
}


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Truth Engine"
    debug: bool = False

    # Embedding
    embedding_dimensions: int = 256       # Hash buckets per vector
    embedding_trigram_weight: float = 0.5  # Weight of each character trigram

    # Similarity thresholds (cosine, 0-1)
    similarity_related_threshold: float = 0.25  # Below this statements are unrelated
    similarity_drift_upper: float = 0.45        # [related, drift_upper) = semantic drift band
    similarity_high_threshold: float = 0.70     # Near-duplicate / find_similar default
    find_similar_default_limit: int = 10

    # Entity-level detection
    entity_overlap_threshold: float = 0.3       # Jaccard word overlap gate
    financial_drift_min_percent: float = 10.0   # Changes above this are flagged

    # Timeline detection
    impossible_sequence_minutes: int = 5

    # Behavioral detection
    ghosting_gap_days: int = 7
    withdrawal_rate_ratio: float = 0.3          # Second-half rate below ratio * first-half rate
    withdrawal_min_events: int = 5
    delayed_response_days: int = 3

    # Liability scoring
    liability_weight_preset: Literal["standard", "behavioral"] = "standard"
    liability_weight_contradiction: float | None = None  # Overrides preset when set
    liability_weight_behavioral: float | None = None
    liability_weight_evidence: float | None = None
    liability_weight_consistency: float | None = None
    liability_weight_causal: float | None = None

    # Orchestrator
    detection_max_workers: int = 1  # >1 runs contradiction passes on a thread pool

    @model_validator(mode="after")
    def _check_similarity_bands(self) -> "Settings":
        if not (
            0.0
            <= self.similarity_related_threshold
            < self.similarity_drift_upper
            <= self.similarity_high_threshold
            <= 1.0
        ):
            raise ValueError(
                "similarity thresholds must satisfy 0 <= related < drift_upper <= high <= 1"
            )
        return self

    @property
    def liability_weights(self) -> dict[str, float]:
        """Resolve the active liability weights (preset plus explicit overrides)."""
        weights = dict(LIABILITY_WEIGHT_PRESETS[self.liability_weight_preset])
        overrides = {
            "contradiction": self.liability_weight_contradiction,
            "behavioral": self.liability_weight_behavioral,
            "evidence": self.liability_weight_evidence,
            "consistency": self.liability_weight_consistency,
            "causal": self.liability_weight_causal,
        }
        for name, value in overrides.items():
            if value is not None:
                weights[name] = value
        return weights


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
