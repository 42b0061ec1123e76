"""Liability scoring models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Tolerance when checking that weights sum to 1.0
WEIGHT_SUM_TOLERANCE = 1e-6


class LiabilityLevel(str, Enum):
    """Banding of the total liability percentage."""

    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LiabilityWeights(BaseModel):
    """Weights of the five liability sub-scores. Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    contradiction: float = Field(..., ge=0.0, le=1.0)
    behavioral: float = Field(..., ge=0.0, le=1.0)
    evidence: float = Field(..., ge=0.0, le=1.0)
    consistency: float = Field(..., ge=0.0, le=1.0)
    causal: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_sum(self) -> "LiabilityWeights":
        total = (
            self.contradiction
            + self.behavioral
            + self.evidence
            + self.consistency
            + self.causal
        )
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"liability weights must sum to 1.0, got {total:.6f}")
        return self


class LiabilityEntry(BaseModel):
    """Liability breakdown for one actor."""

    actor_key: str
    display_name: str
    contradiction_score: float = Field(..., ge=0.0, le=1.0)
    behavioral_score: float = Field(..., ge=0.0, le=1.0)
    evidence_score: float = Field(..., ge=0.0, le=1.0)
    consistency_score: float = Field(..., ge=0.0, le=1.0)
    causal_score: float = Field(..., ge=0.0, le=1.0)
    total: float = Field(..., ge=0.0, le=100.0, description="Weighted percentage")
    level: LiabilityLevel
    reasons: list[str] = Field(default_factory=list)
