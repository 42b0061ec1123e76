"""Behavioral pattern models.

Each detected pattern carries a typed evidence payload. The payload is a
closed tagged union keyed on ``kind`` so downstream consumers can switch on it
without inspecting loose dictionaries.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

# =============================================================================
# Enums
# =============================================================================


class BehaviorType(str, Enum):
    """Behavioral pattern types."""

    # Keyword families
    GASLIGHTING = "gaslighting"
    DEFLECTION = "deflection"
    PRESSURE_TACTICS = "pressure_tactics"
    FINANCIAL_MANIPULATION = "financial_manipulation"
    EMOTIONAL_MANIPULATION = "emotional_manipulation"
    OVER_EXPLAINING = "over_explaining"
    BLAME_SHIFTING = "blame_shifting"
    PASSIVE_ADMISSION = "passive_admission"
    SLIP_UP_ADMISSION = "slip_up_admission"
    STRESS_MARKERS = "stress_markers"
    DEFENSIVE_LANGUAGE = "defensive_language"
    AVOIDANCE = "avoidance"
    # Timeline families
    GHOSTING = "ghosting"
    SUDDEN_WITHDRAWAL = "sudden_withdrawal"
    DELAYED_RESPONSE = "delayed_response"


class PatternSeverity(str, Enum):
    """Severity of a detected behavioral pattern."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Confidence attached to each severity level
SEVERITY_CONFIDENCE: dict[PatternSeverity, float] = {
    PatternSeverity.LOW: 0.5,
    PatternSeverity.MEDIUM: 0.7,
    PatternSeverity.HIGH: 0.85,
    PatternSeverity.CRITICAL: 0.95,
}


# =============================================================================
# Evidence Payloads
# =============================================================================


class KeywordEvidence(BaseModel):
    """Phrases matched in the actor's collected text."""

    kind: Literal["keyword"] = "keyword"
    matched_phrases: list[str] = Field(default_factory=list)
    sentence_count: int = Field(..., ge=0)


class GapEvidence(BaseModel):
    """Communication gaps above the ghosting threshold."""

    kind: Literal["gap"] = "gap"
    gap_days: list[float] = Field(default_factory=list)
    threshold_days: int


class WithdrawalEvidence(BaseModel):
    """Event rates (events per day) before and after the midpoint."""

    kind: Literal["withdrawal"] = "withdrawal"
    first_half_rate: float
    second_half_rate: float
    event_count: int


class DelayedResponseEvidence(BaseModel):
    """A communication that lagged a payment."""

    kind: Literal["delayed_response"] = "delayed_response"
    payment_event_id: str
    response_event_id: str
    delay_days: float


PatternEvidence = Annotated[
    KeywordEvidence | GapEvidence | WithdrawalEvidence | DelayedResponseEvidence,
    Field(discriminator="kind"),
]


# =============================================================================
# Behavioral Pattern
# =============================================================================


class BehavioralPattern(BaseModel):
    """A behavioral red flag detected for one actor."""

    actor_key: str
    pattern_type: BehaviorType
    severity: PatternSeverity
    instances: list[str] = Field(default_factory=list, description="Matched sentences or notes")
    confidence: float = Field(..., ge=0.0, le=1.0)
    description: str
    evidence: PatternEvidence
