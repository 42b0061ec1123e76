"""Contradiction models.

Pydantic models for contradictions produced by the five detection passes
(direct, semantic, timeline, entity/financial, cross-entity).

Severity is validated on construction: anything outside [1, 10] raises a
pydantic ValidationError.
"""

from enum import Enum

from pydantic import BaseModel, Field

from truth_engine.models.statement import Statement

# =============================================================================
# Enums
# =============================================================================


class ContradictionType(str, Enum):
    """Kind of contradiction.

    Values:
        DIRECT: Same actor, related statements with opposing negation
        SEMANTIC: Same actor, statements drifting apart in meaning
        TIMELINE: Causality, date or sequence conflict
        ENTITY: Actor denied something they admitted
        CROSS_DOCUMENT: Two actors making opposing claims
        FINANCIAL: Unexplained change of a financial figure
    """

    DIRECT = "direct"
    SEMANTIC = "semantic"
    TIMELINE = "timeline"
    ENTITY = "entity"
    CROSS_DOCUMENT = "cross_document"
    FINANCIAL = "financial"


class TimelineConflictType(str, Enum):
    """Sub-type of a timeline contradiction."""

    CAUSALITY_VIOLATION = "causality_violation"
    DATE_MISMATCH = "date_mismatch"
    IMPOSSIBLE_SEQUENCE = "impossible_sequence"


class LegalTrigger(str, Enum):
    """Legal concern a contradiction may raise."""

    FRAUD = "fraud"
    MISREPRESENTATION = "misrepresentation"
    CONCEALMENT = "concealment"
    PERJURY_RISK = "perjury_risk"
    BREACH_OF_CONTRACT = "breach_of_contract"
    TIMELINE_INCONSISTENCY = "timeline_inconsistency"
    UNRELIABLE_TESTIMONY = "unreliable_testimony"
    FINANCIAL_DISCREPANCY = "financial_discrepancy"
    CONFLICT_OF_INTEREST = "conflict_of_interest"
    NEGLIGENCE = "negligence"


# Minimum / maximum contradiction severity
MIN_SEVERITY = 1
MAX_SEVERITY = 10


def clamp_severity(value: int) -> int:
    """Clamp a raw severity into the valid [1, 10] range."""
    return max(MIN_SEVERITY, min(MAX_SEVERITY, value))


# =============================================================================
# Contradiction
# =============================================================================


class Contradiction(BaseModel):
    """A flagged inconsistency between two statements."""

    contradiction_id: str = Field(..., description="Deterministic content hash")
    type: ContradictionType
    severity: int = Field(..., ge=MIN_SEVERITY, le=MAX_SEVERITY)
    confidence: float = Field(..., ge=0.0, le=1.0, description="Similarity or rule confidence")
    source_statement: Statement = Field(..., description="Earlier / first statement")
    target_statement: Statement = Field(..., description="Later / conflicting statement")
    explanation: str
    legal_trigger: LegalTrigger | None = None
    affected_actors: list[str] = Field(default_factory=list)
    timeline_conflict: TimelineConflictType | None = None
    detected_by: str = Field(..., description="Name of the pass that produced it")

    @property
    def statement_pair(self) -> tuple[str, str]:
        """Unordered statement-id pair, sorted for stable comparison."""
        a, b = self.source_statement.statement_id, self.target_statement.statement_id
        return (a, b) if a <= b else (b, a)
