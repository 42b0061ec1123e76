"""Statement and actor models.

Pydantic models for:
- Raw ingestion records (StatementInput, ActorInput)
- Indexed statements with optional embeddings
- Resolved actors

A Statement's identity is its ``statement_id``; the embedding is assigned once
during the embed phase and does not take part in equality.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# =============================================================================
# Enums
# =============================================================================


class SourceType(str, Enum):
    """Kind of evidence a statement was extracted from."""

    DOCUMENT = "document"
    EMAIL = "email"
    CHAT = "chat"
    TRANSCRIPT = "transcript"
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    OTHER = "other"


class LegalCategory(str, Enum):
    """Legal category tag of a statement.

    Values:
        GENERAL: No specific legal significance
        PROMISE: Commitment to future action
        DENIAL: Denial of a fact or action
        ADMISSION: Acknowledgement of a fact or action
        ASSERTION: Claim of fact
        THREAT: Threat or coercion
        REQUEST: Request or demand
        FINANCIAL: Financial claim or figure
        CONTRACTUAL: Reference to contract terms
        TESTIMONY: Sworn or formal testimony
    """

    GENERAL = "general"
    PROMISE = "promise"
    DENIAL = "denial"
    ADMISSION = "admission"
    ASSERTION = "assertion"
    THREAT = "threat"
    REQUEST = "request"
    FINANCIAL = "financial"
    CONTRACTUAL = "contractual"
    TESTIMONY = "testimony"


# Categories with elevated legal weight for severity scoring
LEGAL_WEIGHT_CATEGORIES: frozenset[LegalCategory] = frozenset(
    {
        LegalCategory.ADMISSION,
        LegalCategory.DENIAL,
        LegalCategory.TESTIMONY,
        LegalCategory.CONTRACTUAL,
    }
)


# =============================================================================
# Ingestion Models
# =============================================================================


class StatementInput(BaseModel):
    """Raw statement as delivered by the evidence-ingestion collaborator."""

    actor: str = Field(..., description="Speaker display name")
    text: str = Field(..., description="Statement text")
    document_id: str = Field(default="unknown", description="Source document ID")
    source_type: SourceType = Field(default=SourceType.DOCUMENT)
    timestamp: datetime | str | None = Field(
        None, description="ISO-8601 timestamp or datetime"
    )
    statement_id: str | None = Field(None, description="Caller-assigned ID")
    sentiment: float | None = Field(None, ge=-1.0, le=1.0)
    certainty: float | None = Field(None, ge=0.0, le=1.0)
    legal_category: LegalCategory | None = None
    subject: str = Field(default="", description="Optional topic of the statement")


class ActorInput(BaseModel):
    """Identity hints for an actor (aliases and contact identifiers)."""

    name: str
    aliases: list[str] = Field(default_factory=list)
    emails: list[str] = Field(default_factory=list)
    phones: list[str] = Field(default_factory=list)


# =============================================================================
# Core Models
# =============================================================================


class Statement(BaseModel):
    """An indexed statement attributed to an actor."""

    statement_id: str
    actor: str = Field(..., description="Raw display name of the speaker")
    actor_key: str = Field(..., description="Normalized actor name")
    text: str
    timestamp: datetime | None = Field(None, description="UTC-normalized timestamp")
    timestamp_text: str | None = Field(None, description="Original timestamp string")
    document_id: str
    source_type: SourceType = SourceType.DOCUMENT
    sentiment: float = Field(default=0.0, ge=-1.0, le=1.0)
    certainty: float = Field(default=0.5, ge=0.0, le=1.0)
    legal_category: LegalCategory = LegalCategory.GENERAL
    subject: str = ""
    embedding: tuple[float, ...] | None = None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Statement):
            return self.statement_id == other.statement_id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.statement_id)

    def attach_embedding(self, vector: tuple[float, ...]) -> None:
        """Assign the embedding vector. Allowed exactly once.

        Raises:
            ValueError: If an embedding is already attached.
        """
        if self.embedding is not None:
            raise ValueError(f"Statement {self.statement_id} already has an embedding")
        self.embedding = tuple(vector)


class Actor(BaseModel):
    """A resolved speaker identity."""

    key: str = Field(..., description="Normalized name key")
    display_name: str
    aliases: list[str] = Field(default_factory=list)
    emails: list[str] = Field(default_factory=list)
    phones: list[str] = Field(default_factory=list)

    @property
    def has_contact_identifiers(self) -> bool:
        """True when the actor carries an email or phone number."""
        return bool(self.emails or self.phones)


def normalize_actor_name(name: str) -> str:
    """Normalize an actor name into its key form (lowercased, trimmed)."""
    return " ".join(name.lower().split())


def chronological_key(statement: Statement) -> tuple[bool, datetime, str]:
    """Sort key: timestamp ascending with undated statements last, then ID."""
    return (
        statement.timestamp is None,
        statement.timestamp or datetime.min.replace(tzinfo=UTC),
        statement.statement_id,
    )
