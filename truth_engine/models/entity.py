"""Entity profile models.

An EntityProfile aggregates everything one resolved actor said: claims,
financial figures, timeline footprint and sentiment/certainty trends.
Profiles are frozen once built; detected behavioral patterns are attached by
copying the profile, never by mutating it.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from truth_engine.models.behavior import BehaviorType
from truth_engine.models.statement import LegalCategory

# =============================================================================
# Enums
# =============================================================================


class ClaimCategory(str, Enum):
    """Category of a claim derived from a statement."""

    ADMISSION = "admission"
    DENIAL = "denial"
    PROMISE = "promise"
    ASSERTION = "assertion"
    FINANCIAL = "financial"
    FACTUAL = "factual"


# Legal category -> claim category; anything unlisted is FACTUAL
CLAIM_CATEGORY_MAP: dict[LegalCategory, ClaimCategory] = {
    LegalCategory.ADMISSION: ClaimCategory.ADMISSION,
    LegalCategory.DENIAL: ClaimCategory.DENIAL,
    LegalCategory.PROMISE: ClaimCategory.PROMISE,
    LegalCategory.FINANCIAL: ClaimCategory.FINANCIAL,
    LegalCategory.ASSERTION: ClaimCategory.ASSERTION,
}


def claim_category_for(category: LegalCategory) -> ClaimCategory:
    """Map a statement's legal category onto a claim category."""
    return CLAIM_CATEGORY_MAP.get(category, ClaimCategory.FACTUAL)


# =============================================================================
# Profile Components
# =============================================================================


class Claim(BaseModel):
    """A categorized assertion derived from a statement."""

    model_config = ConfigDict(frozen=True)

    claim_id: str
    statement_id: str
    text: str
    timestamp: datetime | None = None
    category: ClaimCategory
    document_id: str
    subject: str = ""


class FinancialFigure(BaseModel):
    """A monetary amount mentioned in a statement."""

    model_config = ConfigDict(frozen=True)

    figure_id: str
    statement_id: str
    amount: float = Field(..., gt=0)
    currency: str = Field(default="USD", description="ISO currency code")
    description: str = Field(..., description="First 100 characters of the source text")
    context_key: str = Field(..., description="Normalized context used for grouping")
    timestamp: datetime | None = None
    document_id: str


class TrendPoint(BaseModel):
    """One sentiment or certainty observation."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    value: float
    statement_id: str


# =============================================================================
# Entity Profile
# =============================================================================


class EntityProfile(BaseModel):
    """Everything known about one resolved actor for a single run."""

    model_config = ConfigDict(frozen=True)

    actor_key: str
    display_name: str
    aliases: tuple[str, ...] = ()
    emails: tuple[str, ...] = ()
    phones: tuple[str, ...] = ()
    statement_ids: tuple[str, ...] = ()
    document_ids: tuple[str, ...] = ()
    claims: tuple[Claim, ...] = ()
    financial_figures: tuple[FinancialFigure, ...] = ()
    timeline_footprint: tuple[datetime, ...] = ()
    sentiment_trend: tuple[TrendPoint, ...] = ()
    certainty_trend: tuple[TrendPoint, ...] = ()
    patterns: tuple[BehaviorType, ...] = ()  # sorted, distinct
