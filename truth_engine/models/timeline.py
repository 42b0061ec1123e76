"""Timeline models for chronological event sequences."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Classification of a timeline event."""

    STATEMENT = "statement"
    PAYMENT = "payment"
    REQUEST = "request"
    PROMISE = "promise"
    AGREEMENT = "agreement"
    MEETING = "meeting"
    COMMUNICATION = "communication"
    LEGAL_ACTION = "legal_action"
    DEADLINE = "deadline"
    OTHER = "other"


class TimelineEvent(BaseModel):
    """A dated event derived from a statement."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    timestamp: datetime
    description: str = Field(..., description="First 200 characters of the statement")
    event_type: EventType = EventType.OTHER
    actor_keys: tuple[str, ...] = ()
    statement_ids: tuple[str, ...] = ()
    document_id: str

    @property
    def primary_actor(self) -> str:
        """First linked actor, or empty string."""
        return self.actor_keys[0] if self.actor_keys else ""


class TimelineGap(BaseModel):
    """A quiet period between two consecutive events."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    days: int
    before_event_id: str
    after_event_id: str


class ActivityCluster(BaseModel):
    """A burst of activity: several events within a short window."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    event_count: int
    dominant_type: EventType


class TimelineStatistics(BaseModel):
    """Aggregate statistics over a built timeline."""

    total_events: int = 0
    undated_statement_ids: list[str] = Field(default_factory=list)
    earliest: datetime | None = None
    latest: datetime | None = None
    events_by_type: dict[str, int] = Field(default_factory=dict)
    events_by_actor: dict[str, int] = Field(default_factory=dict)
    significant_gaps: list[TimelineGap] = Field(default_factory=list)
    activity_clusters: list[ActivityCluster] = Field(default_factory=list)
    summary: str = ""
