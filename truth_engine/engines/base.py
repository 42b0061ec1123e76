"""Base class for contradiction detection passes.

Every pass receives the same read-only DetectionContext and returns a list of
Contradiction models. Passes never mutate the context and never raise on
insufficient data; they return an empty list instead.
"""

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from types import MappingProxyType

import structlog

from truth_engine.core.config import Settings
from truth_engine.engines.statements.embedder import FixedVector
from truth_engine.engines.statements.similarity import Similarity
from truth_engine.models.contradiction import (
    Contradiction,
    ContradictionType,
    LegalTrigger,
    TimelineConflictType,
    clamp_severity,
)
from truth_engine.models.entity import EntityProfile
from truth_engine.models.statement import Statement
from truth_engine.models.timeline import TimelineEvent

# Two timestamps this close count as "the same time window"
PROXIMITY_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class DetectionContext:
    """Read-only snapshot shared by all detection passes.

    Attributes:
        statements: Statements in chronological order (undated last, then ID).
        profiles: Entity profiles sorted by actor key.
        timeline: Timeline events sorted by (timestamp, event_id).
        similarity: Similarity heuristics.
        settings: Engine settings.
        statement_actor: Statement ID -> resolved actor key.
    """

    statements: tuple[Statement, ...]
    profiles: tuple[EntityProfile, ...]
    timeline: tuple[TimelineEvent, ...]
    similarity: Similarity
    settings: Settings
    statement_actor: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "statement_actor", MappingProxyType(dict(self.statement_actor)))
        object.__setattr__(
            self,
            "_by_id",
            MappingProxyType({s.statement_id: s for s in self.statements}),
        )

    def statement(self, statement_id: str) -> Statement | None:
        """Get a statement by ID."""
        return self._by_id.get(statement_id)

    def actor_of(self, statement: Statement) -> str:
        """Resolved actor key of a statement."""
        return self.statement_actor.get(statement.statement_id, statement.actor_key)

    def statements_by_actor(self) -> dict[str, list[Statement]]:
        """Group statements by resolved actor, keeping chronological order."""
        grouped: dict[str, list[Statement]] = {}
        for statement in self.statements:
            grouped.setdefault(self.actor_of(statement), []).append(statement)
        return grouped

    def vector(self, statement: Statement) -> FixedVector:
        """Embedding of a statement, computing it when absent."""
        return self.similarity.vector_for(statement.text, statement.embedding)


def within_proximity_window(a: Statement, b: Statement) -> bool:
    """True when both statements are timestamped within 24 hours of each other."""
    if a.timestamp is None or b.timestamp is None:
        return False
    return abs(a.timestamp - b.timestamp) <= PROXIMITY_WINDOW


def make_contradiction_id(
    contradiction_type: ContradictionType,
    source_id: str,
    target_id: str,
    discriminator: str = "",
) -> str:
    """Deterministic contradiction ID from its type and statement pair."""
    fingerprint = "|".join([contradiction_type.value, source_id, target_id, discriminator])
    return "ctr-" + hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()[:16]


class ContradictionPass(ABC):
    """Abstract base class for all contradiction detection passes.

    Attributes:
        name: Pass identifier used for logging and ``detected_by``.
        logger: Structured logger instance.
    """

    name: str = "base"

    def __init__(self) -> None:
        """Initialize the pass logger."""
        self.logger = structlog.get_logger(f"engine.{self.name}")

    @abstractmethod
    def detect(self, context: DetectionContext) -> list[Contradiction]:
        """Run the pass over a detection context.

        Args:
            context: Read-only detection snapshot.

        Returns:
            Contradictions found, in deterministic order.
        """
        ...

    def build(
        self,
        contradiction_type: ContradictionType,
        source: Statement,
        target: Statement,
        severity: int,
        confidence: float,
        explanation: str,
        legal_trigger: LegalTrigger | None,
        affected_actors: list[str],
        timeline_conflict: TimelineConflictType | None = None,
        discriminator: str = "",
    ) -> Contradiction:
        """Create a Contradiction attributed to this pass.

        Severity is clamped into [1, 10] and confidence into [0, 1].
        """
        return Contradiction(
            contradiction_id=make_contradiction_id(
                contradiction_type,
                source.statement_id,
                target.statement_id,
                discriminator or self.name,
            ),
            type=contradiction_type,
            severity=clamp_severity(severity),
            confidence=max(0.0, min(1.0, confidence)),
            source_statement=source,
            target_statement=target,
            explanation=explanation,
            legal_trigger=legal_trigger,
            affected_actors=sorted(set(affected_actors)),
            timeline_conflict=timeline_conflict,
            detected_by=self.name,
        )
