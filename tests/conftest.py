"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Sequence
from datetime import datetime

import pytest

from truth_engine.core.config import Settings
from truth_engine.engines.base import DetectionContext
from truth_engine.engines.entity.profile_builder import EntityProfileBuilder
from truth_engine.engines.statements.ingestion import build_statements
from truth_engine.engines.statements.similarity import Similarity
from truth_engine.engines.timeline.timeline_builder import TimelineBuilder
from truth_engine.models.statement import (
    ActorInput,
    LegalCategory,
    SourceType,
    Statement,
    StatementInput,
    chronological_key,
)

StatementFactory = Callable[..., Statement]
ContextFactory = Callable[..., DetectionContext]


@pytest.fixture
def settings() -> Settings:
    """Settings with library defaults, independent of the environment's .env."""
    return Settings(_env_file=None)


@pytest.fixture
def make_statement() -> StatementFactory:
    """Build a normalized Statement the way ingestion would.

    Sentiment, certainty and legal category are derived from the text unless
    given explicitly.
    """

    def _make(
        text: str,
        actor: str = "John Smith",
        statement_id: str | None = None,
        timestamp: datetime | str | None = None,
        document_id: str = "doc-1",
        source_type: SourceType = SourceType.DOCUMENT,
        legal_category: LegalCategory | None = None,
        subject: str = "",
    ) -> Statement:
        record = StatementInput(
            actor=actor,
            text=text,
            statement_id=statement_id,
            timestamp=timestamp,
            document_id=document_id,
            source_type=source_type,
            legal_category=legal_category,
            subject=subject,
        )
        return build_statements([record])[0]

    return _make


@pytest.fixture
def make_context(settings: Settings) -> ContextFactory:
    """Build a DetectionContext with profiles and timeline derived from statements."""

    def _make(
        statements: Sequence[Statement],
        similarity: Similarity | None = None,
        actors: Sequence[ActorInput] | None = None,
        context_settings: Settings | None = None,
    ) -> DetectionContext:
        ordered = sorted(statements, key=chronological_key)
        profiles = EntityProfileBuilder().build(ordered, actors)
        timeline = TimelineBuilder().build(ordered, profiles.statement_actor)
        return DetectionContext(
            statements=tuple(ordered),
            profiles=tuple(profiles.profiles),
            timeline=tuple(timeline.events),
            similarity=similarity or Similarity(),
            settings=context_settings or settings,
            statement_actor=profiles.statement_actor,
        )

    return _make
