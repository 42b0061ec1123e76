"""Tests for statement and actor models."""

from datetime import UTC, datetime

import pytest

from truth_engine.models.statement import (
    Actor,
    Statement,
    chronological_key,
    normalize_actor_name,
)


def _statement(statement_id: str, timestamp: datetime | None = None) -> Statement:
    return Statement(
        statement_id=statement_id,
        actor="John Smith",
        actor_key="john smith",
        text="I signed the contract",
        timestamp=timestamp,
        document_id="doc-1",
    )


class TestStatementIdentity:
    """Tests for statement equality."""

    def test_equality_uses_statement_id(self) -> None:
        """Should compare equal when IDs match, regardless of other fields."""
        a = _statement("stmt-1")
        b = _statement("stmt-1", timestamp=datetime(2024, 1, 1, tzinfo=UTC))

        assert a == b
        assert hash(a) == hash(b)
        assert a != _statement("stmt-2")


class TestAttachEmbedding:
    """Tests for embedding assignment."""

    def test_attach_once(self) -> None:
        """Should store the vector as a tuple."""
        statement = _statement("stmt-1")

        statement.attach_embedding([0.6, 0.8])

        assert statement.embedding == (0.6, 0.8)

    def test_attach_twice_raises(self) -> None:
        """Should refuse to overwrite an embedding."""
        statement = _statement("stmt-1")
        statement.attach_embedding((1.0, 0.0))

        with pytest.raises(ValueError, match="already has an embedding"):
            statement.attach_embedding((0.0, 1.0))


class TestChronologicalKey:
    """Tests for chronological ordering."""

    def test_undated_sort_last_then_by_id(self) -> None:
        """Should order by timestamp, put undated last, and break ties by ID."""
        statements = [
            _statement("stmt-c"),
            _statement("stmt-b", datetime(2024, 2, 1, tzinfo=UTC)),
            _statement("stmt-a"),
            _statement("stmt-d", datetime(2024, 1, 1, tzinfo=UTC)),
        ]

        ordered = sorted(statements, key=chronological_key)

        assert [s.statement_id for s in ordered] == ["stmt-d", "stmt-b", "stmt-a", "stmt-c"]


class TestActor:
    """Tests for actor helpers."""

    def test_normalize_actor_name(self) -> None:
        """Should lowercase and collapse whitespace."""
        assert normalize_actor_name("  John   SMITH ") == "john smith"

    def test_contact_identifiers(self) -> None:
        """Should report contact identifiers only when an email or phone exists."""
        assert not Actor(key="john smith", display_name="John Smith").has_contact_identifiers
        assert Actor(
            key="john smith", display_name="John Smith", emails=["john@example.com"]
        ).has_contact_identifiers
