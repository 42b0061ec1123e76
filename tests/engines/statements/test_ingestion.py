"""Tests for statement ingestion.

Tests cover:
- All-or-nothing validation naming every invalid record
- Timestamp normalization to UTC
- Deterministic content-hash IDs
- Derived sentiment, certainty and legal category
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from truth_engine.core.exceptions import StatementValidationError
from truth_engine.engines.statements.ingestion import (
    build_statements,
    parse_timestamp,
    validate_statement_inputs,
)
from truth_engine.models.statement import LegalCategory, StatementInput

# =============================================================================
# Validation Tests
# =============================================================================


class TestValidateStatementInputs:
    """Tests for validate_statement_inputs."""

    def test_accepts_mappings_and_models(self) -> None:
        """Should coerce mappings and pass models through, in order."""
        records = validate_statement_inputs(
            [
                {"actor": "John Smith", "text": "I signed the contract"},
                StatementInput(actor="Jane Doe", text="He never signed it"),
            ]
        )

        assert [r.actor for r in records] == ["John Smith", "Jane Doe"]

    def test_names_every_invalid_record(self) -> None:
        """Should fail the batch and list each offending position."""
        raw = [
            {"actor": "John Smith", "text": "I signed the contract"},
            {"actor": "   ", "text": "Blank actor", "statement_id": "s-2"},
            {"actor": "Jane Doe"},
        ]

        with pytest.raises(StatementValidationError) as exc_info:
            validate_statement_inputs(raw)

        error = exc_info.value
        problems = error.error_details["invalid_statements"]
        assert [p["position"] for p in problems] == [1, 2]
        assert problems[0]["statement_id"] == "s-2"
        assert "#1 (id=s-2)" in error.message
        assert "#2" in error.message
        assert "missing text" in error.message

    def test_invalid_field_values(self) -> None:
        """Should report fields that fail model validation."""
        with pytest.raises(StatementValidationError, match="sentiment"):
            validate_statement_inputs(
                [{"actor": "John Smith", "text": "Fine", "sentiment": 5.0}]
            )

    def test_duplicate_statement_ids(self) -> None:
        """Should reject caller-assigned IDs used twice."""
        with pytest.raises(StatementValidationError, match="duplicate statement_id"):
            validate_statement_inputs(
                [
                    {"actor": "A", "text": "one", "statement_id": "s-1"},
                    {"actor": "B", "text": "two", "statement_id": "s-1"},
                ]
            )

    def test_unsupported_record_type(self) -> None:
        """Should reject records that are neither models nor mappings."""
        with pytest.raises(StatementValidationError, match="unsupported record type"):
            validate_statement_inputs(["just a string"])  # type: ignore[list-item]


# =============================================================================
# Normalization Tests
# =============================================================================


class TestParseTimestamp:
    """Tests for timestamp normalization."""

    def test_zulu_suffix(self) -> None:
        """Should parse a trailing Z as UTC."""
        assert parse_timestamp("2024-01-05T10:00:00Z") == datetime(2024, 1, 5, 10, tzinfo=UTC)

    def test_offset_converted_to_utc(self) -> None:
        """Should convert offsets to UTC."""
        parsed = parse_timestamp("2024-01-05T12:00:00+02:00")

        assert parsed == datetime(2024, 1, 5, 10, tzinfo=UTC)
        assert parsed.utcoffset() == timedelta(0)

    def test_naive_datetime_taken_as_utc(self) -> None:
        """Should attach UTC to naive datetimes."""
        assert parse_timestamp(datetime(2024, 1, 5, 10)) == datetime(2024, 1, 5, 10, tzinfo=UTC)

    def test_aware_datetime_converted(self) -> None:
        """Should convert aware datetimes to UTC."""
        eastern = timezone(timedelta(hours=-5))

        assert parse_timestamp(datetime(2024, 1, 5, 5, tzinfo=eastern)) == datetime(
            2024, 1, 5, 10, tzinfo=UTC
        )

    @pytest.mark.parametrize("value", [None, "", "last Tuesday"])
    def test_missing_or_unparseable(self, value: str | None) -> None:
        """Should return None for missing or unparseable values."""
        assert parse_timestamp(value) is None


class TestBuildStatements:
    """Tests for build_statements."""

    def test_unparseable_timestamp_keeps_original_text(self) -> None:
        """Should keep the raw timestamp string when it cannot be parsed."""
        statement = build_statements(
            [StatementInput(actor="John Smith", text="Hello", timestamp="last Tuesday")]
        )[0]

        assert statement.timestamp is None
        assert statement.timestamp_text == "last Tuesday"

    def test_content_ids_are_deterministic(self) -> None:
        """Should derive the same ID from the same content."""
        record = StatementInput(actor="John Smith", text="I signed the contract")

        first = build_statements([record])[0]
        second = build_statements([record])[0]

        assert first.statement_id == second.statement_id
        assert first.statement_id.startswith("stmt-")

    def test_identical_records_get_distinct_ids(self) -> None:
        """Should suffix repeated content IDs."""
        record = StatementInput(actor="John Smith", text="I signed the contract")

        statements = build_statements([record, record])

        assert statements[1].statement_id == f"{statements[0].statement_id}-2"

    def test_caller_ids_are_kept(self) -> None:
        """Should keep caller-assigned IDs."""
        statement = build_statements(
            [StatementInput(actor="John Smith", text="Hello", statement_id="s-42")]
        )[0]

        assert statement.statement_id == "s-42"

    def test_derived_signals(self) -> None:
        """Should derive category, sentiment and certainty when absent."""
        statement = build_statements(
            [StatementInput(actor="  John Smith ", text=" I never signed the contract ")]
        )[0]

        assert statement.actor == "John Smith"
        assert statement.actor_key == "john smith"
        assert statement.text == "I never signed the contract"
        assert statement.legal_category == LegalCategory.DENIAL
        assert statement.sentiment == -1.0
        assert statement.certainty == 0.5

    def test_supplied_signals_win(self) -> None:
        """Should keep caller-supplied category, sentiment and certainty."""
        statement = build_statements(
            [
                StatementInput(
                    actor="John Smith",
                    text="I never signed the contract",
                    legal_category=LegalCategory.TESTIMONY,
                    sentiment=0.2,
                    certainty=0.9,
                )
            ]
        )[0]

        assert statement.legal_category == LegalCategory.TESTIMONY
        assert statement.sentiment == 0.2
        assert statement.certainty == 0.9
