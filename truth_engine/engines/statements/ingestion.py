"""Statement ingestion: validation and normalization.

Turns raw ingestion records into indexed-ready Statement models:
1. Validate every record (non-blank actor and text, well-formed fields)
2. Normalize timestamps to UTC
3. Derive sentiment, certainty and legal category when not supplied
4. Assign deterministic IDs (content hash) where the caller gave none

Validation is all-or-nothing: any invalid record fails the whole batch and
the error names every offending record.
"""

import hashlib
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import ValidationError

from truth_engine.core.exceptions import StatementValidationError
from truth_engine.engines.statements.text_signals import (
    classify_legal_category,
    score_certainty,
    score_sentiment,
)
from truth_engine.models.statement import Statement, StatementInput, normalize_actor_name

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("actor", "text")

RawStatement = StatementInput | Mapping[str, Any]


# =============================================================================
# Validation
# =============================================================================


def _field_value(item: RawStatement, name: str) -> Any:
    if isinstance(item, StatementInput):
        return getattr(item, name, None)
    if isinstance(item, Mapping):
        return item.get(name)
    return None


def _describe(problem: dict[str, Any]) -> str:
    label = f"#{problem['position']}"
    if problem.get("statement_id"):
        label += f" (id={problem['statement_id']})"
    return f"{label}: {problem['reason']}"


def validate_statement_inputs(raw: Sequence[RawStatement]) -> list[StatementInput]:
    """Validate raw records and coerce them into StatementInput models.

    Args:
        raw: Ordered records, either StatementInput models or mappings.

    Returns:
        Validated StatementInput models in input order.

    Raises:
        StatementValidationError: If any record is invalid. ``details`` lists
            every invalid record with its position and reason.
    """
    problems: list[dict[str, Any]] = []
    validated: list[StatementInput] = []
    seen_ids: set[str] = set()

    for position, item in enumerate(raw):
        statement_id = _field_value(item, "statement_id")

        if not isinstance(item, (StatementInput, Mapping)):
            problems.append(
                {
                    "position": position,
                    "statement_id": None,
                    "reason": f"unsupported record type {type(item).__name__}",
                }
            )
            continue

        missing = [
            name
            for name in REQUIRED_FIELDS
            if not isinstance(_field_value(item, name), str)
            or not _field_value(item, name).strip()
        ]
        if missing:
            problems.append(
                {
                    "position": position,
                    "statement_id": statement_id,
                    "reason": f"missing {' and '.join(missing)}",
                }
            )
            continue

        try:
            record = (
                item
                if isinstance(item, StatementInput)
                else StatementInput.model_validate(dict(item))
            )
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            problems.append(
                {
                    "position": position,
                    "statement_id": statement_id,
                    "reason": f"invalid {', '.join(fields)}",
                }
            )
            continue

        if record.statement_id is not None:
            if record.statement_id in seen_ids:
                problems.append(
                    {
                        "position": position,
                        "statement_id": record.statement_id,
                        "reason": "duplicate statement_id",
                    }
                )
                continue
            seen_ids.add(record.statement_id)

        validated.append(record)

    if problems:
        message = (
            f"{len(problems)} invalid statement(s): "
            + "; ".join(_describe(p) for p in problems)
        )
        logger.warning(
            "statement_validation_failed",
            invalid_count=len(problems),
            total=len(raw),
        )
        raise StatementValidationError(
            message=message,
            details={"invalid_statements": problems},
        )

    return validated


# =============================================================================
# Normalization
# =============================================================================


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Normalize a timestamp to an aware UTC datetime.

    Naive datetimes are taken as UTC. Unparseable strings return None.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("statement_timestamp_unparseable", raw_timestamp=value)
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _content_id(record: StatementInput, timestamp: datetime | None) -> str:
    fingerprint = "\x1f".join(
        [
            normalize_actor_name(record.actor),
            record.text.strip(),
            record.document_id,
            timestamp.isoformat() if timestamp else "",
        ]
    )
    return "stmt-" + hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()[:16]


def build_statements(records: Sequence[StatementInput]) -> list[Statement]:
    """Convert validated records into Statement models.

    Args:
        records: Output of validate_statement_inputs.

    Returns:
        Statements in input order, without embeddings.
    """
    statements: list[Statement] = []
    used_ids: set[str] = {r.statement_id for r in records if r.statement_id}

    for record in records:
        timestamp = parse_timestamp(record.timestamp)
        timestamp_text = (
            record.timestamp.isoformat()
            if isinstance(record.timestamp, datetime)
            else record.timestamp
        )

        statement_id = record.statement_id
        if statement_id is None:
            base_id = _content_id(record, timestamp)
            statement_id = base_id
            suffix = 1
            while statement_id in used_ids:
                suffix += 1
                statement_id = f"{base_id}-{suffix}"
            used_ids.add(statement_id)

        text = record.text.strip()
        statements.append(
            Statement(
                statement_id=statement_id,
                actor=record.actor.strip(),
                actor_key=normalize_actor_name(record.actor),
                text=text,
                timestamp=timestamp,
                timestamp_text=timestamp_text,
                document_id=record.document_id,
                source_type=record.source_type,
                sentiment=(
                    record.sentiment if record.sentiment is not None else score_sentiment(text)
                ),
                certainty=(
                    record.certainty if record.certainty is not None else score_certainty(text)
                ),
                legal_category=record.legal_category or classify_legal_category(text),
                subject=record.subject.strip(),
            )
        )

    return statements
