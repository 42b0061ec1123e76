"""Keyword-based timeline event classification.

Assigns an EventType to a statement from ordered keyword rules; the first
matching rule wins. Statements matching no rule are COMMUNICATION when they
come from a conversational source (email, chat, transcript, audio, video)
and OTHER otherwise.
"""

from truth_engine.engines.statements.similarity import normalize_apostrophes
from truth_engine.engines.statements.text_signals import CURRENCY_PATTERN, contains_phrase
from truth_engine.models.statement import SourceType, Statement
from truth_engine.models.timeline import EventType

# =============================================================================
# Keyword Rules
# =============================================================================

# Evaluated in order; first match wins
EVENT_KEYWORD_RULES: list[tuple[EventType, tuple[str, ...]]] = [
    (
        EventType.PAYMENT,
        ("paid", "payment", "payments", "transfer", "transferred", "refund",
         "refunded", "deposit", "deposited", "sent money"),
    ),
    (
        EventType.REQUEST,
        ("requested", "request", "asked", "demand", "demanded"),
    ),
    (
        EventType.PROMISE,
        ("promised", "promise", "will", "commit", "committed", "going to", "shall"),
    ),
    (
        EventType.AGREEMENT,
        ("agreed", "agreement", "contract", "signed"),
    ),
    (
        EventType.MEETING,
        ("met", "meeting", "meet"),
    ),
    (
        EventType.STATEMENT,
        ("said", "stated", "claimed"),
    ),
    (
        EventType.LEGAL_ACTION,
        ("sued", "lawsuit", "filed", "court", "summons"),
    ),
    (
        EventType.DEADLINE,
        ("deadline", "due"),
    ),
    (
        EventType.COMMUNICATION,
        ("email", "emailed", "message", "messaged", "texted", "called", "phoned",
         "replied", "wrote", "sent"),
    ),
]

CONVERSATIONAL_SOURCES: frozenset[SourceType] = frozenset(
    {
        SourceType.EMAIL,
        SourceType.CHAT,
        SourceType.TRANSCRIPT,
        SourceType.AUDIO,
        SourceType.VIDEO,
    }
)


def classify_event(statement: Statement) -> EventType:
    """Classify a statement into a timeline event type.

    Args:
        statement: Source statement.

    Returns:
        The first matching EventType, or the source-type fallback.
    """
    text = normalize_apostrophes(statement.text)

    if CURRENCY_PATTERN.search(text):
        return EventType.PAYMENT

    for event_type, keywords in EVENT_KEYWORD_RULES:
        if contains_phrase(text, keywords):
            return event_type

    if statement.source_type in CONVERSATIONAL_SOURCES:
        return EventType.COMMUNICATION
    return EventType.OTHER
