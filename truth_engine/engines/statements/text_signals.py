"""Lexicon-based text signals: sentiment, certainty and legal category.

Used when the ingestion collaborator does not supply these values. All rules
are keyword/regex based and deterministic.
"""

import re

from truth_engine.engines.statements.embedder import tokenize
from truth_engine.engines.statements.similarity import negation_terms_in, normalize_apostrophes
from truth_engine.models.statement import LegalCategory

# =============================================================================
# Lexicons
# =============================================================================

POSITIVE_WORDS: frozenset[str] = frozenset(
    {
        "good", "great", "excellent", "happy", "agree", "yes", "correct", "true",
        "confirm", "accept", "love", "wonderful",
    }
)
NEGATIVE_WORDS: frozenset[str] = frozenset(
    {
        "bad", "terrible", "wrong", "disagree", "no", "false", "deny", "reject",
        "hate", "awful", "never", "not",
    }
)

CERTAIN_WORDS: frozenset[str] = frozenset(
    {"definitely", "certainly", "absolutely", "sure", "know", "fact", "proven", "clearly"}
)
UNCERTAIN_WORDS: frozenset[str] = frozenset(
    {"maybe", "perhaps", "possibly", "might", "could", "uncertain", "unclear", "think", "believe"}
)

# Ordered category rules: first match wins. Denial is handled before these.
ADMISSION_PHRASES: tuple[str, ...] = (
    "i admit", "admitted", "i confess", "yes i", "i did", "acknowledge",
    "i accept", "i was wrong", "guilty", "okay fine", "fine, you caught me",
    "i might have", "perhaps i did", "well, technically",
)
TESTIMONY_PHRASES: tuple[str, ...] = (
    "under oath", "testify", "testified", "sworn", "affidavit", "deposition",
)
THREAT_PHRASES: tuple[str, ...] = (
    "or else", "you'll regret", "you will regret", "i will sue", "i'll sue",
    "watch yourself", "consequences",
)
PROMISE_PHRASES: tuple[str, ...] = (
    "i promise", "i will", "i'll", "we will", "shall", "going to", "commit to",
    "guarantee",
)
REQUEST_PHRASES: tuple[str, ...] = (
    "please", "can you", "could you", "i need you to", "requested", "i request",
    "i demand", "demanded",
)
CONTRACTUAL_PHRASES: tuple[str, ...] = (
    "contract", "agreement", "signed", "clause", "terms", "addendum",
)
ASSERTION_PHRASES: tuple[str, ...] = (
    "claim", "assert", "state that", "i maintain", "the fact is", "it is true that",
)
FINANCIAL_PHRASES: tuple[str, ...] = (
    "paid", "payment", "invoice", "refund", "deposit", "transfer", "owed", "loan",
)

CURRENCY_PATTERN = re.compile(
    r"[$£€]\s*\d|\b\d[\d,]*(?:\.\d+)?\s*(?:dollars|usd|gbp|pounds|eur|euros|aud|zar|rand)\b"
)


def find_phrases(text: str, phrases: tuple[str, ...]) -> list[str]:
    """Phrases occurring in lowercased ``text`` on word boundaries, in table order."""
    return [
        phrase
        for phrase in phrases
        if re.search(r"(?<![\w'])" + re.escape(phrase) + r"(?![\w'])", text)
    ]


def contains_phrase(text: str, phrases: tuple[str, ...]) -> bool:
    """True when any phrase occurs in lowercased ``text`` on word boundaries."""
    return bool(find_phrases(text, phrases))


# =============================================================================
# Signal functions
# =============================================================================


def score_sentiment(text: str) -> float:
    """Sentiment in [-1, 1] from positive/negative word counts."""
    tokens = tokenize(normalize_apostrophes(text))
    positive = sum(1 for t in tokens if t in POSITIVE_WORDS)
    negative = sum(1 for t in tokens if t in NEGATIVE_WORDS)
    return (positive - negative) / max(1, positive + negative)


def score_certainty(text: str) -> float:
    """Certainty in [0, 1]; 0.5 is neutral."""
    tokens = tokenize(text)
    certain = sum(1 for t in tokens if t in CERTAIN_WORDS)
    uncertain = sum(1 for t in tokens if t in UNCERTAIN_WORDS)
    return (certain - uncertain) / max(1, certain + uncertain) * 0.5 + 0.5


def classify_legal_category(text: str) -> LegalCategory:
    """Assign a legal category using ordered keyword rules.

    Order: denial, admission, testimony, threat, financial, promise,
    request, contractual, assertion, general.
    """
    lowered = normalize_apostrophes(text)

    if negation_terms_in(lowered):
        return LegalCategory.DENIAL
    if contains_phrase(lowered, ADMISSION_PHRASES):
        return LegalCategory.ADMISSION
    if contains_phrase(lowered, TESTIMONY_PHRASES):
        return LegalCategory.TESTIMONY
    if contains_phrase(lowered, THREAT_PHRASES):
        return LegalCategory.THREAT
    if CURRENCY_PATTERN.search(lowered) or contains_phrase(lowered, FINANCIAL_PHRASES):
        return LegalCategory.FINANCIAL
    if contains_phrase(lowered, PROMISE_PHRASES):
        return LegalCategory.PROMISE
    if contains_phrase(lowered, REQUEST_PHRASES):
        return LegalCategory.REQUEST
    if contains_phrase(lowered, CONTRACTUAL_PHRASES):
        return LegalCategory.CONTRACTUAL
    if contains_phrase(lowered, ASSERTION_PHRASES):
        return LegalCategory.ASSERTION
    return LegalCategory.GENERAL
