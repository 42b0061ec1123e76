"""Financial figure extraction from statement text.

Finds currency-prefixed ("$1,000", "£250.50", "R 5000", "USD 300") and
currency-suffixed ("1,000 dollars", "250 GBP") amounts and turns them into
FinancialFigure models. Each figure carries a context key: the significant
words closest before the amount, so the same figure restated with a different
amount or some extra wording groups together.
"""

import hashlib
import re

import structlog

from truth_engine.engines.statements.embedder import significant_tokens
from truth_engine.models.entity import FinancialFigure
from truth_engine.models.statement import Statement

logger = structlog.get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

_AMOUNT = r"(\d[\d,]*(?:\.\d+)?)"

# (pattern, currency code or None when the code comes from the symbol group)
CURRENCY_PATTERNS: list[tuple[re.Pattern[str], str | None]] = [
    (re.compile(r"\bA\$\s?" + _AMOUNT), "AUD"),
    (re.compile(r"\bUS\$\s?" + _AMOUNT), "USD"),
    (re.compile(r"([$£€])\s?" + _AMOUNT), None),
    (re.compile(r"\bR\s?" + _AMOUNT + r"\b"), "ZAR"),
    (re.compile(r"\bUSD\s?" + _AMOUNT, re.IGNORECASE), "USD"),
    (re.compile(r"\bGBP\s?" + _AMOUNT, re.IGNORECASE), "GBP"),
    (re.compile(r"\bEUR\s?" + _AMOUNT, re.IGNORECASE), "EUR"),
    (re.compile(r"\bAUD\s?" + _AMOUNT, re.IGNORECASE), "AUD"),
    (re.compile(r"\bZAR\s?" + _AMOUNT, re.IGNORECASE), "ZAR"),
    (re.compile(_AMOUNT + r"\s?(?:USD|dollars?)\b", re.IGNORECASE), "USD"),
    (re.compile(_AMOUNT + r"\s?(?:GBP|pounds?)\b", re.IGNORECASE), "GBP"),
    (re.compile(_AMOUNT + r"\s?(?:EUR|euros?)\b", re.IGNORECASE), "EUR"),
    (re.compile(_AMOUNT + r"\s?AUD\b", re.IGNORECASE), "AUD"),
    (re.compile(_AMOUNT + r"\s?(?:ZAR|rand)\b", re.IGNORECASE), "ZAR"),
]

SYMBOL_CURRENCIES: dict[str, str] = {
    "$": "USD",
    "£": "GBP",
    "€": "EUR",
}

# Words that describe the currency rather than the subject of the figure
CURRENCY_WORDS: frozenset[str] = frozenset(
    {"usd", "gbp", "eur", "aud", "zar", "dollar", "dollars", "pound", "pounds",
     "euro", "euros", "rand"}
)

DESCRIPTION_LENGTH = 100

# Significant words kept in a context key
CONTEXT_WORDS = 2


def _context_words(text: str) -> list[str]:
    return [
        token
        for token in significant_tokens(text)
        if not any(ch.isdigit() for ch in token) and token not in CURRENCY_WORDS
    ]


def normalize_context(text: str, span: tuple[int, int] | None = None) -> str:
    """Context key for grouping figures.

    The key is the significant words closest before the amount at ``span``
    (numbers and currency words excluded). When no word precedes the amount,
    the words right after it are used. Without a span, the whole text is
    treated as preceding the amount.

    Example:
        >>> normalize_context("Actually the invoice total was $1,600")
        'invoice total'
    """
    if span is None:
        return " ".join(_context_words(text)[-CONTEXT_WORDS:])

    start, end = span
    before = _context_words(text[:start])
    if before:
        return " ".join(before[-CONTEXT_WORDS:])
    return " ".join(_context_words(text[end:])[:CONTEXT_WORDS])


# =============================================================================
# Extractor Class
# =============================================================================


class FinancialFigureExtractor:
    """Extract monetary amounts from statements.

    Example:
        >>> extractor = FinancialFigureExtractor()
        >>> figures = extractor.extract(statement)
        >>> figures[0].amount
        1000.0
    """

    def extract(self, statement: Statement) -> list[FinancialFigure]:
        """Extract all figures mentioned in one statement.

        Overlapping matches (e.g. "$1,000 USD") yield a single figure. Matches
        whose amount cannot be parsed are skipped.

        Args:
            statement: Source statement.

        Returns:
            Figures in the order they appear in the text.
        """
        text = statement.text
        claimed: list[tuple[int, int]] = []
        found: list[tuple[int, int, float, str]] = []

        for pattern, code in CURRENCY_PATTERNS:
            for match in pattern.finditer(text):
                start, end = match.span()
                if any(start < c_end and end > c_start for c_start, c_end in claimed):
                    continue

                raw_amount = match.group(1 if code else 2)
                try:
                    currency = code or SYMBOL_CURRENCIES[match.group(1)]
                    amount = float(raw_amount.replace(",", ""))
                except (ValueError, KeyError) as e:
                    logger.debug(
                        "financial_amount_parse_failed",
                        statement_id=statement.statement_id,
                        raw_amount=raw_amount,
                        error=str(e),
                    )
                    continue

                if amount <= 0:
                    continue

                claimed.append((start, end))
                found.append((start, end, amount, currency))

        if not found:
            return []

        figures = []
        for position, end, amount, currency in sorted(found):
            figures.append(
                FinancialFigure(
                    figure_id=self._figure_id(statement.statement_id, position),
                    statement_id=statement.statement_id,
                    amount=amount,
                    currency=currency,
                    description=text[:DESCRIPTION_LENGTH],
                    context_key=normalize_context(text, (position, end)),
                    timestamp=statement.timestamp,
                    document_id=statement.document_id,
                )
            )
        return figures

    @staticmethod
    def _figure_id(statement_id: str, position: int) -> str:
        digest = hashlib.sha1(f"{statement_id}:{position}".encode("utf-8")).hexdigest()
        return "fig-" + digest[:12]


# =============================================================================
# Module-level factory function
# =============================================================================


def get_financial_extractor() -> FinancialFigureExtractor:
    """Create a financial figure extractor."""
    return FinancialFigureExtractor()
