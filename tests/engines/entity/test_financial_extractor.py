"""Tests for financial figure extraction."""

from collections.abc import Callable

import pytest

from truth_engine.engines.entity.financial_extractor import (
    FinancialFigureExtractor,
    normalize_context,
)
from truth_engine.models.statement import Statement


@pytest.fixture
def extractor() -> FinancialFigureExtractor:
    """Create extractor instance."""
    return FinancialFigureExtractor()


class TestCurrencyPatterns:
    """Tests for prefixed and suffixed amounts."""

    @pytest.mark.parametrize(
        ("text", "amount", "currency"),
        [
            ("The invoice total was $1,000", 1000.0, "USD"),
            ("Rent was £250.50 a week", 250.5, "GBP"),
            ("She paid €75 for the tickets", 75.0, "EUR"),
            ("The deposit was A$400", 400.0, "AUD"),
            ("The deposit was US$400", 400.0, "USD"),
            ("He transferred R 5000 to the account", 5000.0, "ZAR"),
            ("Budget of USD 300 approved", 300.0, "USD"),
            ("They owed 1,500 dollars", 1500.0, "USD"),
            ("They owed 250 pounds", 250.0, "GBP"),
            ("The fee was 90 euros", 90.0, "EUR"),
            ("Paid 800 rand in cash", 800.0, "ZAR"),
        ],
    )
    def test_single_figure(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
        text: str,
        amount: float,
        currency: str,
    ) -> None:
        """Should extract the amount and currency code."""
        figures = extractor.extract(make_statement(text))

        assert len(figures) == 1
        assert figures[0].amount == amount
        assert figures[0].currency == currency

    def test_overlapping_matches_yield_one_figure(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should not double count '$1,000 USD'."""
        figures = extractor.extract(make_statement("The total was $1,000 USD"))

        assert [f.amount for f in figures] == [1000.0]

    def test_multiple_figures_in_text_order(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should return figures in the order they appear."""
        figures = extractor.extract(make_statement("First 200 pounds, then $50"))

        assert [(f.amount, f.currency) for f in figures] == [(200.0, "GBP"), (50.0, "USD")]

    def test_zero_amount_skipped(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should skip zero amounts."""
        assert extractor.extract(make_statement("The balance is $0")) == []

    def test_no_figures(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should return nothing for text without amounts."""
        assert extractor.extract(make_statement("We met on Monday")) == []


class TestFigureMetadata:
    """Tests for figure fields."""

    def test_figure_carries_statement_fields(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should copy statement, document, timestamp and context key."""
        statement = make_statement(
            "The invoice total was $1,000",
            statement_id="s-1",
            timestamp="2024-01-01T00:00:00Z",
            document_id="doc-9",
        )

        figure = extractor.extract(statement)[0]

        assert figure.statement_id == "s-1"
        assert figure.document_id == "doc-9"
        assert figure.timestamp == statement.timestamp
        assert figure.context_key == "invoice total"
        assert figure.figure_id.startswith("fig-")

    def test_figure_ids_are_stable(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should derive the same figure ID on every extraction."""
        statement = make_statement("The invoice total was $1,000", statement_id="s-1")

        assert extractor.extract(statement)[0].figure_id == extractor.extract(statement)[0].figure_id


class TestNormalizeContext:
    """Tests for the grouping key."""

    def test_restated_figure_shares_key(self) -> None:
        """Should produce the same key when only the amount differs."""
        assert normalize_context("The invoice total was $1,000") == normalize_context(
            "The invoice total was $1,600"
        )

    def test_currency_words_removed(self) -> None:
        """Should drop currency words and numbers."""
        assert normalize_context("They owed 1,500 dollars for rent") == "owed rent"

    def test_reworded_restatement_shares_key(self) -> None:
        """Should group a restatement that adds words before the figure."""
        assert normalize_context("Actually the invoice total was $1,600") == normalize_context(
            "The invoice total was $1,000"
        )

    def test_words_after_amount_used_when_none_precede(self) -> None:
        """Should fall back to the words following a leading amount."""
        text = "$500 was paid for rent"

        assert normalize_context(text, (0, 4)) == "paid rent"

    def test_extracted_restatement_shares_key(
        self,
        extractor: FinancialFigureExtractor,
        make_statement: Callable[..., Statement],
    ) -> None:
        """Should give a reworded restatement the original figure's key."""
        original = extractor.extract(make_statement("The invoice total was $1,000"))
        restated = extractor.extract(make_statement("Actually the invoice total was $1,600"))

        assert original[0].context_key == restated[0].context_key == "invoice total"
