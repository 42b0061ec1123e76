"""Tests for the hashed bag-of-words embedder."""

import math

import pytest

from truth_engine.engines.statements.embedder import Embedder, significant_tokens, tokenize


class TestTokenization:
    """Tests for tokenization helpers."""

    def test_tokenize_lowercases_and_splits(self) -> None:
        """Should split on non-alphanumeric characters."""
        assert tokenize("I signed the Contract, on 2024-01-05!") == [
            "i", "signed", "the", "contract", "on", "2024", "01", "05",
        ]

    def test_significant_tokens_drop_stopwords_and_short_tokens(self) -> None:
        """Should keep negations and topical words only."""
        assert significant_tokens("I never signed the contract") == [
            "never", "signed", "contract",
        ]


class TestEmbedder:
    """Tests for Embedder.embed."""

    def test_fixed_width(self) -> None:
        """Should produce vectors of the configured width."""
        embedder = Embedder(dimensions=64, trigram_weight=0.5)

        assert len(embedder.embed("I signed the contract")) == 64

    def test_unit_length(self) -> None:
        """Should L2-normalize non-empty vectors."""
        vector = Embedder(dimensions=128, trigram_weight=0.5).embed("The deal fell through")

        assert math.sqrt(sum(v * v for v in vector)) == pytest.approx(1.0)

    def test_stopword_only_text_is_zero_vector(self) -> None:
        """Should return the zero vector when nothing significant remains."""
        vector = Embedder(dimensions=32, trigram_weight=0.5).embed("it was the")

        assert vector == (0.0,) * 32

    def test_deterministic(self) -> None:
        """Should embed identical text identically across instances."""
        text = "The invoice total was $1,000"

        assert Embedder(dimensions=256).embed(text) == Embedder(dimensions=256).embed(text)

    def test_invalid_dimensions(self) -> None:
        """Should reject non-positive widths."""
        with pytest.raises(ValueError):
            Embedder(dimensions=-1)
