"""Hashed bag-of-words / character-trigram embedder.

Maps text to a fixed-width, L2-normalized vector. No learned model is
involved: each significant token is hashed into one of N buckets, and each of
its character trigrams adds a smaller weight to the same space, which gives
some sub-word signal (e.g. "signed" / "signing").

The hash is ``zlib.crc32`` so vectors are identical across processes.
"""

import math
import re
import zlib

from truth_engine.core.config import get_settings

# =============================================================================
# Constants
# =============================================================================

# Words that carry no topical signal. Negation words are deliberately absent.
STOPWORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "must", "shall", "can", "to", "of", "in",
        "for", "on", "with", "at", "by", "from", "as", "into", "through",
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us",
        "them", "my", "your", "his", "its", "our", "their", "this", "that",
        "these", "those", "and", "or", "but", "so", "then", "there", "here",
        "about", "just", "also", "very",
    }
)

# Tokens shorter than this are dropped
MIN_TOKEN_LENGTH = 3

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

FixedVector = tuple[float, ...]


# =============================================================================
# Tokenization helpers
# =============================================================================


def tokenize(text: str) -> list[str]:
    """Lowercase and split text on non-alphanumeric boundaries."""
    return TOKEN_PATTERN.findall(text.lower())


def significant_tokens(text: str) -> list[str]:
    """Tokens that survive stopword and length filtering, in text order."""
    return [
        token
        for token in tokenize(text)
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOPWORDS
    ]


def _bucket(feature: str, dimensions: int) -> int:
    return zlib.crc32(feature.encode("utf-8")) % dimensions


# =============================================================================
# Embedder Class
# =============================================================================


class Embedder:
    """Deterministic text embedder.

    Example:
        >>> embedder = Embedder(dimensions=256)
        >>> vector = embedder.embed("I signed the contract")
        >>> len(vector)
        256
    """

    def __init__(
        self,
        dimensions: int | None = None,
        trigram_weight: float | None = None,
    ) -> None:
        """Initialize the embedder.

        Args:
            dimensions: Number of hash buckets. Defaults to settings.
            trigram_weight: Weight of each character trigram. Defaults to settings.
        """
        settings = get_settings()
        self.dimensions = dimensions or settings.embedding_dimensions
        self.trigram_weight = (
            trigram_weight
            if trigram_weight is not None
            else settings.embedding_trigram_weight
        )
        if self.dimensions <= 0:
            raise ValueError("dimensions must be positive")

    def embed(self, text: str) -> FixedVector:
        """Embed text into a fixed-width vector.

        Args:
            text: Raw statement text.

        Returns:
            L2-normalized vector, or the zero vector for empty /
            all-stopword text.
        """
        vector = [0.0] * self.dimensions

        for token in significant_tokens(text):
            vector[_bucket(token, self.dimensions)] += 1.0
            for i in range(len(token) - 2):
                trigram = token[i : i + 3]
                vector[_bucket(trigram, self.dimensions)] += self.trigram_weight

        magnitude = math.sqrt(sum(v * v for v in vector))
        if magnitude == 0.0:
            return tuple(vector)

        return tuple(v / magnitude for v in vector)


# =============================================================================
# Module-level factory function
# =============================================================================


def get_embedder() -> Embedder:
    """Create an embedder configured from settings.

    Not cached; each orchestration run owns its own collaborators.
    """
    return Embedder()
