"""Similarity and lexical-opposition heuristics.

Combines cosine similarity over embeddings with a negation check to decide
whether two statements are:
- a direct contradiction (related AND exactly one side negated)
- an implicit contradiction (related but drifting in meaning)

Thresholds are configuration (see Settings.similarity_*).
"""

import math
import re
from collections.abc import Sequence

from truth_engine.core.config import get_settings
from truth_engine.engines.statements.embedder import Embedder, FixedVector

# =============================================================================
# Constants
# =============================================================================

NEGATION_TERMS: tuple[str, ...] = (
    "never",
    "not",
    "no",
    "none",
    "nothing",
    "nobody",
    "didn't",
    "did not",
    "doesn't",
    "don't",
    "wasn't",
    "weren't",
    "isn't",
    "aren't",
    "haven't",
    "hasn't",
    "hadn't",
    "won't",
    "wouldn't",
    "can't",
    "cannot",
    "couldn't",
    "false",
    "untrue",
    "deny",
    "denies",
    "denied",
    "refuse",
    "refused",
)

_NEGATION_PATTERN = re.compile(
    r"(?<![\w'])(" + "|".join(re.escape(t) for t in NEGATION_TERMS) + r")(?![\w'])"
)


def normalize_apostrophes(text: str) -> str:
    """Lowercase and replace typographic apostrophes with ASCII ones."""
    return text.lower().replace("’", "'").replace("‘", "'")


def negation_terms_in(text: str) -> set[str]:
    """Return the negation terms present in ``text`` (word-boundary match)."""
    return set(_NEGATION_PATTERN.findall(normalize_apostrophes(text)))


def cosine(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity; 0.0 when either vector has zero magnitude."""
    if len(a) != len(b):
        raise ValueError(f"vector width mismatch: {len(a)} != {len(b)}")

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


# =============================================================================
# Similarity Class
# =============================================================================


class Similarity:
    """Similarity heuristics over statement texts.

    Example:
        >>> sim = Similarity()
        >>> sim.is_direct_contradiction(
        ...     "I never signed the contract", "I signed the contract"
        ... )
        True
    """

    def __init__(
        self,
        embedder: Embedder | None = None,
        related_threshold: float | None = None,
        drift_upper: float | None = None,
        high_threshold: float | None = None,
    ) -> None:
        """Initialize similarity heuristics.

        Args:
            embedder: Embedder used for texts without a precomputed vector.
            related_threshold: Minimum similarity for two texts to be related.
            drift_upper: Upper (exclusive) bound of the semantic drift band.
            high_threshold: Similarity treated as near-identical.
        """
        settings = get_settings()
        self.embedder = embedder or Embedder()
        self.related_threshold = (
            related_threshold
            if related_threshold is not None
            else settings.similarity_related_threshold
        )
        self.drift_upper = (
            drift_upper if drift_upper is not None else settings.similarity_drift_upper
        )
        self.high_threshold = (
            high_threshold
            if high_threshold is not None
            else settings.similarity_high_threshold
        )
        if not self.related_threshold < self.drift_upper <= self.high_threshold:
            raise ValueError(
                "thresholds must satisfy related < drift_upper <= high"
            )

    def vector_for(self, text: str, vector: FixedVector | None = None) -> FixedVector:
        """Use the precomputed vector when given, else embed the text."""
        return vector if vector is not None else self.embedder.embed(text)

    def cosine(self, a: Sequence[float], b: Sequence[float]) -> float:
        """Cosine similarity between two vectors."""
        return cosine(a, b)

    def text_similarity(
        self,
        text_a: str,
        text_b: str,
        vector_a: FixedVector | None = None,
        vector_b: FixedVector | None = None,
    ) -> float:
        """Cosine similarity between two texts."""
        return cosine(self.vector_for(text_a, vector_a), self.vector_for(text_b, vector_b))

    def lexical_opposition(self, text_a: str, text_b: str) -> bool:
        """True when exactly one of the two texts carries negation."""
        return bool(negation_terms_in(text_a)) != bool(negation_terms_in(text_b))

    def is_related(self, similarity: float) -> bool:
        """Similarity at or above the related threshold."""
        return similarity >= self.related_threshold

    def in_drift_band(self, similarity: float) -> bool:
        """Similarity in [related_threshold, drift_upper)."""
        return self.related_threshold <= similarity < self.drift_upper

    def is_direct_contradiction(
        self,
        text_a: str,
        text_b: str,
        similarity: float | None = None,
    ) -> bool:
        """Related statements where exactly one side is negated.

        Args:
            text_a: First statement text.
            text_b: Second statement text.
            similarity: Precomputed cosine similarity, if available.
        """
        if similarity is None:
            similarity = self.text_similarity(text_a, text_b)
        return self.is_related(similarity) and self.lexical_opposition(text_a, text_b)

    def is_implicit_contradiction(
        self,
        text_a: str,
        text_b: str,
        similarity: float | None = None,
    ) -> bool:
        """Related statements drifting apart (similarity inside the drift band)."""
        if similarity is None:
            similarity = self.text_similarity(text_a, text_b)
        return self.in_drift_band(similarity)


# =============================================================================
# Module-level factory function
# =============================================================================


def get_similarity() -> Similarity:
    """Create a Similarity instance configured from settings."""
    return Similarity()
