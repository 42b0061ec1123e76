"""Statement index with multi-key lookup and similarity search.

Stores statements once and maintains secondary maps by actor, document and
category. Nearest-neighbour search is actor-agnostic cosine similarity over
the statements' embeddings.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime

import structlog
from rapidfuzz import fuzz

from truth_engine.core.config import get_settings
from truth_engine.core.exceptions import DuplicateStatementError
from truth_engine.engines.statements.similarity import Similarity
from truth_engine.models.statement import LegalCategory, Statement, normalize_actor_name

logger = structlog.get_logger(__name__)

# Default minimum rapidfuzz score (0-100) for text search hits
DEFAULT_SEARCH_MIN_SCORE = 60


@dataclass
class SimilarStatement:
    """A nearest-neighbour hit."""

    statement: Statement
    similarity: float


@dataclass
class SearchHit:
    """A fuzzy text search hit."""

    statement: Statement
    score: float  # 0-100


@dataclass
class IndexStatistics:
    """Counts describing the indexed corpus."""

    total_statements: int = 0
    timestamped_statements: int = 0
    by_actor: dict[str, int] = field(default_factory=dict)
    by_document: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    by_source_type: dict[str, int] = field(default_factory=dict)


class StatementIndex:
    """In-memory statement store.

    Example:
        >>> index = StatementIndex()
        >>> index.add(statement)
        >>> index.by_actor("john smith")
        [Statement(...)]
    """

    def __init__(self, similarity: Similarity | None = None) -> None:
        """Initialize an empty index.

        Args:
            similarity: Similarity heuristics used by find_similar.
        """
        self._similarity = similarity
        self._statements: dict[str, Statement] = {}
        self._by_actor: dict[str, list[str]] = defaultdict(list)
        self._by_document: dict[str, list[str]] = defaultdict(list)
        self._by_category: dict[LegalCategory, list[str]] = defaultdict(list)

    @property
    def similarity(self) -> Similarity:
        """Get the similarity heuristics."""
        if self._similarity is None:
            self._similarity = Similarity()
        return self._similarity

    def __len__(self) -> int:
        return len(self._statements)

    def __contains__(self, statement_id: object) -> bool:
        return statement_id in self._statements

    # =========================================================================
    # Mutation
    # =========================================================================

    def add(self, statement: Statement) -> None:
        """Add a statement to all lookup maps.

        Raises:
            DuplicateStatementError: If the ID is already indexed.
        """
        if statement.statement_id in self._statements:
            raise DuplicateStatementError(statement.statement_id)

        self._statements[statement.statement_id] = statement
        self._by_actor[statement.actor_key].append(statement.statement_id)
        self._by_document[statement.document_id].append(statement.statement_id)
        self._by_category[statement.legal_category].append(statement.statement_id)

    def clear(self) -> None:
        """Reset all maps."""
        self._statements.clear()
        self._by_actor.clear()
        self._by_document.clear()
        self._by_category.clear()

    # =========================================================================
    # Lookups
    # =========================================================================

    def get(self, statement_id: str) -> Statement | None:
        """Get a statement by ID."""
        return self._statements.get(statement_id)

    def all(self) -> list[Statement]:
        """All statements in insertion order."""
        return list(self._statements.values())

    def by_actor(self, actor: str) -> list[Statement]:
        """Statements whose normalized actor name matches ``actor``."""
        key = normalize_actor_name(actor)
        return [self._statements[sid] for sid in self._by_actor.get(key, [])]

    def by_document(self, document_id: str) -> list[Statement]:
        """Statements from one source document."""
        return [self._statements[sid] for sid in self._by_document.get(document_id, [])]

    def by_category(self, category: LegalCategory) -> list[Statement]:
        """Statements with the given legal category."""
        return [self._statements[sid] for sid in self._by_category.get(category, [])]

    def by_time_range(self, start: datetime, end: datetime) -> list[Statement]:
        """Timestamped statements within [start, end], chronologically.

        Undated statements never match.
        """
        hits = [
            s
            for s in self._statements.values()
            if s.timestamp is not None and start <= s.timestamp <= end
        ]
        return sorted(hits, key=lambda s: s.timestamp)

    def actors(self) -> list[str]:
        """Normalized actor keys in first-seen order."""
        return list(self._by_actor.keys())

    # =========================================================================
    # Search
    # =========================================================================

    def find_similar(
        self,
        statement: Statement,
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[SimilarStatement]:
        """Find nearest neighbours of ``statement`` across all actors.

        Args:
            statement: Query statement (excluded from results).
            threshold: Minimum cosine similarity. Defaults to the high threshold.
            limit: Maximum hits. Defaults to settings.

        Returns:
            Hits sorted by similarity descending; ties keep insertion order.
        """
        if threshold is None:
            threshold = self.similarity.high_threshold
        if limit is None:
            limit = get_settings().find_similar_default_limit

        query = self.similarity.vector_for(statement.text, statement.embedding)
        hits: list[SimilarStatement] = []

        for candidate in self._statements.values():
            if candidate.statement_id == statement.statement_id:
                continue
            vector = self.similarity.vector_for(candidate.text, candidate.embedding)
            score = self.similarity.cosine(query, vector)
            if score >= threshold:
                hits.append(SimilarStatement(statement=candidate, similarity=score))

        # sorted() is stable, so equal scores stay in insertion order
        hits = sorted(hits, key=lambda hit: -hit.similarity)
        return hits[:limit]

    def search(
        self,
        query: str,
        limit: int = 10,
        min_score: float = DEFAULT_SEARCH_MIN_SCORE,
    ) -> list[SearchHit]:
        """Fuzzy text search over statement texts.

        Uses rapidfuzz token_set_ratio, which tolerates word-order changes and
        extra words ("signed contract" matches "I signed the contract").

        Args:
            query: Search text.
            limit: Maximum hits.
            min_score: Minimum score (0-100).

        Returns:
            Hits sorted by score descending; ties keep insertion order.
        """
        if not query.strip():
            return []

        query_lower = query.lower()
        hits = [
            SearchHit(statement=s, score=score)
            for s in self._statements.values()
            if (score := fuzz.token_set_ratio(query_lower, s.text.lower())) >= min_score
        ]
        hits = sorted(hits, key=lambda hit: -hit.score)

        logger.debug(
            "statement_search_complete",
            query_length=len(query),
            hits=len(hits),
        )
        return hits[:limit]

    def statistics(self) -> IndexStatistics:
        """Summarize the indexed corpus."""
        statements = self._statements.values()
        return IndexStatistics(
            total_statements=len(self._statements),
            timestamped_statements=sum(1 for s in statements if s.timestamp is not None),
            by_actor={k: len(v) for k, v in self._by_actor.items()},
            by_document={k: len(v) for k, v in self._by_document.items()},
            by_category={k.value: len(v) for k, v in self._by_category.items()},
            by_source_type=dict(Counter(s.source_type.value for s in statements)),
        )
