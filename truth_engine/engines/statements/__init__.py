"""Statement layer: ingestion, embedding, similarity and indexing."""

from truth_engine.engines.statements.embedder import (
    STOPWORDS,
    Embedder,
    FixedVector,
    get_embedder,
    significant_tokens,
    tokenize,
)
from truth_engine.engines.statements.ingestion import (
    build_statements,
    parse_timestamp,
    validate_statement_inputs,
)
from truth_engine.engines.statements.similarity import (
    NEGATION_TERMS,
    Similarity,
    cosine,
    get_similarity,
    negation_terms_in,
)
from truth_engine.engines.statements.statement_index import (
    IndexStatistics,
    SearchHit,
    SimilarStatement,
    StatementIndex,
)
from truth_engine.engines.statements.text_signals import (
    CURRENCY_PATTERN,
    classify_legal_category,
    contains_phrase,
    find_phrases,
    score_certainty,
    score_sentiment,
)

__all__ = [
    "Embedder",
    "FixedVector",
    "STOPWORDS",
    "get_embedder",
    "significant_tokens",
    "tokenize",
    "NEGATION_TERMS",
    "Similarity",
    "cosine",
    "get_similarity",
    "negation_terms_in",
    "IndexStatistics",
    "SearchHit",
    "SimilarStatement",
    "StatementIndex",
    "build_statements",
    "parse_timestamp",
    "validate_statement_inputs",
    "CURRENCY_PATTERN",
    "classify_legal_category",
    "contains_phrase",
    "find_phrases",
    "score_certainty",
    "score_sentiment",
]
