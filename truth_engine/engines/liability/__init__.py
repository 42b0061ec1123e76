"""Liability engine: weighted per-actor scoring."""

from truth_engine.engines.liability.scorer import (
    CAUSAL_KEYWORDS,
    LiabilityScorer,
    get_liability_scorer,
    liability_level,
    load_weights,
)

__all__ = [
    "CAUSAL_KEYWORDS",
    "LiabilityScorer",
    "get_liability_scorer",
    "liability_level",
    "load_weights",
]
