"""Contradiction engine: the five detection passes and ranking."""

from collections.abc import Iterable

from truth_engine.engines.base import ContradictionPass
from truth_engine.engines.contradiction.cross_entity import CrossEntityContradictionDetector
from truth_engine.engines.contradiction.direct import DirectContradictionDetector
from truth_engine.engines.contradiction.entity import EntityContradictionDetector
from truth_engine.engines.contradiction.rules import (
    NEGATION_PAIRS,
    TRIGGER_DESCRIPTIONS,
    TRIGGER_RECOMMENDATIONS,
    statements_contradict,
    word_overlap,
)
from truth_engine.engines.contradiction.semantic import SemanticDriftDetector
from truth_engine.engines.contradiction.timeline import TimelineContradictionDetector
from truth_engine.models.contradiction import Contradiction

# Fixed pass order; results are concatenated in this order before ranking
PASS_ORDER: tuple[type[ContradictionPass], ...] = (
    DirectContradictionDetector,
    SemanticDriftDetector,
    TimelineContradictionDetector,
    EntityContradictionDetector,
    CrossEntityContradictionDetector,
)


def default_passes() -> list[ContradictionPass]:
    """Fresh instances of the five passes in pass order."""
    return [pass_class() for pass_class in PASS_ORDER]


def rank_contradictions(contradictions: Iterable[Contradiction]) -> list[Contradiction]:
    """Stable sort by severity descending; equal severities keep pass order."""
    return sorted(contradictions, key=lambda c: -c.severity)


__all__ = [
    "CrossEntityContradictionDetector",
    "DirectContradictionDetector",
    "EntityContradictionDetector",
    "SemanticDriftDetector",
    "TimelineContradictionDetector",
    "NEGATION_PAIRS",
    "TRIGGER_DESCRIPTIONS",
    "TRIGGER_RECOMMENDATIONS",
    "statements_contradict",
    "word_overlap",
    "PASS_ORDER",
    "default_passes",
    "rank_contradictions",
]
