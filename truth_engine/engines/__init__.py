"""Analysis engines - Statements, Entity, Timeline, Contradiction, Behavioral, Liability, Orchestrator."""

from truth_engine.engines.behavioral import BehavioralPatternDetector, get_behavioral_detector
from truth_engine.engines.contradiction import default_passes, rank_contradictions
from truth_engine.engines.entity import EntityProfileBuilder, get_entity_profile_builder
from truth_engine.engines.liability import LiabilityScorer, get_liability_scorer
from truth_engine.engines.orchestrator import Orchestrator, PipelineState, get_orchestrator
from truth_engine.engines.statements import (
    Embedder,
    Similarity,
    StatementIndex,
    get_embedder,
    get_similarity,
)
from truth_engine.engines.timeline import TimelineBuilder, get_timeline_builder

__all__ = [
    # Statements
    "Embedder",
    "Similarity",
    "StatementIndex",
    "get_embedder",
    "get_similarity",
    # Entity
    "EntityProfileBuilder",
    "get_entity_profile_builder",
    # Timeline
    "TimelineBuilder",
    "get_timeline_builder",
    # Contradiction
    "default_passes",
    "rank_contradictions",
    # Behavioral
    "BehavioralPatternDetector",
    "get_behavioral_detector",
    # Liability
    "LiabilityScorer",
    "get_liability_scorer",
    # Orchestrator
    "Orchestrator",
    "PipelineState",
    "get_orchestrator",
]
