"""Truth engine: contradiction, behavior and liability analysis of statements."""

from truth_engine.core.exceptions import (
    ConfigurationError,
    DuplicateStatementError,
    PipelineStateError,
    StatementValidationError,
    TruthEngineError,
)
from truth_engine.engines.orchestrator import Orchestrator, PipelineState, get_orchestrator
from truth_engine.models import ActorInput, StatementInput, TruthReport

__version__ = "0.1.0"

__all__ = [
    "ActorInput",
    "ConfigurationError",
    "DuplicateStatementError",
    "Orchestrator",
    "PipelineState",
    "PipelineStateError",
    "StatementInput",
    "StatementValidationError",
    "TruthEngineError",
    "TruthReport",
    "get_orchestrator",
]
