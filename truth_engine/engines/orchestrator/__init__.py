"""Orchestrator engine: staged pipeline and pass execution."""

from truth_engine.engines.orchestrator.executor import PassExecutor, PassResult
from truth_engine.engines.orchestrator.orchestrator import (
    CRITICAL_SEVERITY,
    Orchestrator,
    get_orchestrator,
)
from truth_engine.engines.orchestrator.state import PipelineState

__all__ = [
    "CRITICAL_SEVERITY",
    "Orchestrator",
    "PassExecutor",
    "PassResult",
    "PipelineState",
    "get_orchestrator",
]
