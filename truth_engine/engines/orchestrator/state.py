"""Pipeline states of the orchestrator."""

from enum import Enum


class PipelineState(str, Enum):
    """Stage reached by an orchestrator run, in pipeline order."""

    EMPTY = "empty"
    INDEXED = "indexed"
    EMBEDDED = "embedded"
    PROFILED = "profiled"
    TIMELINE_BUILT = "timeline_built"
    DETECTED = "detected"
    SCORED = "scored"
    REPORTED = "reported"
