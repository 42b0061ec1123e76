"""Timeline engine: event classification and chronological construction."""

from truth_engine.engines.timeline.causal_sequences import (
    CAUSAL_RULES,
    CAUSALITY_VIOLATION_SEVERITY,
    CausalRule,
    matching_rules,
)
from truth_engine.engines.timeline.event_classifier import (
    EVENT_KEYWORD_RULES,
    classify_event,
)
from truth_engine.engines.timeline.timeline_builder import (
    TimelineBuilder,
    TimelineBuildResult,
    events_for_actor,
    get_timeline_builder,
)

__all__ = [
    "CAUSAL_RULES",
    "CAUSALITY_VIOLATION_SEVERITY",
    "CausalRule",
    "matching_rules",
    "EVENT_KEYWORD_RULES",
    "classify_event",
    "TimelineBuilder",
    "TimelineBuildResult",
    "events_for_actor",
    "get_timeline_builder",
]
