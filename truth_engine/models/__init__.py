"""Pydantic models module."""

from truth_engine.models.behavior import (
    SEVERITY_CONFIDENCE,
    BehavioralPattern,
    BehaviorType,
    DelayedResponseEvidence,
    GapEvidence,
    KeywordEvidence,
    PatternSeverity,
    WithdrawalEvidence,
)
from truth_engine.models.contradiction import (
    Contradiction,
    ContradictionType,
    LegalTrigger,
    TimelineConflictType,
    clamp_severity,
)
from truth_engine.models.entity import (
    Claim,
    ClaimCategory,
    EntityProfile,
    FinancialFigure,
    TrendPoint,
    claim_category_for,
)
from truth_engine.models.liability import (
    LiabilityEntry,
    LiabilityLevel,
    LiabilityWeights,
)
from truth_engine.models.report import ReportSummary, TruthReport
from truth_engine.models.statement import (
    LEGAL_WEIGHT_CATEGORIES,
    Actor,
    ActorInput,
    LegalCategory,
    SourceType,
    Statement,
    StatementInput,
    chronological_key,
    normalize_actor_name,
)
from truth_engine.models.timeline import (
    ActivityCluster,
    EventType,
    TimelineEvent,
    TimelineGap,
    TimelineStatistics,
)

__all__ = [
    # Statement models
    "Actor",
    "ActorInput",
    "LEGAL_WEIGHT_CATEGORIES",
    "LegalCategory",
    "SourceType",
    "Statement",
    "StatementInput",
    "chronological_key",
    "normalize_actor_name",
    # Entity models
    "Claim",
    "ClaimCategory",
    "EntityProfile",
    "FinancialFigure",
    "TrendPoint",
    "claim_category_for",
    # Timeline models
    "ActivityCluster",
    "EventType",
    "TimelineEvent",
    "TimelineGap",
    "TimelineStatistics",
    # Contradiction models
    "Contradiction",
    "ContradictionType",
    "LegalTrigger",
    "TimelineConflictType",
    "clamp_severity",
    # Behavioral models
    "BehaviorType",
    "BehavioralPattern",
    "DelayedResponseEvidence",
    "GapEvidence",
    "KeywordEvidence",
    "PatternSeverity",
    "SEVERITY_CONFIDENCE",
    "WithdrawalEvidence",
    # Liability models
    "LiabilityEntry",
    "LiabilityLevel",
    "LiabilityWeights",
    # Report
    "ReportSummary",
    "TruthReport",
]
