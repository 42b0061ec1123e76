"""Structured report produced by the orchestrator.

The report is the single output value handed to narrative and rendering
collaborators; ``model_dump(mode="json")`` yields its stable schema.
"""

from pydantic import BaseModel, Field

from truth_engine.models.behavior import BehavioralPattern
from truth_engine.models.contradiction import Contradiction
from truth_engine.models.entity import EntityProfile
from truth_engine.models.liability import LiabilityEntry
from truth_engine.models.statement import Statement
from truth_engine.models.timeline import TimelineEvent, TimelineStatistics

REPORT_SCHEMA_VERSION = "1.0"


class ReportSummary(BaseModel):
    """Headline figures for the report."""

    total_statements: int = 0
    total_actors: int = 0
    total_contradictions: int = 0
    contradictions_by_type: dict[str, int] = Field(default_factory=dict)
    critical_contradictions: int = Field(default=0, description="Severity >= 8")
    total_behavioral_patterns: int = 0
    highest_liability_actor: str | None = None
    legal_triggers: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    narrative: str = ""


class TruthReport(BaseModel):
    """Complete analysis of one batch of statements."""

    schema_version: str = REPORT_SCHEMA_VERSION
    statements: list[Statement] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)
    timeline_statistics: TimelineStatistics = Field(default_factory=TimelineStatistics)
    profiles: list[EntityProfile] = Field(default_factory=list)
    contradictions: list[Contradiction] = Field(default_factory=list)
    behavioral_patterns: list[BehavioralPattern] = Field(default_factory=list)
    liability: dict[str, LiabilityEntry] = Field(default_factory=dict)
    summary: ReportSummary = Field(default_factory=ReportSummary)
