"""Multi-factor liability scoring.

Each actor gets five sub-scores in [0, 1]:
- contradiction: contradictions involving the actor per statement made
- behavioral: mean confidence of the actor's behavioral patterns
- evidence: breadth of source types the actor appears in
- consistency: share of the actor's statement pairs that were not flagged
- causal: share of the actor's events that read as initiating actions

    total = (c*w1 + b*w2 + e*w3 + (1 - consistency)*w4 + causal*w5) * 100
"""

from collections.abc import Mapping, Sequence

import structlog
from pydantic import ValidationError

from truth_engine.core.config import get_settings
from truth_engine.core.exceptions import ConfigurationError
from truth_engine.engines.timeline.timeline_builder import events_for_actor
from truth_engine.models.behavior import BehavioralPattern
from truth_engine.models.contradiction import Contradiction
from truth_engine.models.entity import EntityProfile
from truth_engine.models.liability import LiabilityEntry, LiabilityLevel, LiabilityWeights
from truth_engine.models.statement import SourceType, Statement
from truth_engine.models.timeline import TimelineEvent

logger = structlog.get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Words marking an event as initiated by the actor
CAUSAL_KEYWORDS: tuple[str, ...] = ("request", "demand", "sent", "initiated", "started")

# Lower bounds of each level, checked highest first
LEVEL_BANDS: tuple[tuple[float, LiabilityLevel], ...] = (
    (75.0, LiabilityLevel.CRITICAL),
    (55.0, LiabilityLevel.HIGH),
    (35.0, LiabilityLevel.MEDIUM),
    (15.0, LiabilityLevel.LOW),
)

# Sub-scores at or above this produce a reason line
REASON_THRESHOLD = 0.5


def liability_level(total: float) -> LiabilityLevel:
    """Band a total percentage into a liability level."""
    for lower_bound, level in LEVEL_BANDS:
        if total >= lower_bound:
            return level
    return LiabilityLevel.MINIMAL


def load_weights(weights: Mapping[str, float] | None = None) -> LiabilityWeights:
    """Validate a weight mapping, defaulting to the configured preset.

    Raises:
        ConfigurationError: If a weight is missing, out of range, or the
            weights do not sum to 1.0.
    """
    raw = dict(weights) if weights is not None else get_settings().liability_weights
    try:
        return LiabilityWeights.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            message=f"Invalid liability weights: {raw}",
            details={"weights": raw, "errors": [err["msg"] for err in e.errors()]},
        ) from e


# =============================================================================
# Scorer Class
# =============================================================================


class LiabilityScorer:
    """Weighted liability scoring per actor.

    Example:
        >>> scorer = LiabilityScorer()
        >>> entries = scorer.score(profiles, statements, contradictions, patterns, timeline)
        >>> entries["john smith"].level
        <LiabilityLevel.MEDIUM: 'medium'>
    """

    def __init__(self, weights: LiabilityWeights | Mapping[str, float] | None = None) -> None:
        """Initialize the scorer.

        Args:
            weights: Explicit weights. Defaults to the configured preset.

        Raises:
            ConfigurationError: If the weights are invalid.
        """
        if isinstance(weights, LiabilityWeights):
            self.weights = weights
        else:
            self.weights = load_weights(weights)

    def score(
        self,
        profiles: Sequence[EntityProfile],
        statements: Sequence[Statement],
        contradictions: Sequence[Contradiction],
        patterns: Sequence[BehavioralPattern],
        timeline: Sequence[TimelineEvent],
    ) -> dict[str, LiabilityEntry]:
        """Score every profiled actor.

        Returns:
            Actor key -> LiabilityEntry, in profile order.
        """
        by_id = {s.statement_id: s for s in statements}
        entries: dict[str, LiabilityEntry] = {}

        for profile in profiles:
            actor_statements = [by_id[sid] for sid in profile.statement_ids if sid in by_id]
            actor_contradictions = [
                c for c in contradictions if profile.actor_key in c.affected_actors
            ]
            actor_patterns = [p for p in patterns if p.actor_key == profile.actor_key]
            actor_events = events_for_actor(timeline, profile.actor_key)

            entries[profile.actor_key] = self.score_actor(
                profile,
                actor_statements,
                actor_contradictions,
                actor_patterns,
                actor_events,
            )

        logger.info(
            "liability_scoring_complete",
            actors_scored=len(entries),
            weights=self.weights.model_dump(),
        )
        return entries

    def score_actor(
        self,
        profile: EntityProfile,
        statements: Sequence[Statement],
        contradictions: Sequence[Contradiction],
        patterns: Sequence[BehavioralPattern],
        events: Sequence[TimelineEvent],
    ) -> LiabilityEntry:
        """Score one actor from its own statements, contradictions, patterns and events."""
        contradiction = self.contradiction_score(len(statements), len(contradictions))
        behavioral = self.behavioral_score(patterns)
        evidence = self.evidence_score(statements)
        consistency = self.consistency_score(statements, contradictions)
        causal = self.causal_score(events)

        w = self.weights
        raw = (
            contradiction * w.contradiction
            + behavioral * w.behavioral
            + evidence * w.evidence
            + (1.0 - consistency) * w.consistency
            + causal * w.causal
        )
        total = round(max(0.0, min(100.0, raw * 100.0)), 2)

        return LiabilityEntry(
            actor_key=profile.actor_key,
            display_name=profile.display_name,
            contradiction_score=contradiction,
            behavioral_score=behavioral,
            evidence_score=evidence,
            consistency_score=consistency,
            causal_score=causal,
            total=total,
            level=liability_level(total),
            reasons=self._reasons(
                len(contradictions), patterns, evidence, consistency, causal
            ),
        )

    # =========================================================================
    # Sub-scores
    # =========================================================================

    @staticmethod
    def contradiction_score(statement_count: int, contradiction_count: int) -> float:
        if statement_count == 0:
            return 0.0
        return min(1.0, contradiction_count / statement_count)

    @staticmethod
    def behavioral_score(patterns: Sequence[BehavioralPattern]) -> float:
        if not patterns:
            return 0.0
        return sum(p.confidence for p in patterns) / len(patterns)

    @staticmethod
    def evidence_score(statements: Sequence[Statement]) -> float:
        return len({s.source_type for s in statements}) / len(SourceType)

    @staticmethod
    def consistency_score(
        statements: Sequence[Statement],
        contradictions: Sequence[Contradiction],
    ) -> float:
        """1 minus the share of same-actor statement pairs flagged as contradictory."""
        if len(statements) < 2:
            return 1.0

        own_ids = {s.statement_id for s in statements}
        flagged = {
            c.statement_pair
            for c in contradictions
            if set(c.statement_pair) <= own_ids and c.statement_pair[0] != c.statement_pair[1]
        }
        total_pairs = len(statements) * (len(statements) - 1) // 2
        return 1.0 - min(1.0, len(flagged) / total_pairs)

    @staticmethod
    def causal_score(events: Sequence[TimelineEvent]) -> float:
        if not events:
            return 0.0
        initiating = sum(
            1
            for event in events
            if any(keyword in event.description.lower() for keyword in CAUSAL_KEYWORDS)
        )
        return initiating / len(events)

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @staticmethod
    def _reasons(
        contradiction_count: int,
        patterns: Sequence[BehavioralPattern],
        evidence: float,
        consistency: float,
        causal: float,
    ) -> list[str]:
        reasons = []
        if contradiction_count:
            reasons.append(f"Involved in {contradiction_count} contradiction(s)")
        if patterns:
            kinds = sorted({p.pattern_type.value.replace("_", " ") for p in patterns})
            reasons.append(f"Behavioral patterns: {', '.join(kinds)}")
        if evidence >= REASON_THRESHOLD:
            reasons.append("Appears across many evidence sources")
        if consistency < 1.0:
            reasons.append(f"Statement consistency {consistency:.0%}")
        if causal >= REASON_THRESHOLD:
            reasons.append("Initiated most of their recorded events")
        return reasons


# =============================================================================
# Module-level factory function
# =============================================================================


def get_liability_scorer() -> LiabilityScorer:
    """Create a liability scorer with the configured weights."""
    return LiabilityScorer()
