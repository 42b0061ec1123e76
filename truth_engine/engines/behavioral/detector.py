"""Behavioral pattern detection.

Multi-pass analysis per actor:
1. Keyword families (manipulation, stress, defensive language, avoidance)
   over the actor's collected statement text
2. Timeline patterns over the actor's events:
   - ghosting: gaps longer than the configured number of days
   - sudden withdrawal: second-half event rate collapses
   - delayed response: communication long after a payment
"""

import re
from collections.abc import Sequence
from datetime import timedelta

import structlog

from truth_engine.core.config import Settings, get_settings
from truth_engine.engines.behavioral.patterns import KEYWORD_FAMILIES, KeywordFamily
from truth_engine.engines.statements.similarity import normalize_apostrophes
from truth_engine.engines.statements.text_signals import contains_phrase, find_phrases
from truth_engine.engines.timeline.timeline_builder import events_for_actor
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
from truth_engine.models.entity import EntityProfile
from truth_engine.models.statement import Statement
from truth_engine.models.timeline import EventType, TimelineEvent

logger = structlog.get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

SENTENCE_SPLIT = re.compile(r"[.!?\n]")

# Instances kept on a pattern
MAX_INSTANCES = 10

# Ghosting gaps at or above this count are HIGH severity
GHOSTING_HIGH_GAP_COUNT = 2

SECONDS_PER_DAY = 86400


def keyword_severity(sentence_count: int) -> PatternSeverity:
    """1 -> LOW, 2 -> MEDIUM, 3-4 -> HIGH, 5+ -> CRITICAL."""
    if sentence_count >= 5:
        return PatternSeverity.CRITICAL
    if sentence_count >= 3:
        return PatternSeverity.HIGH
    if sentence_count >= 2:
        return PatternSeverity.MEDIUM
    return PatternSeverity.LOW


def split_sentences(texts: Sequence[str]) -> list[str]:
    """Split texts into trimmed, non-empty sentences."""
    sentences = []
    for text in texts:
        sentences.extend(s.strip() for s in SENTENCE_SPLIT.split(text) if s.strip())
    return sentences


def _days(delta: timedelta) -> float:
    return delta.total_seconds() / SECONDS_PER_DAY


# =============================================================================
# Detector Class
# =============================================================================


class BehavioralPatternDetector:
    """Detect behavioral red flags per actor.

    Example:
        >>> detector = BehavioralPatternDetector()
        >>> patterns = detector.detect(profiles, statements, timeline)
        >>> patterns[0].pattern_type
        <BehaviorType.GASLIGHTING: 'gaslighting'>
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the detector.

        Args:
            settings: Thresholds for timeline patterns. Defaults to get_settings().
        """
        self.settings = settings or get_settings()

    def detect(
        self,
        profiles: Sequence[EntityProfile],
        statements: Sequence[Statement],
        timeline: Sequence[TimelineEvent],
    ) -> list[BehavioralPattern]:
        """Run every behavioral pass for every profile.

        Args:
            profiles: Entity profiles (sorted by actor key).
            statements: All statements of the run.
            timeline: Chronologically sorted timeline events.

        Returns:
            Patterns grouped by actor, keyword families first, in table order.
        """
        by_id = {s.statement_id: s for s in statements}
        patterns: list[BehavioralPattern] = []

        for profile in profiles:
            texts = [by_id[sid].text for sid in profile.statement_ids if sid in by_id]
            patterns.extend(self.detect_keyword_patterns(profile.actor_key, texts))

            events = events_for_actor(timeline, profile.actor_key)
            for check in (self.detect_ghosting, self.detect_sudden_withdrawal, self.detect_delayed_response):
                pattern = check(profile.actor_key, events)
                if pattern is not None:
                    patterns.append(pattern)

        logger.info(
            "behavioral_detection_complete",
            profiles_checked=len(profiles),
            patterns_found=len(patterns),
        )
        return patterns

    # =========================================================================
    # Keyword families
    # =========================================================================

    def detect_keyword_patterns(
        self,
        actor_key: str,
        texts: Sequence[str],
        families: Sequence[KeywordFamily] = KEYWORD_FAMILIES,
    ) -> list[BehavioralPattern]:
        """Match every keyword family against the actor's sentences."""
        sentences = split_sentences(texts)
        lowered = [normalize_apostrophes(s) for s in sentences]
        patterns = []

        for family in families:
            matched: list[str] = []
            for sentence, sentence_lower in zip(sentences, lowered):
                if contains_phrase(sentence_lower, family.phrases) and sentence not in matched:
                    matched.append(sentence)

            if len(matched) < family.min_instances:
                continue

            phrases = find_phrases(" \n ".join(lowered), family.phrases)
            severity = keyword_severity(len(matched))
            patterns.append(
                BehavioralPattern(
                    actor_key=actor_key,
                    pattern_type=family.behavior,
                    severity=severity,
                    instances=matched[:MAX_INSTANCES],
                    confidence=SEVERITY_CONFIDENCE[severity],
                    description=family.description,
                    evidence=KeywordEvidence(
                        matched_phrases=phrases,
                        sentence_count=len(matched),
                    ),
                )
            )
        return patterns

    # =========================================================================
    # Timeline patterns
    # =========================================================================

    def detect_ghosting(
        self,
        actor_key: str,
        events: Sequence[TimelineEvent],
    ) -> BehavioralPattern | None:
        """Gaps longer than ghosting_gap_days between consecutive events."""
        if len(events) < 2:
            return None

        threshold = timedelta(days=self.settings.ghosting_gap_days)
        gaps = [
            after.timestamp - before.timestamp
            for before, after in zip(events, events[1:])
            if after.timestamp - before.timestamp > threshold
        ]
        if not gaps:
            return None

        severity = (
            PatternSeverity.HIGH if len(gaps) >= GHOSTING_HIGH_GAP_COUNT else PatternSeverity.MEDIUM
        )
        return BehavioralPattern(
            actor_key=actor_key,
            pattern_type=BehaviorType.GHOSTING,
            severity=severity,
            instances=[f"No communication for {_days(gap):.1f} days" for gap in gaps][:MAX_INSTANCES],
            confidence=SEVERITY_CONFIDENCE[severity],
            description="Extended period(s) of no communication detected",
            evidence=GapEvidence(
                gap_days=[round(_days(gap), 2) for gap in gaps],
                threshold_days=self.settings.ghosting_gap_days,
            ),
        )

    def detect_sudden_withdrawal(
        self,
        actor_key: str,
        events: Sequence[TimelineEvent],
    ) -> BehavioralPattern | None:
        """Second-half event rate below withdrawal_rate_ratio of the first half."""
        if len(events) < self.settings.withdrawal_min_events:
            return None

        middle = len(events) // 2
        first_half, second_half = events[:middle], events[middle:]
        if len(first_half) < 2 or len(second_half) < 2:
            return None

        first_days = _days(first_half[-1].timestamp - first_half[0].timestamp)
        second_days = _days(second_half[-1].timestamp - second_half[0].timestamp)
        if first_days <= 0 or second_days <= 0:
            return None

        first_rate = len(first_half) / first_days
        second_rate = len(second_half) / second_days
        if second_rate >= first_rate * self.settings.withdrawal_rate_ratio:
            return None

        severity = PatternSeverity.MEDIUM
        return BehavioralPattern(
            actor_key=actor_key,
            pattern_type=BehaviorType.SUDDEN_WITHDRAWAL,
            severity=severity,
            instances=["Communication frequency dropped significantly"],
            confidence=SEVERITY_CONFIDENCE[severity],
            description="Activity rate collapsed in the second half of the timeline",
            evidence=WithdrawalEvidence(
                first_half_rate=round(first_rate, 4),
                second_half_rate=round(second_rate, 4),
                event_count=len(events),
            ),
        )

    def detect_delayed_response(
        self,
        actor_key: str,
        events: Sequence[TimelineEvent],
    ) -> BehavioralPattern | None:
        """A communication arriving more than delayed_response_days after a payment."""
        threshold = timedelta(days=self.settings.delayed_response_days)
        payments = [e for e in events if e.event_type == EventType.PAYMENT]
        communications = [e for e in events if e.event_type == EventType.COMMUNICATION]

        for payment in payments:
            for response in communications:
                delay = response.timestamp - payment.timestamp
                if delay <= threshold:
                    continue

                severity = PatternSeverity.MEDIUM
                return BehavioralPattern(
                    actor_key=actor_key,
                    pattern_type=BehaviorType.DELAYED_RESPONSE,
                    severity=severity,
                    instances=["Response delayed after financial event"],
                    confidence=SEVERITY_CONFIDENCE[severity],
                    description=f"Communication {_days(delay):.1f} days after a payment",
                    evidence=DelayedResponseEvidence(
                        payment_event_id=payment.event_id,
                        response_event_id=response.event_id,
                        delay_days=round(_days(delay), 2),
                    ),
                )
        return None


def attach_patterns(
    profiles: Sequence[EntityProfile],
    patterns: Sequence[BehavioralPattern],
) -> list[EntityProfile]:
    """Copies of the profiles with their detected pattern types attached."""
    by_actor: dict[str, set[BehaviorType]] = {}
    for pattern in patterns:
        by_actor.setdefault(pattern.actor_key, set()).add(pattern.pattern_type)

    return [
        profile.model_copy(
            update={
                "patterns": tuple(
                    sorted(by_actor.get(profile.actor_key, set()), key=lambda b: b.value)
                )
            }
        )
        for profile in profiles
    ]


# =============================================================================
# Module-level factory function
# =============================================================================


def get_behavioral_detector() -> BehavioralPatternDetector:
    """Create a behavioral pattern detector configured from settings."""
    return BehavioralPatternDetector()
