"""Timeline contradiction pass.

Works on each actor's timeline events and detects:
1. Causality violations: an effect dated before its cause
2. Date mismatches: the same event dated differently in different documents
3. Impossible sequences: unrelated events from different documents minutes apart
"""

import re
from collections import defaultdict
from collections.abc import Sequence
from datetime import timedelta
from itertools import combinations

from truth_engine.engines.base import ContradictionPass, DetectionContext
from truth_engine.engines.contradiction.rules import snippet
from truth_engine.engines.timeline.causal_sequences import (
    CAUSALITY_VIOLATION_SEVERITY,
    matching_rules,
)
from truth_engine.models.contradiction import (
    Contradiction,
    ContradictionType,
    LegalTrigger,
    TimelineConflictType,
)
from truth_engine.models.timeline import TimelineEvent

# =============================================================================
# Constants
# =============================================================================

# Day-gap upper bounds -> severity; gaps beyond the last bound get the fallback
DATE_MISMATCH_SEVERITY_BANDS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (7, 4),
    (30, 6),
    (90, 7),
    (365, 8),
)
DATE_MISMATCH_MAX_SEVERITY = 9

IMPOSSIBLE_SEQUENCE_SEVERITY = 6

# Prefix length used to decide whether two descriptions overlap
DESCRIPTION_OVERLAP_PREFIX = 20

# Words in a description key
DESCRIPTION_KEY_WORDS = 5
DESCRIPTION_KEY_MIN_LENGTH = 4

CAUSALITY_CONFIDENCE = 0.9
DATE_MISMATCH_CONFIDENCE = 0.8
IMPOSSIBLE_SEQUENCE_CONFIDENCE = 0.7


def date_mismatch_severity(days: int) -> int:
    """Severity for a date mismatch of ``days`` whole days."""
    for upper, severity in DATE_MISMATCH_SEVERITY_BANDS:
        if days <= upper:
            return severity
    return DATE_MISMATCH_MAX_SEVERITY


def normalize_description(text: str) -> str:
    """Grouping key: first five alphabetically sorted words longer than three chars."""
    cleaned = re.sub(r"[^a-z0-9\s]", "", text.lower())
    words = sorted(w for w in cleaned.split() if len(w) >= DESCRIPTION_KEY_MIN_LENGTH)
    return " ".join(words[:DESCRIPTION_KEY_WORDS])


class TimelineContradictionDetector(ContradictionPass):
    """Per-actor timeline conflicts."""

    name = "timeline"

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        """Run causality, date-mismatch and impossible-sequence checks per actor."""
        by_actor: dict[str, list[TimelineEvent]] = defaultdict(list)
        for event in context.timeline:
            by_actor[event.primary_actor].append(event)

        contradictions: list[Contradiction] = []
        for actor_key in sorted(by_actor):
            events = by_actor[actor_key]
            if not actor_key or len(events) < 2:
                continue
            contradictions.extend(self._causality_violations(context, actor_key, events))
            contradictions.extend(self._date_mismatches(context, actor_key, events))
            contradictions.extend(self._impossible_sequences(context, actor_key, events))

        self.logger.info(
            "timeline_detection_complete",
            actors_checked=len(by_actor),
            contradictions_found=len(contradictions),
        )
        return contradictions

    # =========================================================================
    # Checks
    # =========================================================================

    def _causality_violations(
        self,
        context: DetectionContext,
        actor_key: str,
        events: Sequence[TimelineEvent],
    ) -> list[Contradiction]:
        results = []
        for cause in events:
            for effect in events:
                if cause.event_id == effect.event_id or effect.timestamp >= cause.timestamp:
                    continue
                for rule in matching_rules(cause.description, effect.description):
                    contradiction = self._build_from_events(
                        context,
                        source_event=effect,
                        target_event=cause,
                        severity=CAUSALITY_VIOLATION_SEVERITY,
                        confidence=CAUSALITY_CONFIDENCE,
                        conflict=TimelineConflictType.CAUSALITY_VIOLATION,
                        explanation=(
                            f"{rule.violation}: '{snippet(effect.description)}' happened "
                            f"before '{snippet(cause.description)}'"
                        ),
                        actor_key=actor_key,
                        discriminator=f"causality:{rule.cause}:{rule.effect}",
                    )
                    if contradiction is not None:
                        results.append(contradiction)
        return results

    def _date_mismatches(
        self,
        context: DetectionContext,
        actor_key: str,
        events: Sequence[TimelineEvent],
    ) -> list[Contradiction]:
        groups: dict[str, list[TimelineEvent]] = defaultdict(list)
        for event in events:
            key = normalize_description(event.description)
            if key:
                groups[key].append(event)

        results = []
        for key in sorted(groups):
            group = groups[key]
            widest: tuple[TimelineEvent, TimelineEvent] | None = None
            widest_gap = timedelta(0)
            for first, second in combinations(group, 2):
                if first.document_id == second.document_id:
                    continue
                gap = abs(second.timestamp - first.timestamp)
                if gap > widest_gap:
                    widest, widest_gap = (first, second), gap

            if widest is None or widest_gap.days <= 0:
                continue

            earlier, later = sorted(widest, key=lambda e: (e.timestamp, e.event_id))
            contradiction = self._build_from_events(
                context,
                source_event=earlier,
                target_event=later,
                severity=date_mismatch_severity(widest_gap.days),
                confidence=DATE_MISMATCH_CONFIDENCE,
                conflict=TimelineConflictType.DATE_MISMATCH,
                explanation=(
                    f"Same event has different dates: document '{earlier.document_id}' vs "
                    f"document '{later.document_id}' ({widest_gap.days} days difference)"
                ),
                actor_key=actor_key,
                discriminator=f"date_mismatch:{key}",
            )
            if contradiction is not None:
                results.append(contradiction)
        return results

    def _impossible_sequences(
        self,
        context: DetectionContext,
        actor_key: str,
        events: Sequence[TimelineEvent],
    ) -> list[Contradiction]:
        window = timedelta(minutes=context.settings.impossible_sequence_minutes)
        results = []
        for first, second in zip(events, events[1:]):
            if first.document_id == second.document_id:
                continue
            if second.timestamp - first.timestamp >= window:
                continue
            desc_a = first.description.lower()
            desc_b = second.description.lower()
            if (
                desc_b[:DESCRIPTION_OVERLAP_PREFIX] in desc_a
                or desc_a[:DESCRIPTION_OVERLAP_PREFIX] in desc_b
            ):
                continue

            minutes = int((second.timestamp - first.timestamp).total_seconds() // 60)
            contradiction = self._build_from_events(
                context,
                source_event=first,
                target_event=second,
                severity=IMPOSSIBLE_SEQUENCE_SEVERITY,
                confidence=IMPOSSIBLE_SEQUENCE_CONFIDENCE,
                conflict=TimelineConflictType.IMPOSSIBLE_SEQUENCE,
                explanation=(
                    f"'{actor_key}' cannot have done both '{snippet(first.description, 40)}' "
                    f"and '{snippet(second.description, 40)}' within {minutes} minutes"
                ),
                actor_key=actor_key,
                discriminator="impossible_sequence",
            )
            if contradiction is not None:
                results.append(contradiction)
        return results

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _build_from_events(
        self,
        context: DetectionContext,
        source_event: TimelineEvent,
        target_event: TimelineEvent,
        severity: int,
        confidence: float,
        conflict: TimelineConflictType,
        explanation: str,
        actor_key: str,
        discriminator: str,
    ) -> Contradiction | None:
        source = context.statement(source_event.statement_ids[0]) if source_event.statement_ids else None
        target = context.statement(target_event.statement_ids[0]) if target_event.statement_ids else None
        if source is None or target is None:
            self.logger.debug(
                "timeline_event_without_statement",
                source_event_id=source_event.event_id,
                target_event_id=target_event.event_id,
            )
            return None

        return self.build(
            ContradictionType.TIMELINE,
            source=source,
            target=target,
            severity=severity,
            confidence=confidence,
            explanation=explanation,
            legal_trigger=LegalTrigger.TIMELINE_INCONSISTENCY,
            affected_actors=[actor_key],
            timeline_conflict=conflict,
            discriminator=discriminator,
        )
