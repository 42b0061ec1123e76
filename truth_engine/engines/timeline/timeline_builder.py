"""Timeline construction from timestamped statements.

Builds one TimelineEvent per timestamped statement, ordered chronologically,
and derives statistics over the result:
- event counts by type and by actor
- significant gaps (7+ whole days between consecutive events)
- activity clusters (3+ events within 3 days of the cluster start)

Undated statements never become events; their IDs are reported in the
statistics instead.
"""

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from truth_engine.engines.timeline.event_classifier import classify_event
from truth_engine.models.statement import Statement, chronological_key
from truth_engine.models.timeline import (
    ActivityCluster,
    EventType,
    TimelineEvent,
    TimelineGap,
    TimelineStatistics,
)

logger = structlog.get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DESCRIPTION_LENGTH = 200

# Gaps of at least this many whole days are significant
SIGNIFICANT_GAP_DAYS = 7

# Cluster window (whole days from cluster start) and minimum size
CLUSTER_WINDOW_DAYS = 3
CLUSTER_MIN_EVENTS = 3


@dataclass
class TimelineBuildResult:
    """Events in chronological order plus statistics."""

    events: list[TimelineEvent] = field(default_factory=list)
    statistics: TimelineStatistics = field(default_factory=TimelineStatistics)


def events_for_actor(events: Sequence[TimelineEvent], actor_key: str) -> list[TimelineEvent]:
    """Events linked to one actor, preserving order."""
    return [e for e in events if actor_key in e.actor_keys]


# =============================================================================
# Builder Class
# =============================================================================


class TimelineBuilder:
    """Build a chronological timeline from statements.

    Example:
        >>> builder = TimelineBuilder()
        >>> result = builder.build(statements, statement_actor)
        >>> result.statistics.total_events
        3
    """

    def build(
        self,
        statements: Sequence[Statement],
        statement_actor: Mapping[str, str] | None = None,
    ) -> TimelineBuildResult:
        """Build timeline events and statistics.

        Args:
            statements: Statements in any order.
            statement_actor: Statement ID -> resolved actor key. Falls back to
                the statement's own normalized actor name.

        Returns:
            TimelineBuildResult with events sorted by (timestamp, event_id).
        """
        statement_actor = statement_actor or {}
        events: list[TimelineEvent] = []
        undated: list[str] = []

        for statement in sorted(statements, key=chronological_key):
            if statement.timestamp is None:
                undated.append(statement.statement_id)
                continue
            actor_key = statement_actor.get(statement.statement_id, statement.actor_key)
            events.append(
                TimelineEvent(
                    event_id=f"evt-{statement.statement_id}",
                    timestamp=statement.timestamp,
                    description=statement.text[:DESCRIPTION_LENGTH],
                    event_type=classify_event(statement),
                    actor_keys=(actor_key,),
                    statement_ids=(statement.statement_id,),
                    document_id=statement.document_id,
                )
            )

        events.sort(key=lambda e: (e.timestamp, e.event_id))
        statistics = self.compute_statistics(events, undated)

        logger.info(
            "timeline_built",
            event_count=len(events),
            undated_count=len(undated),
            gap_count=len(statistics.significant_gaps),
            cluster_count=len(statistics.activity_clusters),
        )
        return TimelineBuildResult(events=events, statistics=statistics)

    def compute_statistics(
        self,
        events: Sequence[TimelineEvent],
        undated_statement_ids: Sequence[str] = (),
    ) -> TimelineStatistics:
        """Compute statistics over chronologically sorted events."""
        if not events:
            return TimelineStatistics(
                undated_statement_ids=list(undated_statement_ids),
                summary="No dated events.",
            )

        gaps = self.find_gaps(events)
        clusters = self.find_clusters(events)
        earliest = events[0].timestamp
        latest = events[-1].timestamp

        summary = (
            f"{len(events)} events between {earliest.date().isoformat()} and "
            f"{latest.date().isoformat()}; {len(gaps)} significant gap(s), "
            f"{len(clusters)} activity cluster(s)"
        )
        if undated_statement_ids:
            summary += f"; {len(undated_statement_ids)} undated statement(s) excluded"

        return TimelineStatistics(
            total_events=len(events),
            undated_statement_ids=list(undated_statement_ids),
            earliest=earliest,
            latest=latest,
            events_by_type=dict(Counter(e.event_type.value for e in events)),
            events_by_actor=dict(Counter(e.primary_actor for e in events)),
            significant_gaps=gaps,
            activity_clusters=clusters,
            summary=summary,
        )

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @staticmethod
    def find_gaps(events: Sequence[TimelineEvent]) -> list[TimelineGap]:
        """Quiet periods of SIGNIFICANT_GAP_DAYS or more between consecutive events."""
        gaps = []
        for before, after in zip(events, events[1:]):
            days = (after.timestamp - before.timestamp).days
            if days >= SIGNIFICANT_GAP_DAYS:
                gaps.append(
                    TimelineGap(
                        start=before.timestamp,
                        end=after.timestamp,
                        days=days,
                        before_event_id=before.event_id,
                        after_event_id=after.event_id,
                    )
                )
        return gaps

    @staticmethod
    def find_clusters(events: Sequence[TimelineEvent]) -> list[ActivityCluster]:
        """Bursts of CLUSTER_MIN_EVENTS or more within CLUSTER_WINDOW_DAYS of a start."""
        clusters: list[ActivityCluster] = []
        current: list[TimelineEvent] = []

        def close(group: list[TimelineEvent]) -> None:
            if len(group) < CLUSTER_MIN_EVENTS:
                return
            dominant: EventType = Counter(e.event_type for e in group).most_common(1)[0][0]
            clusters.append(
                ActivityCluster(
                    start=group[0].timestamp,
                    end=group[-1].timestamp,
                    event_count=len(group),
                    dominant_type=dominant,
                )
            )

        for event in events:
            if current and (event.timestamp - current[0].timestamp).days > CLUSTER_WINDOW_DAYS:
                close(current)
                current = []
            current.append(event)
        close(current)

        return clusters


# =============================================================================
# Module-level factory function
# =============================================================================


def get_timeline_builder() -> TimelineBuilder:
    """Create a timeline builder."""
    return TimelineBuilder()
