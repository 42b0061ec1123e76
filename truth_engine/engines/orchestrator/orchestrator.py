"""Truth engine orchestrator.

Drives one analysis run through a fixed sequence of stages:

    EMPTY -> INDEXED -> EMBEDDED -> PROFILED -> TIMELINE_BUILT
          -> DETECTED -> SCORED -> REPORTED

Each stage requires the previous one; calling a stage out of order raises
PipelineStateError. All collections are owned by the current run and are
dropped by reset(), so two runs never share state.
"""

from collections import Counter
from collections.abc import Sequence

import structlog

from truth_engine.core.config import Settings, get_settings
from truth_engine.core.exceptions import PipelineStateError
from truth_engine.engines.base import ContradictionPass, DetectionContext
from truth_engine.engines.behavioral.detector import BehavioralPatternDetector, attach_patterns
from truth_engine.engines.contradiction import (
    TRIGGER_RECOMMENDATIONS,
    default_passes,
    rank_contradictions,
)
from truth_engine.engines.entity.profile_builder import EntityProfileBuilder
from truth_engine.engines.liability.scorer import LiabilityScorer
from truth_engine.engines.orchestrator.executor import PassExecutor
from truth_engine.engines.orchestrator.state import PipelineState
from truth_engine.engines.statements.embedder import Embedder
from truth_engine.engines.statements.ingestion import (
    RawStatement,
    build_statements,
    validate_statement_inputs,
)
from truth_engine.engines.statements.similarity import Similarity
from truth_engine.engines.statements.statement_index import StatementIndex
from truth_engine.engines.timeline.timeline_builder import TimelineBuilder
from truth_engine.models.behavior import BehavioralPattern
from truth_engine.models.contradiction import Contradiction
from truth_engine.models.entity import EntityProfile
from truth_engine.models.liability import LiabilityEntry
from truth_engine.models.report import ReportSummary, TruthReport
from truth_engine.models.statement import ActorInput, Statement, chronological_key
from truth_engine.models.timeline import TimelineEvent, TimelineStatistics

logger = structlog.get_logger(__name__)

# Contradictions at or above this severity count as critical
CRITICAL_SEVERITY = 8


class Orchestrator:
    """Stateful pipeline over one batch of statements.

    Example:
        >>> orchestrator = get_orchestrator()
        >>> report = orchestrator.run([
        ...     {"actor": "John Smith", "text": "I signed the contract"},
        ...     {"actor": "John Smith", "text": "I never signed the contract"},
        ... ])
        >>> report.contradictions[0].type
        <ContradictionType.DIRECT: 'direct'>
    """

    def __init__(
        self,
        settings: Settings | None = None,
        passes: Sequence[ContradictionPass] | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Engine settings. Defaults to get_settings().
            passes: Contradiction passes in run order. Defaults to the five
                standard passes.
        """
        self.settings = settings or get_settings()
        self._passes = list(passes) if passes is not None else None
        self._state = PipelineState.EMPTY
        self._clear()

    @property
    def state(self) -> PipelineState:
        """Current pipeline stage."""
        return self._state

    # =========================================================================
    # Collaborators
    # =========================================================================

    def _make_similarity(self) -> Similarity:
        embedder = Embedder(
            dimensions=self.settings.embedding_dimensions,
            trigram_weight=self.settings.embedding_trigram_weight,
        )
        return Similarity(
            embedder=embedder,
            related_threshold=self.settings.similarity_related_threshold,
            drift_upper=self.settings.similarity_drift_upper,
            high_threshold=self.settings.similarity_high_threshold,
        )

    def _clear(self) -> None:
        self._similarity = self._make_similarity()
        self._index = StatementIndex(similarity=self._similarity)
        self._actors: list[ActorInput] = []
        self._statements: list[Statement] = []
        self._profiles: list[EntityProfile] = []
        self._statement_actor: dict[str, str] = {}
        self._timeline: list[TimelineEvent] = []
        self._timeline_statistics = TimelineStatistics()
        self._contradictions: list[Contradiction] = []
        self._patterns: list[BehavioralPattern] = []
        self._liability: dict[str, LiabilityEntry] = {}
        self._report: TruthReport | None = None

    def _require(self, operation: str, expected: PipelineState) -> None:
        if self._state != expected:
            logger.warning(
                "orchestrator_stage_out_of_order",
                operation=operation,
                expected=expected.value,
                actual=self._state.value,
            )
            raise PipelineStateError(operation, expected.value, self._state.value)

    def _advance(self, new_state: PipelineState, **context: object) -> None:
        self._state = new_state
        logger.info("orchestrator_stage_complete", stage=new_state.value, **context)

    @property
    def index_store(self) -> StatementIndex:
        """Statement index of the current run."""
        return self._index

    # =========================================================================
    # Stages
    # =========================================================================

    def index(
        self,
        statements: Sequence[RawStatement],
        actors: Sequence[ActorInput] | None = None,
    ) -> None:
        """Validate, normalize and index a batch of statements.

        Raises:
            PipelineStateError: Unless the orchestrator is EMPTY.
            StatementValidationError: If any record is invalid. Nothing is
                indexed in that case.
        """
        self._require("index", PipelineState.EMPTY)

        records = validate_statement_inputs(statements)
        built = build_statements(records)
        for statement in built:
            self._index.add(statement)

        self._statements = sorted(built, key=chronological_key)
        self._actors = [actor.model_copy(deep=True) for actor in actors or []]
        self._advance(
            PipelineState.INDEXED,
            statement_count=len(self._statements),
            actor_hint_count=len(self._actors),
        )

    def embed(self) -> None:
        """Attach an embedding to every indexed statement."""
        self._require("embed", PipelineState.INDEXED)

        embedder = self._similarity.embedder
        for statement in self._statements:
            statement.attach_embedding(embedder.embed(statement.text))

        self._advance(PipelineState.EMBEDDED, embedded=len(self._statements))

    def build_profiles(self) -> None:
        """Resolve actors and build entity profiles."""
        self._require("build_profiles", PipelineState.EMBEDDED)

        result = EntityProfileBuilder().build(self._statements, self._actors)
        self._profiles = result.profiles
        self._statement_actor = result.statement_actor

        self._advance(PipelineState.PROFILED, profile_count=len(self._profiles))

    def build_timeline(self) -> None:
        """Build the chronological event timeline."""
        self._require("build_timeline", PipelineState.PROFILED)

        result = TimelineBuilder().build(self._statements, self._statement_actor)
        self._timeline = result.events
        self._timeline_statistics = result.statistics

        self._advance(PipelineState.TIMELINE_BUILT, event_count=len(self._timeline))

    def detect(self) -> None:
        """Run the contradiction passes, then the behavioral pass."""
        self._require("detect", PipelineState.TIMELINE_BUILT)

        context = DetectionContext(
            statements=tuple(self._statements),
            profiles=tuple(self._profiles),
            timeline=tuple(self._timeline),
            similarity=self._similarity,
            settings=self.settings,
            statement_actor=self._statement_actor,
        )
        passes = self._passes if self._passes is not None else default_passes()
        results = PassExecutor(self.settings.detection_max_workers).execute(passes, context)
        self._contradictions = rank_contradictions(
            c for result in results for c in result.contradictions
        )

        detector = BehavioralPatternDetector(settings=self.settings)
        self._patterns = detector.detect(self._profiles, self._statements, self._timeline)
        self._profiles = attach_patterns(self._profiles, self._patterns)

        self._advance(
            PipelineState.DETECTED,
            contradiction_count=len(self._contradictions),
            pattern_count=len(self._patterns),
        )

    def score(self) -> None:
        """Compute liability per actor."""
        self._require("score", PipelineState.DETECTED)

        scorer = LiabilityScorer(weights=self.settings.liability_weights)
        self._liability = scorer.score(
            self._profiles,
            self._statements,
            self._contradictions,
            self._patterns,
            self._timeline,
        )

        self._advance(PipelineState.SCORED, actors_scored=len(self._liability))

    def report(self) -> TruthReport:
        """Assemble the final report."""
        self._require("report", PipelineState.SCORED)

        self._report = TruthReport(
            statements=list(self._statements),
            timeline=list(self._timeline),
            timeline_statistics=self._timeline_statistics,
            profiles=list(self._profiles),
            contradictions=list(self._contradictions),
            behavioral_patterns=list(self._patterns),
            liability=dict(self._liability),
            summary=self._build_summary(),
        )

        self._advance(PipelineState.REPORTED)
        return self._report

    def run(
        self,
        statements: Sequence[RawStatement],
        actors: Sequence[ActorInput] | None = None,
    ) -> TruthReport:
        """Run every stage from EMPTY and return the report."""
        self.index(statements, actors)
        self.embed()
        self.build_profiles()
        self.build_timeline()
        self.detect()
        self.score()
        return self.report()

    def reset(self) -> None:
        """Drop all run state and return to EMPTY."""
        self._clear()
        self._state = PipelineState.EMPTY
        logger.debug("orchestrator_reset")

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _build_summary(self) -> ReportSummary:
        triggers = []
        for contradiction in self._contradictions:
            trigger = contradiction.legal_trigger
            if trigger is not None and trigger not in triggers:
                triggers.append(trigger)

        highest = None
        if self._liability:
            highest = min(
                self._liability.values(),
                key=lambda entry: (-entry.total, entry.actor_key),
            )

        critical = sum(1 for c in self._contradictions if c.severity >= CRITICAL_SEVERITY)
        by_type = Counter(c.type.value for c in self._contradictions)

        return ReportSummary(
            total_statements=len(self._statements),
            total_actors=len(self._profiles),
            total_contradictions=len(self._contradictions),
            contradictions_by_type=dict(sorted(by_type.items())),
            critical_contradictions=critical,
            total_behavioral_patterns=len(self._patterns),
            highest_liability_actor=highest.actor_key if highest else None,
            legal_triggers=[t.value for t in triggers],
            recommendations=[TRIGGER_RECOMMENDATIONS[t] for t in triggers],
            narrative=self._narrative(critical, highest),
        )

    def _narrative(self, critical: int, highest: LiabilityEntry | None) -> str:
        if not self._statements:
            return "No statements to analyze."

        parts = [
            f"Analyzed {len(self._statements)} statement(s) from "
            f"{len(self._profiles)} actor(s).",
            f"Found {len(self._contradictions)} contradiction(s), {critical} critical, "
            f"and {len(self._patterns)} behavioral pattern(s).",
        ]
        if highest is not None:
            parts.append(
                f"Highest liability: {highest.display_name} "
                f"({highest.total:.1f}%, {highest.level.value})."
            )
        return " ".join(parts)


# =============================================================================
# Module-level factory function
# =============================================================================


def get_orchestrator() -> Orchestrator:
    """Create an orchestrator for one analysis run.

    Not cached; every caller gets independent pipeline state.
    """
    return Orchestrator()
