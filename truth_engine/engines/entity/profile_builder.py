"""Entity profile builder.

Groups statements by resolved actor and aggregates, per actor:
- claims (category mapped from the statement's legal category)
- financial figures
- timeline footprint
- sentiment and certainty trends

Statements are processed in chronological order (undated last, then ID) so
the result does not depend on input order.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from truth_engine.engines.entity.alias_resolver import ActorRegistry
from truth_engine.engines.entity.financial_extractor import FinancialFigureExtractor
from truth_engine.models.entity import (
    Claim,
    EntityProfile,
    FinancialFigure,
    TrendPoint,
    claim_category_for,
)
from truth_engine.models.statement import ActorInput, Statement, chronological_key

logger = structlog.get_logger(__name__)


@dataclass
class ProfileBuildResult:
    """Profiles sorted by actor key plus the statement -> actor assignment."""

    profiles: list[EntityProfile] = field(default_factory=list)
    statement_actor: dict[str, str] = field(default_factory=dict)

    def profile_for(self, actor_key: str) -> EntityProfile | None:
        """Get a profile by actor key."""
        for profile in self.profiles:
            if profile.actor_key == actor_key:
                return profile
        return None


@dataclass
class _ProfileAccumulator:
    statement_ids: list[str] = field(default_factory=list)
    document_ids: list[str] = field(default_factory=list)
    claims: list[Claim] = field(default_factory=list)
    figures: list[FinancialFigure] = field(default_factory=list)
    sentiment: list[TrendPoint] = field(default_factory=list)
    certainty: list[TrendPoint] = field(default_factory=list)


class EntityProfileBuilder:
    """Build frozen entity profiles from indexed statements.

    Example:
        >>> builder = EntityProfileBuilder()
        >>> result = builder.build(statements, actors=[ActorInput(name="John Smith")])
        >>> [p.actor_key for p in result.profiles]
        ['john smith']
    """

    def __init__(
        self,
        registry: ActorRegistry | None = None,
        extractor: FinancialFigureExtractor | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            registry: Actor registry. A fresh one is created per build if None.
            extractor: Financial figure extractor.
        """
        self._registry = registry
        self._extractor = extractor

    @property
    def extractor(self) -> FinancialFigureExtractor:
        """Get the financial figure extractor."""
        if self._extractor is None:
            self._extractor = FinancialFigureExtractor()
        return self._extractor

    def build(
        self,
        statements: Sequence[Statement],
        actors: Sequence[ActorInput] | None = None,
    ) -> ProfileBuildResult:
        """Resolve actors and build one profile per actor with statements.

        Args:
            statements: Indexed statements (any order).
            actors: Optional identity hints registered before resolution.

        Returns:
            ProfileBuildResult with profiles sorted by actor key.
        """
        registry = self._registry if self._registry is not None else ActorRegistry()
        for actor_input in sorted(actors or [], key=lambda a: a.name.lower()):
            registry.register(actor_input)

        ordered = sorted(statements, key=chronological_key)
        result = ProfileBuildResult()
        accumulators: dict[str, _ProfileAccumulator] = {}

        for statement in ordered:
            actor = registry.resolve(statement.actor)
            result.statement_actor[statement.statement_id] = actor.key
            acc = accumulators.setdefault(actor.key, _ProfileAccumulator())
            self._accumulate(acc, statement)

        for key in sorted(accumulators):
            actor = registry.get(key)
            acc = accumulators[key]
            result.profiles.append(
                EntityProfile(
                    actor_key=key,
                    display_name=actor.display_name,
                    aliases=tuple(actor.aliases),
                    emails=tuple(actor.emails),
                    phones=tuple(actor.phones),
                    statement_ids=tuple(acc.statement_ids),
                    document_ids=tuple(sorted(set(acc.document_ids))),
                    claims=tuple(acc.claims),
                    financial_figures=tuple(acc.figures),
                    timeline_footprint=tuple(p.timestamp for p in acc.sentiment),
                    sentiment_trend=tuple(acc.sentiment),
                    certainty_trend=tuple(acc.certainty),
                )
            )

        logger.info(
            "entity_profiles_built",
            statement_count=len(ordered),
            profile_count=len(result.profiles),
            financial_figure_count=sum(len(p.financial_figures) for p in result.profiles),
        )
        return result

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _accumulate(self, acc: _ProfileAccumulator, statement: Statement) -> None:
        acc.statement_ids.append(statement.statement_id)
        acc.document_ids.append(statement.document_id)
        acc.claims.append(
            Claim(
                claim_id=f"claim-{statement.statement_id}",
                statement_id=statement.statement_id,
                text=statement.text,
                timestamp=statement.timestamp,
                category=claim_category_for(statement.legal_category),
                document_id=statement.document_id,
                subject=statement.subject,
            )
        )
        acc.figures.extend(self.extractor.extract(statement))

        if statement.timestamp is not None:
            acc.sentiment.append(
                TrendPoint(
                    timestamp=statement.timestamp,
                    value=statement.sentiment,
                    statement_id=statement.statement_id,
                )
            )
            acc.certainty.append(
                TrendPoint(
                    timestamp=statement.timestamp,
                    value=statement.certainty,
                    statement_id=statement.statement_id,
                )
            )


# =============================================================================
# Module-level factory function
# =============================================================================


def get_entity_profile_builder() -> EntityProfileBuilder:
    """Create an entity profile builder with a fresh actor registry."""
    return EntityProfileBuilder()
