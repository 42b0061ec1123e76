"""Entity layer: actor resolution, financial extraction and profiles."""

from truth_engine.engines.entity.alias_resolver import (
    DEFAULT_FUZZY_THRESHOLD,
    ActorRegistry,
    FuzzyMatchResult,
)
from truth_engine.engines.entity.financial_extractor import (
    FinancialFigureExtractor,
    get_financial_extractor,
    normalize_context,
)
from truth_engine.engines.entity.profile_builder import (
    EntityProfileBuilder,
    ProfileBuildResult,
    get_entity_profile_builder,
)

__all__ = [
    "ActorRegistry",
    "DEFAULT_FUZZY_THRESHOLD",
    "FuzzyMatchResult",
    "FinancialFigureExtractor",
    "get_financial_extractor",
    "normalize_context",
    "EntityProfileBuilder",
    "ProfileBuildResult",
    "get_entity_profile_builder",
]
