"""Tests for entity profile construction."""

from collections.abc import Callable

import pytest
from pydantic import ValidationError

from truth_engine.engines.entity.profile_builder import EntityProfileBuilder
from truth_engine.models.entity import ClaimCategory
from truth_engine.models.statement import ActorInput, Statement


@pytest.fixture
def builder() -> EntityProfileBuilder:
    """Create builder instance."""
    return EntityProfileBuilder()


@pytest.fixture
def statements(make_statement: Callable[..., Statement]) -> list[Statement]:
    """Statements from John Smith (under two names) and Jane Doe."""
    return [
        make_statement(
            "The invoice total was $1,600",
            statement_id="s-3",
            timestamp="2024-02-01T00:00:00Z",
            document_id="doc-2",
        ),
        make_statement(
            "I never signed the contract",
            actor="J. Smith",
            statement_id="s-2",
            timestamp="2024-01-15T00:00:00Z",
        ),
        make_statement(
            "The invoice total was $1,000",
            statement_id="s-1",
            timestamp="2024-01-01T00:00:00Z",
        ),
        make_statement("We met at the office", actor="Jane Doe", statement_id="s-4"),
    ]


class TestBuild:
    """Tests for EntityProfileBuilder.build."""

    def test_profiles_sorted_by_key(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should produce one profile per actor, sorted by key."""
        result = builder.build(statements, [ActorInput(name="John Smith", aliases=["J. Smith"])])

        assert [p.actor_key for p in result.profiles] == ["jane doe", "john smith"]

    def test_alias_statements_merge(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should attribute alias statements to the registered actor."""
        result = builder.build(statements, [ActorInput(name="John Smith", aliases=["J. Smith"])])
        profile = result.profile_for("john smith")

        assert profile.statement_ids == ("s-1", "s-2", "s-3")
        assert result.statement_actor["s-2"] == "john smith"
        assert "J. Smith" in profile.aliases

    def test_claims_and_figures(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should categorize claims and extract figures chronologically."""
        result = builder.build(statements, [ActorInput(name="John Smith", aliases=["J. Smith"])])
        profile = result.profile_for("john smith")

        assert [c.category for c in profile.claims] == [
            ClaimCategory.FINANCIAL,
            ClaimCategory.DENIAL,
            ClaimCategory.FINANCIAL,
        ]
        assert [f.amount for f in profile.financial_figures] == [1000.0, 1600.0]
        assert profile.document_ids == ("doc-1", "doc-2")

    def test_trends_only_for_dated_statements(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should add trend points and footprint only for timestamped statements."""
        result = builder.build(statements)
        jane = result.profile_for("jane doe")

        assert jane.statement_ids == ("s-4",)
        assert jane.sentiment_trend == ()
        assert jane.timeline_footprint == ()

    def test_profiles_are_frozen(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should refuse mutation of built profiles."""
        profile = builder.build(statements).profiles[0]

        with pytest.raises(ValidationError):
            profile.display_name = "Someone else"

    def test_profiles_carry_data_only(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should leave alias lookups to the resolver."""
        profile = builder.build(statements).profiles[0]

        assert not hasattr(profile, "is_known_as")
        assert not hasattr(profile, "summary")

    def test_empty_input(self, builder: EntityProfileBuilder) -> None:
        """Should build nothing from no statements."""
        result = builder.build([], [ActorInput(name="John Smith")])

        assert result.profiles == []
        assert result.statement_actor == {}

    def test_input_order_does_not_matter(
        self, builder: EntityProfileBuilder, statements: list[Statement]
    ) -> None:
        """Should build identical profiles from shuffled input."""
        forward = EntityProfileBuilder().build(statements)
        backward = EntityProfileBuilder().build(list(reversed(statements)))

        assert forward.profiles == backward.profiles
