"""Tests for the cross-entity contradiction pass."""

from collections.abc import Callable

import pytest

from truth_engine.engines.base import DetectionContext
from truth_engine.engines.contradiction.cross_entity import (
    CrossEntityContradictionDetector,
    cross_entity_severity,
    subjects_differ,
)
from truth_engine.models.contradiction import ContradictionType, LegalTrigger
from truth_engine.models.entity import Claim, ClaimCategory
from truth_engine.models.statement import LegalCategory, Statement


def claim(category: ClaimCategory, subject: str = "") -> Claim:
    """Build a bare claim for rule tests."""
    return Claim(
        claim_id="claim-x",
        statement_id="s-x",
        text="text",
        category=category,
        document_id="doc-1",
        subject=subject,
    )


@pytest.fixture
def detector() -> CrossEntityContradictionDetector:
    """Create detector instance."""
    return CrossEntityContradictionDetector()


class TestCrossEntityDetection:
    """Tests for opposing claims across actors."""

    @pytest.fixture
    def statements(self, make_statement: Callable[..., Statement]) -> list[Statement]:
        return [
            make_statement(
                "I paid the invoice in full",
                actor="Alice",
                statement_id="s-alice",
                timestamp="2024-01-01T00:00:00Z",
                legal_category=LegalCategory.GENERAL,
            ),
            make_statement(
                "Alice never paid the invoice",
                actor="Bob",
                statement_id="s-bob",
                timestamp="2024-01-03T00:00:00Z",
                legal_category=LegalCategory.DENIAL,
            ),
        ]

    def test_denial_of_another_actors_claim(
        self,
        detector: CrossEntityContradictionDetector,
        statements: list[Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should flag Bob denying what Alice asserts."""
        contradictions = detector.detect(make_context(statements))

        assert len(contradictions) == 1
        contradiction = contradictions[0]
        assert contradiction.type == ContradictionType.CROSS_DOCUMENT
        assert contradiction.severity == 7
        assert contradiction.confidence == pytest.approx(0.5)
        assert contradiction.legal_trigger == LegalTrigger.MISREPRESENTATION
        assert contradiction.affected_actors == ["alice", "bob"]
        assert contradiction.source_statement.statement_id == "s-alice"
        assert contradiction.target_statement.statement_id == "s-bob"

    def test_different_subjects_not_compared(
        self,
        detector: CrossEntityContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should skip claims tagged with different subjects."""
        statements = [
            make_statement(
                "I paid the invoice in full",
                actor="Alice",
                legal_category=LegalCategory.GENERAL,
                subject="invoice 1",
            ),
            make_statement(
                "Alice never paid the invoice",
                actor="Bob",
                legal_category=LegalCategory.DENIAL,
                subject="invoice 2",
            ),
        ]

        assert detector.detect(make_context(statements)) == []

    def test_single_actor_returns_empty(
        self,
        detector: CrossEntityContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should need at least two profiles."""
        statement = make_statement("I paid the invoice in full", actor="Alice")

        assert detector.detect(make_context([statement])) == []


class TestCrossEntityRules:
    """Tests for severity and subject rules."""

    def test_severity_bonuses(self) -> None:
        """Should add two points each for factual and financial claims."""
        assert cross_entity_severity(claim(ClaimCategory.DENIAL), claim(ClaimCategory.ASSERTION)) == 5
        assert cross_entity_severity(claim(ClaimCategory.DENIAL), claim(ClaimCategory.FACTUAL)) == 7
        assert cross_entity_severity(claim(ClaimCategory.FACTUAL), claim(ClaimCategory.FINANCIAL)) == 9

    def test_subjects_differ_needs_both(self) -> None:
        """Should treat a missing subject as matching anything."""
        assert subjects_differ(claim(ClaimCategory.FACTUAL, "Lease"), claim(ClaimCategory.DENIAL, "loan"))
        assert not subjects_differ(claim(ClaimCategory.FACTUAL, "Lease"), claim(ClaimCategory.DENIAL, " lease "))
        assert not subjects_differ(claim(ClaimCategory.FACTUAL, "Lease"), claim(ClaimCategory.DENIAL))
