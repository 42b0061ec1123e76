"""Tests for the direct (negation) contradiction pass.

Tests cover:
- Negation contradiction severity and legal trigger
- Proximity bonus within 24 hours
- Same-actor restriction
- Topic-shift boundary at the exact related threshold
"""

from collections.abc import Callable

import pytest

from truth_engine.engines.base import DetectionContext
from truth_engine.engines.contradiction.direct import DirectContradictionDetector, direct_severity
from truth_engine.engines.statements.similarity import Similarity
from truth_engine.models.contradiction import ContradictionType, LegalTrigger
from truth_engine.models.statement import LegalCategory, Statement


@pytest.fixture
def detector() -> DirectContradictionDetector:
    """Create detector instance."""
    return DirectContradictionDetector()


class TestNegationContradiction:
    """Tests for negation-based detection."""

    def test_signed_vs_never_signed(
        self,
        detector: DirectContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should flag 'I never signed the contract' vs 'I signed the contract'."""
        signed = make_statement(
            "I signed the contract", statement_id="s-1", timestamp="2024-01-01T10:00:00Z"
        )
        denied = make_statement(
            "I never signed the contract", statement_id="s-2", timestamp="2024-03-01T10:00:00Z"
        )

        contradictions = detector.detect(make_context([denied, signed]))

        assert len(contradictions) == 1
        contradiction = contradictions[0]
        assert contradiction.type == ContradictionType.DIRECT
        assert contradiction.severity == 8
        assert contradiction.severity >= 6
        assert contradiction.source_statement.statement_id == "s-1"
        assert contradiction.target_statement.statement_id == "s-2"
        assert contradiction.legal_trigger == LegalTrigger.BREACH_OF_CONTRACT
        assert contradiction.affected_actors == ["john smith"]
        assert contradiction.detected_by == "direct"
        assert 0.25 <= contradiction.confidence <= 1.0

    def test_proximity_bonus(
        self,
        detector: DirectContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should add one severity point within 24 hours."""
        statements = [
            make_statement("I signed the contract", statement_id="s-1", timestamp="2024-01-01T10:00:00Z"),
            make_statement("I never signed the contract", statement_id="s-2", timestamp="2024-01-01T20:00:00Z"),
        ]

        contradictions = detector.detect(make_context(statements))

        assert contradictions[0].severity == 9

    def test_different_actors_not_compared(
        self,
        detector: DirectContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should only compare statements of the same actor."""
        statements = [
            make_statement("I signed the contract", statement_id="s-1"),
            make_statement("I never signed the contract", actor="Jane Doe", statement_id="s-2"),
        ]

        assert detector.detect(make_context(statements)) == []

    def test_ids_are_deterministic(
        self,
        detector: DirectContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should produce the same contradiction ID on every run."""
        statements = [
            make_statement("I signed the contract", statement_id="s-1"),
            make_statement("I never signed the contract", statement_id="s-2"),
        ]

        first = detector.detect(make_context(statements))
        second = DirectContradictionDetector().detect(make_context(list(reversed(statements))))

        assert [c.contradiction_id for c in first] == [c.contradiction_id for c in second]


class TestTopicShiftBoundary:
    """Tests for the related-threshold boundary."""

    SOURCE = "No deal ever existed"
    TARGET = "The deal fell through"

    def _context(
        self,
        threshold: float,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> DetectionContext:
        similarity = Similarity(
            related_threshold=threshold,
            drift_upper=threshold + 0.1,
            high_threshold=1.0,
        )
        statements = [
            make_statement(self.SOURCE, statement_id="s-1", timestamp="2024-01-01T00:00:00Z"),
            make_statement(self.TARGET, statement_id="s-2", timestamp="2024-02-01T00:00:00Z"),
        ]
        return make_context(statements, similarity=similarity)

    def test_flagged_at_exact_threshold(
        self,
        detector: DirectContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should flag the pair when similarity equals the related threshold."""
        score = Similarity().text_similarity(self.SOURCE, self.TARGET)
        assert 0.0 < score < 0.9

        contradictions = detector.detect(self._context(score, make_statement, make_context))

        assert [c.type for c in contradictions] == [ContradictionType.DIRECT]

    def test_not_flagged_just_above_threshold(
        self,
        detector: DirectContradictionDetector,
        make_statement: Callable[..., Statement],
        make_context: Callable[..., DetectionContext],
    ) -> None:
        """Should not flag the pair when the threshold is just above its similarity."""
        score = Similarity().text_similarity(self.SOURCE, self.TARGET)

        contradictions = detector.detect(
            self._context(score + 1e-9, make_statement, make_context)
        )

        assert contradictions == []


class TestDirectSeverity:
    """Tests for the severity rule."""

    def test_base_severity_for_general_statements(
        self, make_statement: Callable[..., Statement]
    ) -> None:
        """Should score 6 without legal weight or proximity."""
        a = make_statement(
            "The car was red", statement_id="s-1", legal_category=LegalCategory.GENERAL
        )
        b = make_statement(
            "The car was not red", statement_id="s-2", legal_category=LegalCategory.DENIAL
        )

        assert direct_severity(a, b) == 6
