"""Direct (negation) contradiction pass.

Flags same-actor statement pairs that are related by embedding similarity and
where exactly one side carries negation ("I never signed the contract" vs
"I signed the contract").
"""

from itertools import combinations

from truth_engine.engines.base import (
    ContradictionPass,
    DetectionContext,
    within_proximity_window,
)
from truth_engine.engines.contradiction.rules import category_trigger, snippet
from truth_engine.models.contradiction import Contradiction, ContradictionType, LegalTrigger
from truth_engine.models.statement import LEGAL_WEIGHT_CATEGORIES, Statement

# =============================================================================
# Severity Rules
# =============================================================================

DIRECT_BASE_SEVERITY = 6
LEGAL_CATEGORY_BONUS = 2
PROXIMITY_BONUS = 1


def direct_severity(a: Statement, b: Statement) -> int:
    """Base 6, +2 when both are legally weighted, +1 within 24 hours."""
    severity = DIRECT_BASE_SEVERITY
    if a.legal_category in LEGAL_WEIGHT_CATEGORIES and b.legal_category in LEGAL_WEIGHT_CATEGORIES:
        severity += LEGAL_CATEGORY_BONUS
    if within_proximity_window(a, b):
        severity += PROXIMITY_BONUS
    return severity


class DirectContradictionDetector(ContradictionPass):
    """Same-actor negation contradictions.

    Example:
        >>> detector = DirectContradictionDetector()
        >>> contradictions = detector.detect(context)
    """

    name = "direct"

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        """Compare every same-actor statement pair.

        Args:
            context: Read-only detection snapshot.

        Returns:
            DIRECT contradictions, earlier statement as source.
        """
        similarity = context.similarity
        contradictions: list[Contradiction] = []
        pairs_checked = 0

        for actor_key, statements in context.statements_by_actor().items():
            for earlier, later in combinations(statements, 2):
                pairs_checked += 1
                score = similarity.cosine(context.vector(earlier), context.vector(later))
                if not similarity.is_direct_contradiction(earlier.text, later.text, score):
                    continue

                contradictions.append(
                    self.build(
                        ContradictionType.DIRECT,
                        source=earlier,
                        target=later,
                        severity=direct_severity(earlier, later),
                        confidence=score,
                        explanation=(
                            f"{earlier.actor} said '{snippet(earlier.text)}' but also "
                            f"'{snippet(later.text)}' (similarity {score:.2f}, "
                            f"opposing negation)"
                        ),
                        legal_trigger=(
                            category_trigger(earlier, later) or LegalTrigger.MISREPRESENTATION
                        ),
                        affected_actors=[actor_key],
                    )
                )

        self.logger.info(
            "direct_detection_complete",
            pairs_checked=pairs_checked,
            contradictions_found=len(contradictions),
        )
        return contradictions
