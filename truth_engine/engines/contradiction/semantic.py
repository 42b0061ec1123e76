"""Semantic drift pass.

Flags same-actor pairs whose similarity falls inside the drift band
[related_threshold, drift_upper): related enough to be about the same topic,
far enough apart that the meaning has shifted. Pairs already counted as
direct contradictions are skipped.
"""

from itertools import combinations

from truth_engine.engines.base import ContradictionPass, DetectionContext
from truth_engine.engines.contradiction.rules import category_trigger, snippet
from truth_engine.models.contradiction import Contradiction, ContradictionType, LegalTrigger
from truth_engine.models.statement import LEGAL_WEIGHT_CATEGORIES, Statement

SEMANTIC_BASE_SEVERITY = 4
LEGAL_CATEGORY_BONUS = 1

# Confidence rises linearly from MIN at the band's lower bound to MIN + SPAN at its upper bound
CONFIDENCE_MIN = 0.3
CONFIDENCE_SPAN = 0.4


def semantic_severity(a: Statement, b: Statement) -> int:
    """Base 4, +1 when both are legally weighted."""
    severity = SEMANTIC_BASE_SEVERITY
    if a.legal_category in LEGAL_WEIGHT_CATEGORIES and b.legal_category in LEGAL_WEIGHT_CATEGORIES:
        severity += LEGAL_CATEGORY_BONUS
    return severity


class SemanticDriftDetector(ContradictionPass):
    """Same-actor implicit contradictions (semantic drift)."""

    name = "semantic"

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        """Compare every same-actor statement pair against the drift band."""
        similarity = context.similarity
        band_width = similarity.drift_upper - similarity.related_threshold
        contradictions: list[Contradiction] = []

        for actor_key, statements in context.statements_by_actor().items():
            for earlier, later in combinations(statements, 2):
                score = similarity.cosine(context.vector(earlier), context.vector(later))
                if not similarity.is_implicit_contradiction(earlier.text, later.text, score):
                    continue
                if similarity.is_direct_contradiction(earlier.text, later.text, score):
                    continue

                confidence = CONFIDENCE_MIN + CONFIDENCE_SPAN * (
                    (score - similarity.related_threshold) / band_width
                )
                contradictions.append(
                    self.build(
                        ContradictionType.SEMANTIC,
                        source=earlier,
                        target=later,
                        severity=semantic_severity(earlier, later),
                        confidence=confidence,
                        explanation=(
                            f"{earlier.actor}'s account drifted from '{snippet(earlier.text)}' "
                            f"to '{snippet(later.text)}' (similarity {score:.2f})"
                        ),
                        legal_trigger=(
                            category_trigger(earlier, later)
                            or LegalTrigger.UNRELIABLE_TESTIMONY
                        ),
                        affected_actors=[actor_key],
                    )
                )

        self.logger.info(
            "semantic_detection_complete",
            contradictions_found=len(contradictions),
        )
        return contradictions
