"""Cross-entity contradiction pass.

Compares claims of two different actors: one actor denies what another
asserts about the same topic.
"""

from itertools import combinations

from truth_engine.engines.base import ContradictionPass, DetectionContext
from truth_engine.engines.contradiction.rules import snippet, statements_contradict, word_overlap
from truth_engine.models.contradiction import Contradiction, ContradictionType, LegalTrigger
from truth_engine.models.entity import Claim, ClaimCategory
from truth_engine.models.statement import chronological_key

CROSS_ENTITY_BASE_SEVERITY = 5
FACTUAL_BONUS = 2
FINANCIAL_BONUS = 2


def cross_entity_severity(a: Claim, b: Claim) -> int:
    """Base 5, +2 if either claim is factual, +2 if either is financial."""
    categories = {a.category, b.category}
    severity = CROSS_ENTITY_BASE_SEVERITY
    if ClaimCategory.FACTUAL in categories:
        severity += FACTUAL_BONUS
    if ClaimCategory.FINANCIAL in categories:
        severity += FINANCIAL_BONUS
    return severity


def subjects_differ(a: Claim, b: Claim) -> bool:
    """Both claims name a subject and the subjects are different."""
    subject_a = a.subject.strip().lower()
    subject_b = b.subject.strip().lower()
    return bool(subject_a) and bool(subject_b) and subject_a != subject_b


def categories_oppose(a: Claim, b: Claim) -> bool:
    """Exactly one of the two claims is a denial."""
    return (a.category == ClaimCategory.DENIAL) != (b.category == ClaimCategory.DENIAL)


class CrossEntityContradictionDetector(ContradictionPass):
    """Opposing claims made by two different actors."""

    name = "cross_entity"

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        """Compare claims across every pair of profiles."""
        threshold = context.settings.entity_overlap_threshold
        contradictions: list[Contradiction] = []

        for profile_a, profile_b in combinations(context.profiles, 2):
            for claim_a in profile_a.claims:
                for claim_b in profile_b.claims:
                    if subjects_differ(claim_a, claim_b):
                        continue
                    if not categories_oppose(claim_a, claim_b):
                        continue
                    if not statements_contradict(claim_a.text, claim_b.text, threshold):
                        continue

                    statement_a = context.statement(claim_a.statement_id)
                    statement_b = context.statement(claim_b.statement_id)
                    if statement_a is None or statement_b is None:
                        continue
                    source, target = sorted((statement_a, statement_b), key=chronological_key)

                    contradictions.append(
                        self.build(
                            ContradictionType.CROSS_DOCUMENT,
                            source=source,
                            target=target,
                            severity=cross_entity_severity(claim_a, claim_b),
                            confidence=word_overlap(claim_a.text, claim_b.text),
                            explanation=(
                                f"{profile_a.display_name} claims '{snippet(claim_a.text, 40)}' "
                                f"but {profile_b.display_name} contradicts with "
                                f"'{snippet(claim_b.text, 40)}'"
                            ),
                            legal_trigger=LegalTrigger.MISREPRESENTATION,
                            affected_actors=[profile_a.actor_key, profile_b.actor_key],
                        )
                    )

        self.logger.info(
            "cross_entity_detection_complete",
            profile_pairs=len(context.profiles) * (len(context.profiles) - 1) // 2,
            contradictions_found=len(contradictions),
        )
        return contradictions
