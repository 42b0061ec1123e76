"""Entity-level contradiction pass.

Works within one entity profile:
- an actor denying something they admitted (ADMISSION vs DENIAL claims)
- a financial figure changing without explanation between statements
"""

from collections import defaultdict
from datetime import UTC, datetime

from truth_engine.engines.base import (
    ContradictionPass,
    DetectionContext,
    within_proximity_window,
)
from truth_engine.engines.contradiction.rules import snippet, statements_contradict, word_overlap
from truth_engine.models.contradiction import Contradiction, ContradictionType, LegalTrigger
from truth_engine.models.entity import ClaimCategory, EntityProfile, FinancialFigure

# =============================================================================
# Severity Rules
# =============================================================================

ADMISSION_DENIAL_BASE_SEVERITY = 6
ADMISSION_BONUS = 2
PROXIMITY_BONUS = 1

# (percent change strictly above, severity), checked in order
FINANCIAL_SEVERITY_BANDS: tuple[tuple[float, int], ...] = (
    (50.0, 9),
    (25.0, 7),
)
FINANCIAL_BASE_SEVERITY = 5
FINANCIAL_CONFIDENCE = 0.9


def financial_severity(percent_change: float) -> int:
    """5 above the minimum change, 7 above 25%, 9 above 50%."""
    for threshold, severity in FINANCIAL_SEVERITY_BANDS:
        if percent_change > threshold:
            return severity
    return FINANCIAL_BASE_SEVERITY


def percent_change(earlier: float, later: float) -> float:
    """Absolute change relative to the earlier amount (floored at 1)."""
    return abs(later - earlier) / max(earlier, 1.0) * 100


def _figure_order(figure: FinancialFigure) -> tuple[bool, datetime, str, str]:
    return (
        figure.timestamp is None,
        figure.timestamp or datetime.min.replace(tzinfo=UTC),
        figure.statement_id,
        figure.figure_id,
    )


class EntityContradictionDetector(ContradictionPass):
    """Admission/denial and financial-drift contradictions within one actor."""

    name = "entity"

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        """Check every profile for admission/denial pairs and financial drift."""
        contradictions: list[Contradiction] = []
        for profile in context.profiles:
            contradictions.extend(self._admission_denials(context, profile))
            contradictions.extend(self._financial_drift(context, profile))

        self.logger.info(
            "entity_detection_complete",
            profiles_checked=len(context.profiles),
            contradictions_found=len(contradictions),
        )
        return contradictions

    def _admission_denials(
        self,
        context: DetectionContext,
        profile: EntityProfile,
    ) -> list[Contradiction]:
        admissions = [c for c in profile.claims if c.category == ClaimCategory.ADMISSION]
        denials = [c for c in profile.claims if c.category == ClaimCategory.DENIAL]
        threshold = context.settings.entity_overlap_threshold

        results = []
        for admission in admissions:
            for denial in denials:
                if not statements_contradict(admission.text, denial.text, threshold):
                    continue
                source = context.statement(admission.statement_id)
                target = context.statement(denial.statement_id)
                if source is None or target is None:
                    continue

                severity = ADMISSION_DENIAL_BASE_SEVERITY + ADMISSION_BONUS
                if within_proximity_window(source, target):
                    severity += PROXIMITY_BONUS

                results.append(
                    self.build(
                        ContradictionType.ENTITY,
                        source=source,
                        target=target,
                        severity=severity,
                        confidence=word_overlap(admission.text, denial.text),
                        explanation=(
                            f"{profile.display_name} denied something they previously "
                            f"admitted: '{snippet(admission.text)}' vs '{snippet(denial.text)}'"
                        ),
                        legal_trigger=LegalTrigger.UNRELIABLE_TESTIMONY,
                        affected_actors=[profile.actor_key],
                    )
                )
        return results

    def _financial_drift(
        self,
        context: DetectionContext,
        profile: EntityProfile,
    ) -> list[Contradiction]:
        groups: dict[tuple[str, str], list[FinancialFigure]] = defaultdict(list)
        for figure in profile.financial_figures:
            if figure.context_key:
                groups[(figure.context_key, figure.currency)].append(figure)

        min_percent = context.settings.financial_drift_min_percent
        results = []
        for key in sorted(groups):
            figures = sorted(groups[key], key=_figure_order)
            for earlier, later in zip(figures, figures[1:]):
                if earlier.statement_id == later.statement_id:
                    continue
                change = percent_change(earlier.amount, later.amount)
                if change <= min_percent:
                    continue
                source = context.statement(earlier.statement_id)
                target = context.statement(later.statement_id)
                if source is None or target is None:
                    continue

                results.append(
                    self.build(
                        ContradictionType.FINANCIAL,
                        source=source,
                        target=target,
                        severity=financial_severity(change),
                        confidence=FINANCIAL_CONFIDENCE,
                        explanation=(
                            f"Financial figure changed from {earlier.currency} "
                            f"{earlier.amount:,.2f} to {later.currency} {later.amount:,.2f} "
                            f"({int(change)}% change) without explanation"
                        ),
                        legal_trigger=LegalTrigger.FINANCIAL_DISCREPANCY,
                        affected_actors=[profile.actor_key],
                        discriminator=f"financial:{earlier.figure_id}:{later.figure_id}",
                    )
                )
        return results
