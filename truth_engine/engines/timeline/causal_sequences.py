"""Cause/effect phrase rules for timeline causality checks.

An event whose description contains the effect phrase should never be dated
before an event containing the matching cause phrase.
"""

from dataclasses import dataclass

# =============================================================================
# Rule Definitions
# =============================================================================


@dataclass(frozen=True)
class CausalRule:
    """A cause phrase that must precede its effect phrase."""

    cause: str
    effect: str
    violation: str  # Human-readable description of the violation


CAUSAL_RULES: tuple[CausalRule, ...] = (
    CausalRule(
        cause="agreed to",
        effect="signed the agreement",
        violation="Agreement signed before it was discussed",
    ),
    CausalRule(
        cause="promised to pay",
        effect="received payment",
        violation="Payment received before it was promised",
    ),
    CausalRule(
        cause="requested",
        effect="delivered",
        violation="Delivery before request",
    ),
    CausalRule(
        cause="filed lawsuit",
        effect="settled",
        violation="Settlement before lawsuit was filed",
    ),
    CausalRule(
        cause="sent invoice",
        effect="paid invoice",
        violation="Invoice paid before it was sent",
    ),
    CausalRule(
        cause="made complaint",
        effect="resolved complaint",
        violation="Complaint resolved before it was made",
    ),
)

# Severity of every causality violation
CAUSALITY_VIOLATION_SEVERITY = 8


def matching_rules(cause_text: str, effect_text: str) -> list[CausalRule]:
    """Rules whose cause occurs in ``cause_text`` and effect in ``effect_text``.

    Matching is case-insensitive substring containment.
    """
    cause_lower = cause_text.lower()
    effect_lower = effect_text.lower()
    return [
        rule
        for rule in CAUSAL_RULES
        if rule.cause in cause_lower and rule.effect in effect_lower
    ]
