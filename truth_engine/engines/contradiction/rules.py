"""Shared text rules for contradiction passes.

Word-overlap similarity, negation-pair checks, legal trigger selection and
the per-trigger descriptions and recommendations used in reports.
"""

import re

from truth_engine.engines.statements.similarity import negation_terms_in, normalize_apostrophes
from truth_engine.models.contradiction import LegalTrigger
from truth_engine.models.statement import LegalCategory, Statement

# =============================================================================
# Constants
# =============================================================================

# Words this short are ignored by word overlap
MIN_OVERLAP_WORD_LENGTH = 3

# (negative form, positive form); one text using each side signals opposition
NEGATION_PAIRS: tuple[tuple[str, str], ...] = (
    ("never", "always"),
    ("did not", "did"),
    ("didn't", "did"),
    ("was not", "was"),
    ("wasn't", "was"),
    ("no", "yes"),
    ("denied", "admitted"),
    ("deny", "admit"),
    ("refuse", "accept"),
    ("refused", "accepted"),
    ("false", "true"),
)

TRIGGER_DESCRIPTIONS: dict[LegalTrigger, str] = {
    LegalTrigger.FRAUD: "Evidence suggests intentional deception for personal gain",
    LegalTrigger.MISREPRESENTATION: "Statements contain false or misleading information",
    LegalTrigger.CONCEALMENT: "Information appears to be deliberately hidden",
    LegalTrigger.PERJURY_RISK: "Statements under oath may be false",
    LegalTrigger.BREACH_OF_CONTRACT: "Contractual obligations appear violated",
    LegalTrigger.TIMELINE_INCONSISTENCY: "Chronological claims are inconsistent",
    LegalTrigger.UNRELIABLE_TESTIMONY: "Testimony shows internal contradictions",
    LegalTrigger.FINANCIAL_DISCREPANCY: "Financial figures are inconsistent",
    LegalTrigger.CONFLICT_OF_INTEREST: "Potential conflict of interest detected",
    LegalTrigger.NEGLIGENCE: "Duty of care may have been breached",
}

TRIGGER_RECOMMENDATIONS: dict[LegalTrigger, str] = {
    LegalTrigger.FRAUD: "Consider further investigation and potential fraud charges",
    LegalTrigger.MISREPRESENTATION: "Document all misrepresentations for legal proceedings",
    LegalTrigger.CONCEALMENT: "Request full disclosure of all relevant documents",
    LegalTrigger.PERJURY_RISK: "Compare statements under oath with documented evidence",
    LegalTrigger.BREACH_OF_CONTRACT: "Review contract terms and document breaches",
    LegalTrigger.TIMELINE_INCONSISTENCY: "Verify all dates with independent sources",
    LegalTrigger.UNRELIABLE_TESTIMONY: "Consider impeachment of witness testimony",
    LegalTrigger.FINANCIAL_DISCREPANCY: "Request financial audit and documentation",
    LegalTrigger.CONFLICT_OF_INTEREST: "Investigate relationships and potential bias",
    LegalTrigger.NEGLIGENCE: "Document standard of care and deviations",
}

_WORD_SPLIT = re.compile(r"\W+")


# =============================================================================
# Text comparison
# =============================================================================


def overlap_words(text: str) -> set[str]:
    """Lowercased words longer than two characters."""
    return {
        word
        for word in _WORD_SPLIT.split(text.lower())
        if len(word) >= MIN_OVERLAP_WORD_LENGTH
    }


def word_overlap(text_a: str, text_b: str) -> float:
    """Jaccard overlap of the two texts' words; 0.0 if either has none."""
    words_a = overlap_words(text_a)
    words_b = overlap_words(text_b)
    if not words_a or not words_b:
        return 0.0
    return len(words_a & words_b) / len(words_a | words_b)


def _has_term(text: str, term: str) -> bool:
    return re.search(r"(?<![\w'])" + re.escape(term) + r"(?![\w'])", text) is not None


def has_negation_pair(text_a: str, text_b: str) -> bool:
    """True when one text uses the negative and the other only the positive form of a pair."""
    a = normalize_apostrophes(text_a)
    b = normalize_apostrophes(text_b)
    for negative, positive in NEGATION_PAIRS:
        neg_a, neg_b = _has_term(a, negative), _has_term(b, negative)
        if neg_a == neg_b:
            continue
        # "did" also occurs inside "did not"; the positive side must lack the negative
        if (neg_a and _has_term(b, positive)) or (neg_b and _has_term(a, positive)):
            return True
    return False


def statements_contradict(
    text_a: str,
    text_b: str,
    overlap_threshold: float = 0.3,
) -> bool:
    """Texts about the same topic that oppose each other.

    Requires word overlap above ``overlap_threshold`` and either negation
    asymmetry (exactly one side negated) or a negation pair.
    """
    if word_overlap(text_a, text_b) <= overlap_threshold:
        return False
    asymmetric = bool(negation_terms_in(text_a)) != bool(negation_terms_in(text_b))
    return asymmetric or has_negation_pair(text_a, text_b)


# =============================================================================
# Legal triggers
# =============================================================================


def category_trigger(a: Statement, b: Statement) -> LegalTrigger | None:
    """Trigger implied by the statements' legal categories, if any."""
    categories = {a.legal_category, b.legal_category}
    if LegalCategory.TESTIMONY in categories:
        return LegalTrigger.PERJURY_RISK
    if LegalCategory.CONTRACTUAL in categories:
        return LegalTrigger.BREACH_OF_CONTRACT
    if LegalCategory.FINANCIAL in categories:
        return LegalTrigger.FINANCIAL_DISCREPANCY
    return None


def snippet(text: str, length: int = 50) -> str:
    """Truncate text for explanations."""
    return text if len(text) <= length else text[:length].rstrip() + "..."
