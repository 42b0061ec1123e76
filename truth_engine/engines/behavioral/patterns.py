"""Phrase tables for keyword-based behavioral patterns.

Each family is a fixed tuple of lowercase phrases, matched on word
boundaries against an actor's collected statements. A family fires when it
matches at least ``min_instances`` distinct sentences.
"""

from dataclasses import dataclass

from truth_engine.models.behavior import BehaviorType


@dataclass(frozen=True)
class KeywordFamily:
    """A keyword-detected behavior and its phrase table."""

    behavior: BehaviorType
    phrases: tuple[str, ...]
    description: str
    min_instances: int = 1


# =============================================================================
# Manipulation families
# =============================================================================

GASLIGHTING = KeywordFamily(
    behavior=BehaviorType.GASLIGHTING,
    phrases=(
        "you're imagining", "that never happened", "you're crazy",
        "i never said that", "you're confused", "you misunderstood",
        "you're overreacting", "you're being paranoid", "you're making things up",
        "you're too sensitive", "you're remembering it wrong", "that's not what happened",
    ),
    description="Denies the other party's perception or memory of events",
)

DEFLECTION = KeywordFamily(
    behavior=BehaviorType.DEFLECTION,
    phrases=(
        "what about", "but you", "that's not the point",
        "let's focus on", "the real issue is", "you're changing the subject",
        "why are you asking", "that's irrelevant", "we should discuss",
        "more importantly", "the bigger picture",
    ),
    description="Redirects attention away from the issue raised",
)

PRESSURE_TACTICS = KeywordFamily(
    behavior=BehaviorType.PRESSURE_TACTICS,
    phrases=(
        "you need to decide now", "this offer expires", "take it or leave it",
        "everyone else agrees", "don't miss out", "act fast", "limited time",
        "last chance", "final offer", "time is running out", "now or never",
        "you're running out of time", "deadline approaching",
    ),
    description="Applies urgency or social pressure to force a decision",
)

FINANCIAL_MANIPULATION = KeywordFamily(
    behavior=BehaviorType.FINANCIAL_MANIPULATION,
    phrases=(
        "just this once", "i'll pay you back", "trust me", "it's an investment",
        "you'll make it back", "guaranteed return", "no risk",
        "you won't regret it", "easy money", "quick return",
        "special opportunity", "insider deal", "can't lose",
    ),
    description="Uses assurances or inducements around money",
)

EMOTIONAL_MANIPULATION = KeywordFamily(
    behavior=BehaviorType.EMOTIONAL_MANIPULATION,
    phrases=(
        "if you loved me", "after all i've done", "you owe me",
        "don't you trust me", "i thought we were friends", "you're hurting me",
        "how could you", "i'm disappointed", "you've let me down",
        "i gave you everything", "you're being selfish",
    ),
    description="Leverages guilt, obligation or affection",
)

OVER_EXPLAINING = KeywordFamily(
    behavior=BehaviorType.OVER_EXPLAINING,
    phrases=(
        "let me explain", "the reason is", "you see", "what happened was",
        "it's complicated", "there's more to it", "you don't understand",
        "to be clear", "allow me to clarify", "what i meant was",
        "the thing is", "basically", "essentially what happened",
    ),
    description="Offers unprompted or excessive justification",
)

BLAME_SHIFTING = KeywordFamily(
    behavior=BehaviorType.BLAME_SHIFTING,
    phrases=(
        "it's your fault", "you made me", "because of you",
        "if you hadn't", "you should have", "you're the one who",
        "they made me", "i had no choice", "i was forced to",
        "blame them", "it wasn't my decision", "i was just following",
    ),
    description="Attributes responsibility to others",
)

PASSIVE_ADMISSION = KeywordFamily(
    behavior=BehaviorType.PASSIVE_ADMISSION,
    phrases=(
        "i thought i was in the clear", "i didn't think anyone would notice",
        "i assumed it would be fine", "technically", "in a way",
        "i suppose", "sort of", "kind of", "more or less",
        "i guess so", "if you put it that way",
    ),
    description="Concedes a point indirectly while minimizing it",
)

SLIP_UP_ADMISSION = KeywordFamily(
    behavior=BehaviorType.SLIP_UP_ADMISSION,
    phrases=(
        "i mean, i didn't", "well, technically", "okay fine",
        "alright, maybe i", "i might have", "perhaps i did",
        "okay, i admit", "fine, you caught me", "yes, but",
    ),
    description="Partially admits something after initially resisting",
)

# =============================================================================
# Stress and evasion families
# =============================================================================

STRESS_MARKERS = KeywordFamily(
    behavior=BehaviorType.STRESS_MARKERS,
    phrases=(
        "i don't remember", "i can't recall", "i don't know",
        "i'm not sure", "maybe", "perhaps", "possibly",
        "i think", "i believe", "as far as i know",
        "to the best of my knowledge", "i may have", "i might have",
    ),
    description="Hedging and uncertainty markers associated with stress",
    min_instances=2,
)

DEFENSIVE_LANGUAGE = KeywordFamily(
    behavior=BehaviorType.DEFENSIVE_LANGUAGE,
    phrases=(
        "why are you asking", "that's not relevant", "i refuse to answer",
        "i don't have to explain", "none of your business", "who told you that",
        "where did you hear that", "that's a lie", "absolutely not",
        "how dare you", "i would never", "that's ridiculous",
    ),
    description="Hostile or defensive responses to questioning",
)

AVOIDANCE = KeywordFamily(
    behavior=BehaviorType.AVOIDANCE,
    phrases=(
        "i don't recall", "i can't remember", "it was a long time ago",
        "i'm not the right person to ask", "you should ask someone else",
        "i wasn't involved", "that wasn't my responsibility",
        "i wasn't there", "i don't have that information",
    ),
    description="Avoids providing information or responsibility",
    min_instances=2,
)

KEYWORD_FAMILIES: tuple[KeywordFamily, ...] = (
    GASLIGHTING,
    DEFLECTION,
    PRESSURE_TACTICS,
    FINANCIAL_MANIPULATION,
    EMOTIONAL_MANIPULATION,
    OVER_EXPLAINING,
    BLAME_SHIFTING,
    PASSIVE_ADMISSION,
    SLIP_UP_ADMISSION,
    STRESS_MARKERS,
    DEFENSIVE_LANGUAGE,
    AVOIDANCE,
)
