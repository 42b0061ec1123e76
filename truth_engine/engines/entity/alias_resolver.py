"""Actor identity resolution.

Resolves raw speaker names onto a registry of actors. Matching strategy, in
order of precedence:
1. Exact match (case-insensitive) against an actor key or alias
2. Alias containment: one name contains the other on word boundaries
   ("John" / "John Smith")
3. First-name match, only when the first name is longer than 2 characters
   and the registered actor carries an email or phone
Registrations sharing an email or phone merge into one actor.

Fuzzy near-misses (rapidfuzz) never merge; they are reported as suggestions.
"""

import re
from dataclasses import dataclass

import structlog
from rapidfuzz import fuzz

from truth_engine.models.statement import Actor, ActorInput, normalize_actor_name

logger = structlog.get_logger(__name__)

# Default threshold for fuzzy alias suggestions (0-100)
DEFAULT_FUZZY_THRESHOLD = 85

# First names this short ("Al", "J.") are too ambiguous to merge on
MIN_FIRST_NAME_LENGTH = 3


@dataclass
class FuzzyMatchResult:
    """A possible alias that was not merged."""

    actor_key: str
    matched_name: str  # The actor name or alias that scored
    score: float  # 0-100, higher is better


def _contains_words(haystack: str, needle: str) -> bool:
    if not needle or not haystack:
        return False
    return re.search(r"(?<!\w)" + re.escape(needle) + r"(?!\w)", haystack) is not None


def _first_name(key: str) -> str:
    parts = key.split(" ")
    return parts[0] if parts else ""


class ActorRegistry:
    """Registry of resolved actors for a single run.

    Example:
        >>> registry = ActorRegistry()
        >>> registry.register(ActorInput(name="John Smith", aliases=["J. Smith"]))
        >>> registry.resolve("J. Smith").key
        'john smith'
    """

    def __init__(self, fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD) -> None:
        """Initialize an empty registry.

        Args:
            fuzzy_threshold: Minimum rapidfuzz score for alias suggestions.
        """
        self.fuzzy_threshold = fuzzy_threshold
        self._actors: dict[str, Actor] = {}

    def __len__(self) -> int:
        return len(self._actors)

    def actors(self) -> list[Actor]:
        """Registered actors in registration order."""
        return list(self._actors.values())

    def get(self, key: str) -> Actor | None:
        """Get an actor by key."""
        return self._actors.get(key)

    # =========================================================================
    # Registration / resolution
    # =========================================================================

    def register(self, actor_input: ActorInput) -> Actor:
        """Register identity hints, merging with an existing actor if they match.

        Args:
            actor_input: Name plus optional aliases, emails and phones.

        Returns:
            The actor the hints were merged into (or a new one).
        """
        actor = self._find_by_contact(actor_input) or self.find(actor_input.name)

        if actor is None:
            key = normalize_actor_name(actor_input.name)
            actor = Actor(key=key, display_name=actor_input.name.strip())
            self._actors[key] = actor
            logger.debug("actor_registered", actor_key=key)
        else:
            self._add_alias(actor, actor_input.name)

        for alias in actor_input.aliases:
            self._add_alias(actor, alias)
        for email in actor_input.emails:
            if email.lower() not in actor.emails:
                actor.emails.append(email.lower())
        for phone in actor_input.phones:
            digits = re.sub(r"\D", "", phone)
            if digits and digits not in actor.phones:
                actor.phones.append(digits)

        return actor

    def resolve(self, name: str) -> Actor:
        """Resolve a raw speaker name, creating a new actor when nothing matches.

        A name that matched through containment or first-name rules is
        recorded as an alias of the actor it resolved to.
        """
        actor = self.find(name)
        if actor is not None:
            self._add_alias(actor, name)
            return actor

        key = normalize_actor_name(name)
        actor = Actor(key=key, display_name=name.strip())
        self._actors[key] = actor

        suggestions = self.suggest(name)
        if suggestions:
            logger.debug(
                "possible_alias_unmerged",
                actor_key=key,
                candidates=[s.actor_key for s in suggestions],
                best_score=suggestions[0].score,
            )
        return actor

    def find(self, name: str) -> Actor | None:
        """Find the actor a name refers to, without side effects."""
        key = normalize_actor_name(name)
        if not key:
            return None

        # Phase 1: exact key / alias match
        for actor in self._actors.values():
            if key == actor.key or key in (normalize_actor_name(a) for a in actor.aliases):
                return actor

        # Phase 2: word-boundary containment in either direction
        for actor in self._actors.values():
            for known in [actor.key, *(normalize_actor_name(a) for a in actor.aliases)]:
                if _contains_words(known, key) or _contains_words(key, known):
                    return actor

        # Phase 3: first-name match, guarded by length and contact identifiers
        first = _first_name(key)
        if len(first) >= MIN_FIRST_NAME_LENGTH:
            for actor in self._actors.values():
                if actor.has_contact_identifiers and _first_name(actor.key) == first:
                    return actor

        return None

    def suggest(self, name: str) -> list[FuzzyMatchResult]:
        """Fuzzy near-misses for a name among actors it did not resolve to.

        Uses the better of token_set_ratio and partial_ratio, which handles
        word-order differences and initials ("Smith, John" / "John Smith").
        """
        key = normalize_actor_name(name)
        results: list[FuzzyMatchResult] = []

        for actor in self._actors.values():
            if actor.key == key:
                continue
            best: FuzzyMatchResult | None = None
            for known in [actor.key, *actor.aliases]:
                known_lower = known.lower()
                score = max(
                    fuzz.token_set_ratio(known_lower, key),
                    fuzz.partial_ratio(known_lower, key),
                )
                if score >= self.fuzzy_threshold and (best is None or score > best.score):
                    best = FuzzyMatchResult(actor_key=actor.key, matched_name=known, score=score)
            if best is not None:
                results.append(best)

        return sorted(results, key=lambda r: -r.score)

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _find_by_contact(self, actor_input: ActorInput) -> Actor | None:
        emails = {e.lower() for e in actor_input.emails}
        phones = {re.sub(r"\D", "", p) for p in actor_input.phones} - {""}
        if not emails and not phones:
            return None
        for actor in self._actors.values():
            if emails & set(actor.emails) or phones & set(actor.phones):
                return actor
        return None

    @staticmethod
    def _add_alias(actor: Actor, name: str) -> None:
        alias = name.strip()
        if not alias:
            return
        if normalize_actor_name(alias) == actor.key:
            return
        if any(normalize_actor_name(a) == normalize_actor_name(alias) for a in actor.aliases):
            return
        actor.aliases.append(alias)
