"""Pull a place name (or a "use my position" request) out of a chat message."""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Pattern, Tuple


class LocationKind(Enum):
    BY_NAME = "by_name"
    DEVICE = "device"
    NONE = "none"


@dataclass(frozen=True)
class LocationQuery:
    """Where the user wants weather for: a named place, their own position, or nowhere."""
    kind: LocationKind
    name: Optional[str] = None

    @classmethod
    def by_name(cls, name: str) -> "LocationQuery":
        return cls(LocationKind.BY_NAME, name)

    @classmethod
    def device(cls) -> "LocationQuery":
        return cls(LocationKind.DEVICE)

    @classmethod
    def none(cls) -> "LocationQuery":
        return cls(LocationKind.NONE)


@dataclass(frozen=True)
class ExtractionRule:
    """
    One step of location extraction.

    Rules are tried in order. A DEVICE rule short-circuits on any match;
    a BY_NAME rule yields the cleaned text of ``group`` from the first
    match that survives cleaning.
    """
    name: str
    pattern: Pattern
    kind: LocationKind
    group: int = 0


_PLACE_CHARS = r"[a-z][a-z\s,'.-]*"
_WEATHER_KEYWORDS = r"(?:weather|temperature|forecast|conditions?|humidity|wind|rain|sun|cloud)"

LOCATION_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="own_position",
        pattern=re.compile(r"\b(?:here|near me|my location|current location)\b", re.IGNORECASE),
        kind=LocationKind.DEVICE,
    ),
    ExtractionRule(
        name="after_preposition",
        pattern=re.compile(r"\b(?:in|at|for|of)\s+(" + _PLACE_CHARS + ")", re.IGNORECASE),
        kind=LocationKind.BY_NAME,
        group=1,
    ),
    ExtractionRule(
        name="before_keyword",
        pattern=re.compile(r"^\s*(" + _PLACE_CHARS + r"?)\s+" + _WEATHER_KEYWORDS + r"\b", re.IGNORECASE),
        kind=LocationKind.BY_NAME,
        group=1,
    ),
)

_PREPOSITIONS = {"in", "at", "for", "of"}
# Words that can sit around a place name without being part of it.
_FILLER_WORDS = {
    "the", "a", "an", "today", "tonight", "now", "right", "currently", "please",
    "tomorrow", "this", "next", "week", "weekend", "morning", "afternoon",
    "evening", "like", "be", "going", "to", "and",
    "what", "whats", "how", "hows", "is", "s", "tell", "me", "show", "give",
    "check", "get", "about", "current", "it", "will",
}
_NOT_A_PLACE = {"me", "you", "it", "us", "here", "there", "my", "your"}
# "my city", "our town": the speaker's own place, not a name.
_POSSESSIVES = {"my", "our"}


def clean_place_name(candidate: str) -> Optional[str]:
    """
    Trim filler words around a captured place name.

    Returns None when nothing place-like is left, e.g. "for today" or
    "in it".
    """
    words = candidate.replace(",", " , ").split()
    strip_set = _FILLER_WORDS | _PREPOSITIONS | {""}

    def is_filler(word: str) -> bool:
        return re.sub(r"[^a-z]", "", word.lower()) in strip_set

    while words and is_filler(words[0]):
        words.pop(0)
    while words and is_filler(words[-1]):
        words.pop()

    if not words:
        return None
    if words[0].lower() in _POSSESSIVES:
        return None
    name = " ".join(words).replace(" , ", ", ").strip(" .'-")
    if not name or name.lower() in _NOT_A_PLACE:
        return None
    return name


def extract_location(message: str, rules: Tuple[ExtractionRule, ...] = LOCATION_RULES) -> LocationQuery:
    """
    Find the location argument of a raw message.

    Always returns exactly one query: a named place when a rule captures
    one, otherwise DEVICE (own-position phrases, or nothing usable found).
    """
    for rule in rules:
        for match in rule.pattern.finditer(message or ""):
            if rule.kind is LocationKind.DEVICE:
                logging.debug(f"Rule '{rule.name}' asks for the device location")
                return LocationQuery.device()
            name = clean_place_name(match.group(rule.group))
            if name:
                logging.debug(f"Rule '{rule.name}' captured place '{name}'")
                return LocationQuery.by_name(name)

    logging.debug("No place name found, falling back to device location")
    return LocationQuery.device()
