"""Tokenizing and fuzzy word matching for chat messages."""
import re
from typing import Iterable, Sequence, Tuple

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize(text: str) -> Tuple[str, ...]:
    """
    Turn raw text into lowercase alphanumeric words.

    Punctuation and case carry no matching significance, so "What's up?!"
    becomes ("whats", "up").

    Args:
        text: Raw message text

    Returns:
        Tuple of words (empty for empty or punctuation-only input)
    """
    cleaned = _NON_ALNUM.sub("", (text or "").lower())
    return tuple(word for word in cleaned.split() if word)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        table[i][0] = i
    for j in range(len(b) + 1):
        table[0][j] = j

    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,
                table[i][j - 1] + 1,
                table[i - 1][j - 1] + cost,
            )
    return table[len(a)][len(b)]


def max_edits(pattern_word: str) -> int:
    """Tolerance grows with the pattern word: 0 below 3 chars, capped at 2."""
    return min(2, len(pattern_word) // 3)


def words_match(word: str, pattern_word: str) -> bool:
    """
    Check whether a message word is close enough to a pattern word.

    The tolerance is taken from the pattern word only, so the check is not
    symmetric.
    """
    return levenshtein_distance(word, pattern_word) <= max_edits(pattern_word)


def message_contains_phrase(tokens: Sequence[str], phrase: str) -> bool:
    """
    True if any message word matches any word of the phrase.

    This is a bag-of-words test, not phrase alignment: "who are you" is
    satisfied by a message that only contains "you".
    """
    phrase_words = normalize(phrase)
    return any(
        words_match(word, pattern_word)
        for word in tokens
        for pattern_word in phrase_words
    )


def contains_any(tokens: Sequence[str], phrases: Iterable[str]) -> bool:
    """True if at least one phrase is found in the message."""
    return any(message_contains_phrase(tokens, phrase) for phrase in phrases)
