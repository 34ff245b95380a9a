"""
Word-count guard for AI-generated lines.

LLMs rarely respect "exactly N words". Generated text is normalized, checked
against the target, and repaired when possible:

  - exact count   -> normalized text
  - too many      -> truncated to the first N words (lossy, best effort)
  - too few       -> None; we never invent words, the caller picks a fallback
"""

import re
from typing import Optional

from game.word_count import count_words, split_words

# Straight and typographic quotes a model may wrap its answer in
QUOTE_CHARS = "\"'“”‘’"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Strip one layer of surrounding quotes and collapse whitespace."""
    text = text.strip()
    if text and text[0] in QUOTE_CHARS:
        text = text[1:]
    if text and text[-1] in QUOTE_CHARS:
        text = text[:-1]
    return _WHITESPACE_RE.sub(" ", text).strip()


def validate_word_count(text: str, target_word_count: int) -> bool:
    return count_words(normalize_text(text)) == target_word_count


def attempt_fix(text: str, target_word_count: int) -> Optional[str]:
    """
    Return `text` repaired to exactly `target_word_count` words, or None.

    Truncation walks the whitespace tokens and stops right after the
    target-th counted word, so punctuation-only tokens in between are kept
    but never pushed past the end.
    """
    normalized = normalize_text(text)
    actual = count_words(normalized)

    if actual == target_word_count:
        return normalized

    if actual < target_word_count:
        return None

    kept: list[str] = []
    counted = 0
    for token in normalized.split(" "):
        if counted == target_word_count:
            break
        kept.append(token)
        if split_words(token):
            counted += 1
    return " ".join(kept)
