"""
Word counting for submitted lines.

Tokens are separated by any run of Unicode whitespace. Punctuation glued to
the start or end of a token is ignored, and a token made only of punctuation
("—", "...") is not a word. Emoji are symbols, not punctuation, so a lone
emoji (even a multi-codepoint ZWJ sequence) counts as one word.
"""

import unicodedata


def _is_punctuation(char: str) -> bool:
    return unicodedata.category(char).startswith("P")


def _strip_punctuation(token: str) -> str:
    start, end = 0, len(token)
    while start < end and _is_punctuation(token[start]):
        start += 1
    while end > start and _is_punctuation(token[end - 1]):
        end -= 1
    return token[start:end]


def split_words(text: str) -> list[str]:
    """Whitespace tokens that count as words, in order, as written."""
    return [token for token in text.split() if _strip_punctuation(token)]


def count_words(text: str) -> int:
    if not text:
        return 0
    return len(split_words(text))
