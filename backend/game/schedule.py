"""
Diamond word-count schedule.

Every poem has nine lines. Line N must contain exactly WORD_COUNTS[N] words,
so the finished poem widens to five words at the middle line and narrows
back to one:

    1 - 2 - 3 - 4 - 5 - 4 - 3 - 2 - 1
"""

WORD_COUNTS = (1, 2, 3, 4, 5, 4, 3, 2, 1)
LINES_PER_POEM = len(WORD_COUNTS)
LAST_ROUND = LINES_PER_POEM - 1


def get_target_word_count(round_index: int) -> int:
    """Required word count for the line written in `round_index` (0-8)."""
    if round_index < 0 or round_index >= LINES_PER_POEM:
        raise IndexError(f"round {round_index} outside 0..{LAST_ROUND}")
    return WORD_COUNTS[round_index]


def is_last_round(round_index: int) -> bool:
    return round_index == LAST_ROUND
