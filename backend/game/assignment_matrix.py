"""
Turn assignment matrix.

matrix[round][poem_index] is the user who writes line `round` of poem
`poem_index`. Each row is a permutation of the players, so every player
writes exactly one line per round. Between consecutive rounds nobody stays
on the same poem; otherwise a player would see their own previous line.

With a handful of players a conflict-free row almost always exists; the
generator repairs conflicts by swapping, reshuffles when swaps are not
enough, and after MAX_ATTEMPTS accepts a conflicting row rather than
failing the game.
"""

import logging
import secrets
from typing import Callable, Sequence, TypeVar

from game.errors import InvalidGameState
from game.schedule import LINES_PER_POEM

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 1000


def secure_shuffle(items: Sequence[T]) -> list[T]:
    """Fisher-Yates shuffle driven by the OS CSPRNG. Returns a new list."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = secrets.randbelow(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def _has_conflicts(current: list, previous: list) -> bool:
    return any(a == b for a, b in zip(current, previous))


def _find_swap_target(conflict_index: int, current: list, previous: list) -> int:
    """
    Index k whose occupant can trade places with current[conflict_index]
    without creating a conflict at either position. -1 if none.
    """
    moving = current[conflict_index]
    for k in range(len(current)):
        if k == conflict_index:
            continue
        if (
            current[k] != previous[k]
            and moving != previous[k]
            and current[k] != previous[conflict_index]
        ):
            return k
    return -1


def _next_round(previous: list[T], user_ids: Sequence[T],
                shuffle: Callable[[Sequence[T]], list[T]], round_index: int) -> list[T]:
    current = shuffle(user_ids)
    attempts = 0

    while _has_conflicts(current, previous) and attempts < MAX_ATTEMPTS:
        attempts += 1

        for j in range(len(current)):
            if current[j] == previous[j]:
                k = _find_swap_target(j, current, previous)
                if k != -1:
                    current[j], current[k] = current[k], current[j]

        if _has_conflicts(current, previous):
            current = shuffle(user_ids)

    if attempts >= MAX_ATTEMPTS:
        logger.warning(
            "No conflict-free permutation for round %d after %d attempts; "
            "allowing consecutive turns on the same poem",
            round_index, MAX_ATTEMPTS,
        )

    return current


def generate_assignment_matrix(
    user_ids: Sequence[T],
    shuffle: Callable[[Sequence[T]], list[T]] = secure_shuffle,
) -> list[list[T]]:
    """Build the LINES_PER_POEM x len(user_ids) matrix for a new game."""
    if not user_ids:
        return []

    matrix = [shuffle(user_ids)]
    for r in range(1, LINES_PER_POEM):
        matrix.append(_next_round(matrix[r - 1], user_ids, shuffle, r))
    return matrix


def get_matrix_round(matrix: list[list[T]], round_index: int) -> list[T]:
    """Bounds-checked row access."""
    if round_index < 0 or round_index >= len(matrix):
        raise InvalidGameState(
            f"Invalid game state: round {round_index} out of bounds "
            f"(matrix has {len(matrix)} rounds)"
        )
    return matrix[round_index]
