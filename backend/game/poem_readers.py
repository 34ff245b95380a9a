"""
Reader assignment for the reveal phase.

Every finished poem gets one human reader who reads it aloud. Readers are
dealt round-robin over a shuffled poem order, skipping a poem's first author
when someone else is available, so nobody reads the poem they started.
AI players never read. With fewer humans than poems some humans read more
than one poem; a lone human reads everything, including their own poem.
"""

from typing import Callable, Optional, Sequence

from pydantic import BaseModel

from game.assignment_matrix import secure_shuffle
from game.errors import GameError


class PoemRef(BaseModel):
    poem_id: str
    author_user_id: Optional[str] = None   # writer of line 0


class ReaderCandidate(BaseModel):
    user_id: str
    kind: str = "human"                    # "human" | "AI"


def assign_poem_readers(
    poems: Sequence[PoemRef],
    players: Sequence[ReaderCandidate],
    shuffle: Callable[[Sequence], list] = secure_shuffle,
) -> dict[str, str]:
    """Return {poem_id: reader_user_id} covering every poem."""
    humans = [p for p in players if p.kind != "AI"]
    if not humans:
        raise GameError("Cannot assign readers: no human players")

    assignments: dict[str, str] = {}
    reader_index = 0

    for poem in shuffle(poems):
        attempts = 0
        while humans[reader_index].user_id == poem.author_user_id and attempts < len(humans):
            reader_index = (reader_index + 1) % len(humans)
            attempts += 1

        assignments[poem.poem_id] = humans[reader_index].user_id
        reader_index = (reader_index + 1) % len(humans)

    return assignments
