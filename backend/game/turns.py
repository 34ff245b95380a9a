"""
Turn flow: who writes what, line submission, round progression and reveal.

A game has one poem per player. In round r every player writes line r of
the poem the assignment matrix gives them, seeing only line r-1 of that
poem. When every poem has its line for the round, the round advances; after
the last round the game completes and each poem gets a reader.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import store
from game.assignment_matrix import get_matrix_round
from game.errors import Forbidden, InvalidState, NotFound, WordCountMismatch
from game.fallbacks import get_fallback_line
from game.poem_readers import PoemRef, ReaderCandidate, assign_poem_readers
from game.rooms import ai_player_in, get_room, require_room, require_user
from game.schedule import get_target_word_count, is_last_round
from game.word_count import count_words
from models.game import Game, Line, Poem
from models.room import Room
from models.user import User

logger = logging.getLogger(__name__)


# ---------- Helpers ----------

def _now() -> datetime:
    return datetime.now(timezone.utc)


def _active_game(room: Room) -> Optional[Game]:
    if not room.current_game_id:
        return None
    game = store.games.get(room.current_game_id)
    if game is None or game.status != "IN_PROGRESS":
        return None
    return game


def _poem_at(game: Game, poem_index: int) -> Optional[Poem]:
    if poem_index < 0 or poem_index >= len(game.poem_ids):
        return None
    return store.poems.get(game.poem_ids[poem_index])


def _game_poems(game: Game) -> list[Poem]:
    return [store.poems[pid] for pid in game.poem_ids if pid in store.poems]


def _poem_index_for(game: Game, user_id: str) -> int:
    row = get_matrix_round(game.assignment_matrix, game.current_round)
    return row.index(user_id) if user_id in row else -1


# ---------- Assignment ----------

def get_current_assignment(code: str, user_id: str) -> Optional[dict]:
    """
    What `user_id` should write right now, or None when there is nothing to
    write (lobby, finished game, not a player).
    """
    if user_id not in store.users:
        return None
    room = get_room(code)
    if room is None:
        return None
    game = _active_game(room)
    if game is None:
        return None

    poem_index = _poem_index_for(game, user_id)
    if poem_index == -1:
        return None
    poem = _poem_at(game, poem_index)
    if poem is None:
        return None

    previous_line_text = None
    if game.current_round > 0:
        previous = poem.line_at(game.current_round - 1)
        previous_line_text = previous.text if previous else None

    return {
        "poem_id": poem.poem_id,
        "line_index": game.current_round,
        "target_word_count": get_target_word_count(game.current_round),
        "previous_line_text": previous_line_text,
    }


# ---------- Submission ----------

def _check_turn(poem: Poem, line_index: int, user_id: str) -> tuple[Room, Game]:
    room = require_room(poem.room_code)
    if not room.current_game_id:
        raise InvalidState("No active game")

    game = store.games.get(room.current_game_id)
    if game is None or game.status != "IN_PROGRESS":
        raise InvalidState("Game not in progress")
    if poem.game_id != game.game_id:
        raise InvalidState("Poem from different game")
    if game.current_round != line_index:
        raise InvalidState("Wrong round")

    row = get_matrix_round(game.assignment_matrix, line_index)
    if row[poem.index_in_room] != user_id:
        raise Forbidden("Not your turn")

    if poem.line_at(line_index) is not None:
        raise InvalidState("Already submitted")

    return room, game


def _append_line(poem: Poem, line_index: int, text: str, word_count: int, author: User) -> Line:
    line = Line(
        index_in_poem=line_index,
        text=text,
        word_count=word_count,
        author_user_id=author.user_id,
        author_display_name=author.display_name,
    )
    poem.lines.append(line)
    return line


def submit_line(poem_id: str, line_index: int, text: str, user_id: str) -> Line:
    """Validate and store a human-written line, advancing the round if complete."""
    user = require_user(user_id)
    poem = store.poems.get(poem_id)
    if poem is None:
        raise NotFound("Poem not found")

    room, game = _check_turn(poem, line_index, user.user_id)

    word_count = count_words(text)
    expected = get_target_word_count(line_index)
    if word_count != expected:
        raise WordCountMismatch(expected, word_count)

    line = _append_line(poem, line_index, text.strip(), word_count, user)
    _complete_round_if_ready(room, game, line_index)
    return line


def pending_ai_turn(code: str) -> Optional[dict]:
    """
    The line the room's AI player still owes for the current round, or None.
    """
    room = get_room(code)
    if room is None:
        return None
    game = _active_game(room)
    if game is None:
        return None
    ai_user = ai_player_in(room)
    if ai_user is None:
        return None

    poem_index = _poem_index_for(game, ai_user.user_id)
    poem = _poem_at(game, poem_index) if poem_index != -1 else None
    if poem is None or poem.line_at(game.current_round) is not None:
        return None

    previous = poem.line_at(game.current_round - 1) if game.current_round > 0 else None
    return {
        "game_id": game.game_id,
        "poem_id": poem.poem_id,
        "round": game.current_round,
        "ai_user_id": ai_user.user_id,
        "persona_id": ai_user.persona_id,
        "previous_line_text": previous.text if previous else None,
        "target_word_count": get_target_word_count(game.current_round),
    }


def commit_ai_line(poem_id: str, line_index: int, text: str, ai_user_id: str) -> Optional[Line]:
    """
    Store an AI-generated line. State is re-checked because generation runs
    after a delay; a stale commit is dropped (returns None). A line with the
    wrong word count is replaced by the deterministic fallback line.
    """
    ai_user = store.users.get(ai_user_id)
    poem = store.poems.get(poem_id)
    if ai_user is None or poem is None:
        return None

    try:
        room, game = _check_turn(poem, line_index, ai_user_id)
    except (NotFound, Forbidden, InvalidState) as exc:
        logger.info("Dropping stale AI line for poem %s round %d: %s", poem_id, line_index, exc)
        return None

    expected = get_target_word_count(line_index)
    text = text.strip()
    word_count = count_words(text)
    if word_count != expected:
        logger.warning(
            "AI line for poem %s round %d had %d words (expected %d); using fallback",
            poem_id, line_index, word_count, expected,
        )
        text = get_fallback_line(expected)
        word_count = expected

    line = _append_line(poem, line_index, text, word_count, ai_user)
    _complete_round_if_ready(room, game, line_index)
    return line


def _complete_round_if_ready(room: Room, game: Game, line_index: int) -> None:
    poems = _game_poems(game)
    if not all(p.line_at(line_index) is not None for p in poems):
        return

    if not is_last_round(line_index):
        game.current_round = line_index + 1
        return

    _complete_game(room, game, poems)


def _complete_game(room: Room, game: Game, poems: list[Poem]) -> None:
    now = _now()
    game.status = "COMPLETED"
    game.completed_at = now
    room.status = "COMPLETED"
    room.completed_at = now

    candidates = []
    for player in room.players:
        user = store.users.get(player.user_id)
        if user is not None:
            candidates.append(ReaderCandidate(user_id=user.user_id, kind=user.kind))

    readers = assign_poem_readers(
        [PoemRef(poem_id=p.poem_id, author_user_id=p.first_author_id) for p in poems],
        candidates,
    )
    for poem in poems:
        poem.completed_at = now
        poem.assigned_reader_id = readers.get(poem.poem_id)

    logger.info("Room %s completed cycle %d", room.code, game.cycle)


# ---------- Progress & reveal ----------

def get_round_progress(code: str) -> Optional[dict]:
    room = get_room(code)
    if room is None or not room.current_game_id:
        return None
    game = store.games.get(room.current_game_id)
    if game is None:
        return None

    progress = []
    for player in room.players:
        submitted = False
        if game.status == "IN_PROGRESS":
            poem_index = _poem_index_for(game, player.user_id)
            poem = _poem_at(game, poem_index) if poem_index != -1 else None
            submitted = poem is not None and poem.line_at(game.current_round) is not None
        else:
            submitted = True
        progress.append({
            "user_id": player.user_id,
            "display_name": player.display_name,
            "submitted": submitted,
        })

    return {"round": game.current_round, "players": progress}


def get_reveal_state(code: str, user_id: str) -> Optional[dict]:
    """Reveal-phase view: every poem's preview plus the full poem this user reads."""
    if user_id not in store.users:
        return None
    room = get_room(code)
    if room is None or room.status != "COMPLETED" or not room.current_game_id:
        return None
    game = store.games.get(room.current_game_id)
    if game is None:
        return None

    names = {p.user_id: p.display_name for p in room.players}
    poems = []
    my_poem = None
    for poem in _game_poems(game):
        first = poem.line_at(0)
        entry = {
            "poem_id": poem.poem_id,
            "index_in_room": poem.index_in_room,
            "preview": first.text if first else "",
            "assigned_reader_id": poem.assigned_reader_id,
            "reader_name": names.get(poem.assigned_reader_id, "Unknown"),
            "revealed_at": poem.revealed_at,
            "is_revealed": poem.revealed_at is not None,
        }
        poems.append(entry)
        if my_poem is None and poem.assigned_reader_id == user_id:
            lines = sorted(poem.lines, key=lambda line: line.index_in_poem)
            my_poem = {
                **entry,
                "lines": [{"text": line.text, "author_user_id": line.author_user_id} for line in lines],
            }

    return {
        "poems": poems,
        "my_poem": my_poem,
        "all_revealed": all(p["is_revealed"] for p in poems),
        "is_host": room.host_user_id == user_id,
        "players": [{"user_id": p.user_id, "display_name": p.display_name} for p in room.players],
    }


def reveal_poem(poem_id: str, user_id: str) -> Poem:
    require_user(user_id)
    poem = store.poems.get(poem_id)
    if poem is None:
        raise NotFound("Poem not found")
    if poem.assigned_reader_id != user_id:
        raise Forbidden("This poem is not assigned to you")
    if poem.revealed_at is not None:
        raise InvalidState("Poem already revealed")

    poem.revealed_at = _now()
    return poem
