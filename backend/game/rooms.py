"""
Room lifecycle: lobby membership, AI players, starting games and replays.

All functions operate on the in-memory store and raise GameError subclasses
on rule violations.
"""

import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

import store
from game.assignment_matrix import generate_assignment_matrix, secure_shuffle
from game.avatar_color import get_unique_color
from game.errors import Forbidden, InvalidState, NotFound
from game.personas import pick_random_persona
from game.room_code import generate_room_code, normalize_room_code
from models.game import Game, Poem
from models.room import Room, RoomPlayer
from models.user import User

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 8


# ---------- Lookups ----------

def _now() -> datetime:
    return datetime.now(timezone.utc)


def get_room(code: str) -> Optional[Room]:
    return store.rooms.get(normalize_room_code(code))


def require_room(code: str) -> Room:
    room = get_room(code)
    if room is None:
        raise NotFound("Room not found")
    return room


def require_user(user_id: str) -> User:
    user = store.users.get(user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def ensure_user(user_id: str, display_name: str) -> User:
    """Get or register a human player, refreshing their display name."""
    user = store.users.get(user_id)
    if user is None:
        user = User(user_id=user_id, display_name=display_name)
        store.users[user_id] = user
    elif display_name and user.display_name != display_name:
        user.display_name = display_name
    return user


def _require_host(room: Room, user_id: str, action: str) -> None:
    if room.host_user_id != user_id:
        raise Forbidden(f"Only host can {action}")


def ai_player_in(room: Room) -> Optional[User]:
    for player in room.players:
        user = store.users.get(player.user_id)
        if user is not None and user.is_ai:
            return user
    return None


# ---------- Lobby ----------

def create_room(user_id: str, display_name: str) -> Room:
    user = ensure_user(user_id, display_name)

    code = generate_room_code()
    while code in store.rooms:
        code = generate_room_code()

    room = Room(code=code, host_user_id=user.user_id)
    room.players.append(RoomPlayer(user_id=user.user_id, display_name=display_name))
    store.rooms[code] = room

    logger.info("Room %s created by %s", code, user.user_id)
    return room


def join_room(code: str, user_id: str, display_name: str) -> Room:
    user = ensure_user(user_id, display_name)
    room = require_room(code)

    if room.status != "LOBBY":
        raise InvalidState("Cannot join a room that is not in LOBBY status")

    if room.player(user.user_id) is not None:
        return room

    if len(room.players) >= MAX_PLAYERS:
        raise InvalidState("Room is full")

    room.players.append(RoomPlayer(user_id=user.user_id, display_name=display_name))
    return room


def get_room_state(code: str) -> dict:
    """Room plus its players, each with a room-unique avatar color."""
    room = require_room(code)
    stable_ids = [p.user_id for p in room.players]

    players = []
    for p in room.players:
        user = store.users.get(p.user_id)
        players.append({
            "user_id": p.user_id,
            "display_name": p.display_name,
            "seat_index": p.seat_index,
            "is_host": p.user_id == room.host_user_id,
            "is_ai": bool(user and user.is_ai),
            "color": get_unique_color(p.user_id, stable_ids),
        })

    return {"room": room, "players": players}


# ---------- AI players ----------

def add_ai_player(code: str, user_id: str, random_fn=None) -> User:
    require_user(user_id)
    room = require_room(code)
    _require_host(room, user_id, "add AI player")

    if room.status != "LOBBY":
        raise InvalidState("Can only add AI in lobby")
    if len(room.players) >= MAX_PLAYERS:
        raise InvalidState("Room is full")
    if ai_player_in(room) is not None:
        raise InvalidState("Room already has an AI player")

    persona = pick_random_persona(random_fn)
    ai_user = User(
        # System id no guest or account id can collide with
        user_id=f"system:ai:{uuid.uuid4()}",
        display_name=persona.display_name,
        kind="AI",
        persona_id=persona.id,
    )
    store.users[ai_user.user_id] = ai_user
    room.players.append(RoomPlayer(user_id=ai_user.user_id, display_name=persona.display_name))

    logger.info("AI player %s (%s) joined room %s", ai_user.user_id, persona.id, room.code)
    return ai_user


def remove_ai_player(code: str, user_id: str) -> bool:
    require_user(user_id)
    room = require_room(code)
    _require_host(room, user_id, "remove AI player")

    if room.status != "LOBBY":
        raise InvalidState("Can only remove AI in lobby")

    ai_user = ai_player_in(room)
    if ai_user is None:
        return False

    # The user record stays so past lines keep their attribution
    room.players = [p for p in room.players if p.user_id != ai_user.user_id]
    return True


# ---------- Game start / replay ----------

def start_game(code: str, user_id: str, shuffle=secure_shuffle) -> Game:
    require_user(user_id)
    room = require_room(code)
    _require_host(room, user_id, "start game")

    if room.status != "LOBBY":
        raise InvalidState("Game already started")
    if len(room.players) < MIN_PLAYERS:
        raise InvalidState(f"Need at least {MIN_PLAYERS} players")

    seated = shuffle(room.players)
    for seat, player in enumerate(seated):
        player.seat_index = seat
    player_ids = [p.user_id for p in seated]

    cycle = room.current_cycle + 1
    game = Game(
        game_id=f"game_{uuid.uuid4().hex[:12]}",
        room_code=room.code,
        cycle=cycle,
        assignment_matrix=generate_assignment_matrix(player_ids, shuffle=shuffle),
    )

    for i in range(len(player_ids)):
        poem = Poem(
            poem_id=f"poem_{secrets.token_hex(6)}",
            room_code=room.code,
            game_id=game.game_id,
            index_in_room=i,
        )
        store.poems[poem.poem_id] = poem
        game.poem_ids.append(poem.poem_id)

    store.games[game.game_id] = game

    room.status = "IN_PROGRESS"
    room.current_game_id = game.game_id
    room.current_cycle = cycle
    room.started_at = _now()
    room.completed_at = None

    logger.info("Room %s started cycle %d with %d players", room.code, cycle, len(player_ids))
    return game


def start_new_cycle(code: str, user_id: str) -> Room:
    """Return a completed room to the lobby; the next start_game bumps the cycle."""
    require_user(user_id)
    room = require_room(code)
    _require_host(room, user_id, "start new cycle")

    if room.status != "COMPLETED":
        raise InvalidState("Current cycle not completed")

    room.status = "LOBBY"
    room.current_game_id = None
    return room
