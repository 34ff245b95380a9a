"""
In-memory game state shared across all routes.

Rooms, games and poems live in plain dicts for the lifetime of the process;
nothing is written to disk.
"""

from datetime import datetime

from models.game import Game, Poem
from models.room import Room
from models.user import User

users: dict[str, User] = {}
rooms: dict[str, Room] = {}            # keyed by room code
games: dict[str, Game] = {}
poems: dict[str, Poem] = {}
favorites: dict[str, dict[str, datetime]] = {}   # user_id -> {poem_id: favorited_at}


def reset() -> None:
    users.clear()
    rooms.clear()
    games.clear()
    poems.clear()
    favorites.clear()
