from models.user import User
from models.room import Room, RoomPlayer
from models.game import Game, Line, Poem

__all__ = ["User", "Room", "RoomPlayer", "Game", "Line", "Poem"]
