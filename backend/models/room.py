from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from models.user import _now


class RoomPlayer(BaseModel):
    user_id: str
    display_name: str
    seat_index: Optional[int] = None
    joined_at: datetime = Field(default_factory=_now)


class Room(BaseModel):
    code: str
    host_user_id: str
    status: str = "LOBBY"           # "LOBBY" | "IN_PROGRESS" | "COMPLETED"
    players: list[RoomPlayer] = Field(default_factory=list)
    current_game_id: Optional[str] = None
    current_cycle: int = 0
    created_at: datetime = Field(default_factory=_now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def player(self, user_id: str) -> Optional[RoomPlayer]:
        return next((p for p in self.players if p.user_id == user_id), None)
