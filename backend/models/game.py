from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from models.user import _now


class Line(BaseModel):
    index_in_poem: int
    text: str
    word_count: int
    author_user_id: str
    author_display_name: str        # captured at write time
    created_at: datetime = Field(default_factory=_now)


class Poem(BaseModel):
    poem_id: str
    room_code: str
    game_id: str
    index_in_room: int
    lines: list[Line] = Field(default_factory=list)
    assigned_reader_id: Optional[str] = None
    revealed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_now)

    def line_at(self, index: int) -> Optional[Line]:
        return next((line for line in self.lines if line.index_in_poem == index), None)

    @property
    def first_author_id(self) -> Optional[str]:
        first = self.line_at(0)
        return first.author_user_id if first else None


class Game(BaseModel):
    game_id: str
    room_code: str
    status: str = "IN_PROGRESS"     # "IN_PROGRESS" | "COMPLETED"
    cycle: int
    current_round: int = 0
    assignment_matrix: list[list[str]]
    poem_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    completed_at: Optional[datetime] = None
