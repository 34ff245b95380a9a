from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException
from pydantic import BaseModel

from game import rooms, turns
from game.ai_player import run_ai_turn
from game.errors import GameError
from game.room_code import format_room_code
from routes.errors import http_error

router = APIRouter(tags=["rooms"])


# ---------- Request / Response schemas ----------

class PlayerIdentity(BaseModel):
    user_id: str            # account id or guest id
    display_name: str


class HostAction(BaseModel):
    user_id: str


class CreateRoomResponse(BaseModel):
    code: str
    display_code: str


class PlayerView(BaseModel):
    user_id: str
    display_name: str
    seat_index: Optional[int] = None
    is_host: bool
    is_ai: bool
    color: str


class RoomStateResponse(BaseModel):
    code: str
    display_code: str
    status: str
    host_user_id: str
    current_cycle: int
    players: list[PlayerView]


class AiPlayerResponse(BaseModel):
    ai_user_id: str
    persona_id: str
    display_name: str


class AssignmentResponse(BaseModel):
    poem_id: str
    line_index: int
    target_word_count: int
    previous_line_text: Optional[str] = None


class PlayerProgress(BaseModel):
    user_id: str
    display_name: str
    submitted: bool


class RoundProgressResponse(BaseModel):
    round: int
    players: list[PlayerProgress]


def schedule_ai_turn(code: str, background_tasks: BackgroundTasks) -> None:
    pending = turns.pending_ai_turn(code)
    if pending is not None:
        background_tasks.add_task(run_ai_turn, code, pending["round"])


# ---------- Endpoints ----------

@router.post("/rooms", response_model=CreateRoomResponse)
async def create_room(body: PlayerIdentity):
    room = rooms.create_room(body.user_id, body.display_name)
    return CreateRoomResponse(code=room.code, display_code=format_room_code(room.code))


@router.post("/rooms/{code}/join", response_model=RoomStateResponse)
async def join_room(code: str, body: PlayerIdentity):
    try:
        rooms.join_room(code, body.user_id, body.display_name)
    except GameError as exc:
        raise http_error(exc)
    return await get_room_state(code)


@router.get("/rooms/{code}", response_model=RoomStateResponse)
async def get_room_state(code: str):
    """Lobby view: room status plus players with their avatar colors."""
    try:
        state = rooms.get_room_state(code)
    except GameError as exc:
        raise http_error(exc)

    room = state["room"]
    return RoomStateResponse(
        code=room.code,
        display_code=format_room_code(room.code),
        status=room.status,
        host_user_id=room.host_user_id,
        current_cycle=room.current_cycle,
        players=[PlayerView(**p) for p in state["players"]],
    )


@router.post("/rooms/{code}/ai", response_model=AiPlayerResponse)
async def add_ai_player(code: str, body: HostAction):
    try:
        ai_user = rooms.add_ai_player(code, body.user_id)
    except GameError as exc:
        raise http_error(exc)
    return AiPlayerResponse(
        ai_user_id=ai_user.user_id,
        persona_id=ai_user.persona_id,
        display_name=ai_user.display_name,
    )


@router.delete("/rooms/{code}/ai")
async def remove_ai_player(code: str, body: HostAction):
    try:
        removed = rooms.remove_ai_player(code, body.user_id)
    except GameError as exc:
        raise http_error(exc)
    return {"removed": removed}


@router.post("/rooms/{code}/start")
async def start_game(code: str, body: HostAction, background_tasks: BackgroundTasks):
    """Starts the next cycle. If an AI player is seated, its first turn is queued."""
    try:
        game = rooms.start_game(code, body.user_id)
    except GameError as exc:
        raise http_error(exc)

    schedule_ai_turn(code, background_tasks)
    return {"game_id": game.game_id, "cycle": game.cycle}


@router.post("/rooms/{code}/new-cycle")
async def start_new_cycle(code: str, body: HostAction):
    try:
        room = rooms.start_new_cycle(code, body.user_id)
    except GameError as exc:
        raise http_error(exc)
    return {"status": room.status}


@router.get("/rooms/{code}/assignment", response_model=Optional[AssignmentResponse])
async def get_assignment(code: str, user_id: str):
    """What this player writes now; null between games or once they're not needed."""
    assignment = turns.get_current_assignment(code, user_id)
    if assignment is None:
        return None
    return AssignmentResponse(**assignment)


@router.get("/rooms/{code}/progress", response_model=RoundProgressResponse)
async def get_round_progress(code: str):
    progress = turns.get_round_progress(code)
    if progress is None:
        raise HTTPException(status_code=404, detail="No game in this room")
    return RoundProgressResponse(
        round=progress["round"],
        players=[PlayerProgress(**p) for p in progress["players"]],
    )


@router.get("/rooms/{code}/reveal")
async def get_reveal_state(code: str, user_id: str):
    state = turns.get_reveal_state(code, user_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Reveal not available")
    return state
