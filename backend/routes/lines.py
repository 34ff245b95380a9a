from fastapi import APIRouter, BackgroundTasks
from pydantic import BaseModel

import store
from game import turns
from game.errors import GameError
from routes.errors import http_error
from routes.rooms import schedule_ai_turn

router = APIRouter(tags=["lines"])


# ---------- Request / Response schemas ----------

class SubmitLineRequest(BaseModel):
    poem_id: str
    line_index: int
    text: str
    user_id: str


class SubmitLineResponse(BaseModel):
    line_index: int
    text: str
    word_count: int


# ---------- Endpoint ----------

@router.post("/lines", response_model=SubmitLineResponse)
async def submit_line(body: SubmitLineRequest, background_tasks: BackgroundTasks):
    """
    Stores the caller's line for the current round.
    A word count that misses the target is rejected with 422 so the
    player can fix the line and resubmit.
    """
    poem = store.poems.get(body.poem_id)
    game = store.games.get(poem.game_id) if poem else None
    round_before = game.current_round if game else None

    try:
        line = turns.submit_line(body.poem_id, body.line_index, body.text, body.user_id)
    except GameError as exc:
        raise http_error(exc)

    # An AI turn already queued for this round is still running; only a
    # round that this line closed needs a new one
    if game.current_round != round_before:
        schedule_ai_turn(poem.room_code, background_tasks)

    return SubmitLineResponse(
        line_index=line.index_in_poem,
        text=line.text,
        word_count=line.word_count,
    )
