from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from game import archive, turns
from game.errors import GameError
from routes.errors import http_error

router = APIRouter(tags=["poems"])


# ---------- Request / Response schemas ----------

class UserAction(BaseModel):
    user_id: str


class FavoriteResponse(BaseModel):
    poem_id: str
    is_favorited: bool


class FavoriteEntry(BaseModel):
    poem_id: str
    preview: str
    favorited_at: datetime


# ---------- Endpoints ----------

@router.get("/poems/{poem_id}")
async def get_poem(poem_id: str, user_id: str):
    """Full poem with authors; only visible to people who played in it."""
    detail = archive.get_poem_detail(poem_id, user_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Poem not found")
    return detail


@router.post("/poems/{poem_id}/reveal")
async def reveal_poem(poem_id: str, body: UserAction):
    try:
        poem = turns.reveal_poem(poem_id, body.user_id)
    except GameError as exc:
        raise http_error(exc)
    return {"poem_id": poem.poem_id, "revealed_at": poem.revealed_at}


@router.post("/poems/{poem_id}/favorite", response_model=FavoriteResponse)
async def toggle_favorite(poem_id: str, body: UserAction):
    try:
        state = archive.toggle_favorite(poem_id, body.user_id)
    except GameError as exc:
        raise http_error(exc)
    return FavoriteResponse(poem_id=poem_id, is_favorited=state)


@router.get("/poems/{poem_id}/favorite", response_model=FavoriteResponse)
async def get_favorite(poem_id: str, user_id: str):
    return FavoriteResponse(poem_id=poem_id, is_favorited=archive.is_favorited(poem_id, user_id))


@router.get("/me/poems")
async def get_archive(user_id: str):
    """Archive page: every poem the user wrote in, with stats."""
    return archive.get_archive(user_id)


@router.get("/me/favorites", response_model=list[FavoriteEntry])
async def get_favorites(user_id: str, limit: Optional[int] = Query(None, ge=1)):
    favorites = archive.get_favorites(user_id)
    return [FavoriteEntry(**f) for f in favorites[:limit]]
