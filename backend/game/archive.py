"""
Personal poem archive and favorites.

A user's archive is every poem they wrote at least one line of. Entries
carry full line data and author colors so the archive page needs no
follow-up lookups.
"""

from datetime import datetime, timezone
from typing import Optional

import store
from game.avatar_color import get_user_color
from game.errors import NotFound
from game.rooms import require_user
from models.game import Poem

MAX_CO_AUTHORS = 3


def _participated(poem: Poem, user_id: str) -> bool:
    room = store.rooms.get(poem.room_code)
    if room is not None and room.player(user_id) is not None:
        return True
    return any(line.author_user_id == user_id for line in poem.lines)


def _sorted_lines(poem: Poem) -> list:
    return sorted(poem.lines, key=lambda line: line.index_in_poem)


def get_poem_detail(poem_id: str, user_id: str) -> Optional[dict]:
    """Full poem for someone who played in it; None otherwise."""
    if user_id not in store.users:
        return None
    poem = store.poems.get(poem_id)
    if poem is None or not _participated(poem, user_id):
        return None

    lines = []
    for line in _sorted_lines(poem):
        author = store.users.get(line.author_user_id)
        lines.append({
            "index_in_poem": line.index_in_poem,
            "text": line.text,
            "word_count": line.word_count,
            "author_user_id": line.author_user_id,
            "author_name": line.author_display_name or (author.display_name if author else "Unknown"),
        })
    return {"poem": poem, "lines": lines}


def get_archive(user_id: str) -> dict:
    """Poems the user wrote in, newest first, plus archive statistics."""
    if user_id not in store.users:
        return {"poems": [], "stats": None}

    favorites = store.favorites.get(user_id, {})
    entries = []
    collaborators: set[str] = set()
    lines_written = 0

    for poem in store.poems.values():
        lines = _sorted_lines(poem)
        mine = [line for line in lines if line.author_user_id == user_id]
        if not mine:
            continue
        lines_written += len(mine)

        authors = []
        for line in lines:
            if line.author_user_id not in authors:
                authors.append(line.author_user_id)
        co_authors = [a for a in authors if a != user_id]
        collaborators.update(co_authors)

        room = store.rooms.get(poem.room_code)
        favorited_at = favorites.get(poem.poem_id)
        entries.append({
            "poem_id": poem.poem_id,
            "preview": lines[0].text if lines else "...",
            "lines": [
                {
                    "text": line.text,
                    "word_count": line.word_count,
                    "author_stable_id": line.author_user_id,
                    "author_name": line.author_display_name,
                    "author_color": get_user_color(line.author_user_id),
                    "is_bot": _is_bot(line.author_user_id),
                }
                for line in lines
            ],
            "poet_count": len(authors),
            "line_count": len(lines),
            "is_favorited": favorited_at is not None,
            "favorited_at": favorited_at,
            "created_at": poem.created_at,
            "room_date": room.created_at if room else poem.created_at,
            "co_authors": [_display_name(a) for a in co_authors][:MAX_CO_AUTHORS],
        })

    entries.sort(key=lambda e: e["created_at"], reverse=True)

    stats = {
        "total_poems": len(entries),
        "total_favorites": sum(1 for e in entries if e["is_favorited"]),
        "unique_collaborators": len(collaborators),
        "total_lines_written": lines_written,
    }
    return {"poems": entries, "stats": stats}


def _is_bot(user_id: str) -> bool:
    user = store.users.get(user_id)
    return bool(user and user.is_ai)


def _display_name(user_id: str) -> str:
    user = store.users.get(user_id)
    return user.display_name if user else "Unknown"


# ---------- Favorites ----------

def toggle_favorite(poem_id: str, user_id: str) -> bool:
    """Flip the favorite flag; returns the new state."""
    require_user(user_id)
    if poem_id not in store.poems:
        raise NotFound("Poem not found")

    mine = store.favorites.setdefault(user_id, {})
    if poem_id in mine:
        del mine[poem_id]
        return False
    mine[poem_id] = datetime.now(timezone.utc)
    return True


def is_favorited(poem_id: str, user_id: str) -> bool:
    return poem_id in store.favorites.get(user_id, {})


def get_favorites(user_id: str) -> list[dict]:
    results = []
    for poem_id, favorited_at in store.favorites.get(user_id, {}).items():
        poem = store.poems.get(poem_id)
        if poem is None:
            continue
        first = poem.line_at(0)
        results.append({
            "poem_id": poem_id,
            "preview": first.text if first else "...",
            "favorited_at": favorited_at,
        })
    return results
