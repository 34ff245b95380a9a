from fastapi import HTTPException

from game.errors import GameError


def http_error(exc: GameError) -> HTTPException:
    """Map a game rule violation onto the HTTP status it declares."""
    return HTTPException(status_code=exc.status_code, detail=str(exc))
