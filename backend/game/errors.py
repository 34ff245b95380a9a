"""
Game rule violations.

Each exception carries the HTTP status the API layer should answer with;
routes turn them into HTTPException without inspecting the message.
"""


class GameError(Exception):
    status_code = 400


class NotFound(GameError):
    status_code = 404


class Forbidden(GameError):
    status_code = 403


class InvalidState(GameError):
    status_code = 409


class WordCountMismatch(GameError):
    status_code = 422

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} words, got {actual}")
        self.expected = expected
        self.actual = actual


class InvalidGameState(GameError):
    """Stored game data is inconsistent (a bug, not a user mistake)."""
    status_code = 500
