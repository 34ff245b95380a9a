"""Room codes: short uppercase codes players type or scan to join a room."""

import secrets
import string

ROOM_CODE_ALPHABET = string.ascii_uppercase
ROOM_CODE_LENGTH = 4


def generate_room_code() -> str:
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


def normalize_room_code(code: str) -> str:
    """Codes are case-insensitive and often pasted with spaces ("AB CD")."""
    return "".join(code.split()).upper()


def format_room_code(code: str) -> str:
    """Display form with spaced pairs: "ABCDEF" -> "AB CD EF"."""
    if not code:
        return code
    return " ".join(code[i:i + 2] for i in range(0, len(code), 2))
