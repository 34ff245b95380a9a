"""
Deterministic avatar colors.

Colors derive from a player's stable identifier (account id or guest id).
Inside a room every player gets a distinct color as long as the room has no
more players than the palette has colors; past that, colors repeat.

The hash mirrors the browser implementation (31-multiplier string hash over
UTF-16 code units, signed 32-bit wraparound) so that server-rendered and
client-rendered avatars agree.
"""

from typing import Iterable, Optional

# Warm, ink-on-paper friendly colors with clear contrast between neighbours
AVATAR_PALETTE = (
    "#e85d2b",  # Persimmon (primary)
    "#c2410c",  # Burnt sienna
    "#0d9488",  # Teal
    "#7c3aed",  # Violet
    "#db2777",  # Pink
    "#ea580c",  # Orange
    "#0891b2",  # Cyan
    "#4f46e5",  # Indigo
    "#65a30d",  # Lime
    "#b45309",  # Amber
    "#1e40af",  # Blue
    "#059669",  # Emerald
)

UNKNOWN_STABLE_ID = "unknown"


def _utf16_code_units(text: str) -> list[int]:
    raw = text.encode("utf-16-le")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def hash_to_index(stable_id: str) -> int:
    """Map an identifier to a palette index."""
    h = 0
    for unit in _utf16_code_units(stable_id):
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % len(AVATAR_PALETTE)


def get_user_color(stable_id: str) -> str:
    """Color for a single user with no room context (no collision handling)."""
    return AVATAR_PALETTE[hash_to_index(stable_id)]


def get_unique_color(stable_id: str, all_stable_ids: Iterable[str]) -> str:
    """
    Color for `stable_id` that no other player in the room shares.

    Identifiers are walked in sorted order so every caller computes the same
    assignment regardless of how the room's player list is ordered. A
    collision probes forward (wrapping) to the next free slot. Probing stops
    after one full pass over the palette; when every color is taken the
    player keeps their hashed color.
    """
    palette_size = len(AVATAR_PALETTE)
    taken: set[int] = set()

    for current in sorted(set(all_stable_ids)):
        base = hash_to_index(current)
        idx = base
        for _ in range(palette_size):
            if idx not in taken:
                break
            idx = (idx + 1) % palette_size
        else:
            idx = base

        if current == stable_id:
            return AVATAR_PALETTE[idx]

        taken.add(idx)

    # Not a member of the room
    return get_user_color(stable_id)


def get_stable_id(account_id: Optional[str], guest_id: Optional[str]) -> str:
    """Prefer the permanent account id over the session-scoped guest id."""
    return account_id or guest_id or UNKNOWN_STABLE_ID
