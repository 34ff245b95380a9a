"""
AI turn runner.

When a round opens in a room with an AI player, run_ai_turn waits a short
human-looking delay, generates the AI's line and commits it. Every step
re-reads the game state, so a turn that was scheduled for a round that has
since moved on (or a room that was reset) does nothing.
"""

import asyncio
import logging
import os
import random

from game import turns
from game.personas import get_persona
from gemini.client import generate_line

logger = logging.getLogger(__name__)


def _delay_bounds_ms() -> tuple[int, int]:
    low = int(os.environ.get("LINEJAM_AI_DELAY_MIN_MS", "2000"))
    high = int(os.environ.get("LINEJAM_AI_DELAY_MAX_MS", "4000"))
    return low, max(low, high)


async def run_ai_turn(code: str, round_index: int) -> None:
    """Write the AI player's line for `round_index`, then chain to the next round."""
    low, high = _delay_bounds_ms()
    if high > 0:
        await asyncio.sleep(random.randint(low, high) / 1000)

    pending = turns.pending_ai_turn(code)
    if pending is None or pending["round"] != round_index:
        return

    persona = get_persona(pending["persona_id"])
    result = await generate_line(persona, pending["previous_line_text"], pending["target_word_count"])

    line = turns.commit_ai_line(pending["poem_id"], round_index, result.text, pending["ai_user_id"])
    if line is None:
        return

    if result.fallback_used:
        logger.info("AI fallback used for room %s, round %d", code, round_index)

    # If the AI's line closed the round, its next turn is already due
    upcoming = turns.pending_ai_turn(code)
    if upcoming is not None and upcoming["round"] != round_index:
        await run_ai_turn(code, upcoming["round"])
