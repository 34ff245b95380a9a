"""
Gemini line generator for AI players.

Produces one poem line in a persona's voice with an exact word count.

Edge cases handled:
  - Missing API key (deterministic fallback line, no network call)
  - Rate limiting (429) across the model chain (via generate_with_fallback)
  - Timeouts, network errors, safety blocks and empty responses (retry)
  - Wrong word count: too many words are truncated by the word-count guard,
    too few trigger a retry
  - Attempts exhausted (deterministic fallback line)
"""

import asyncio
import logging
import os
from typing import Optional

from google import genai
from google.genai import types
from pydantic import BaseModel

from game.fallbacks import get_fallback_line
from game.personas import AiPersona
from game.word_count import count_words
from game.word_count_guard import attempt_fix
from gemini.config import (
    LINE_MAX_ATTEMPTS,
    LINE_MAX_OUTPUT_TOKENS,
    LINE_TEMPERATURE,
    LINE_TIMEOUT_SECONDS,
)
from gemini.fallback import generate_with_fallback
from gemini.prompt import build_prompt

logger = logging.getLogger(__name__)


class GeneratedLine(BaseModel):
    text: str
    fallback_used: bool


# ─── Lazy client initialization ───────────────────────────────────────

_client: Optional[genai.Client] = None
_configured_key: Optional[str] = None


def _get_client() -> Optional[genai.Client]:
    """
    Lazily build and cache the client.
    Rebuilds only if the API key changes (e.g. .env hot-reload).
    Returns None if GEMINI_API_KEY is not set.
    """
    global _client, _configured_key
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        return None
    if api_key != _configured_key:
        _client = genai.Client(api_key=api_key)
        _configured_key = api_key
    return _client


# ─── Response extractor ───────────────────────────────────────────────

def _extract_text(response) -> str:
    """
    Pull text out of a response; "" for blocked, empty or malformed ones.
    """
    if response is None:
        return ""

    try:
        text = response.text
        if text and text.strip():
            return text.strip()
    except (ValueError, AttributeError):
        pass

    try:
        for candidate in response.candidates:
            if candidate.content and candidate.content.parts:
                for part in candidate.content.parts:
                    if getattr(part, "text", None) and part.text.strip():
                        return part.text.strip()
    except (AttributeError, IndexError, TypeError):
        pass

    return ""


# ─── Public async entry point ──────────────────────────────────────────

def _fallback(target_word_count: int) -> GeneratedLine:
    return GeneratedLine(text=get_fallback_line(target_word_count), fallback_used=True)


async def generate_line(
    persona: AiPersona,
    previous_line_text: Optional[str],
    target_word_count: int,
) -> GeneratedLine:
    """
    Generate a line of exactly `target_word_count` words.

    Never raises: every failure path ends in the deterministic fallback line,
    so the AI player always has something valid to submit.
    """
    client = _get_client()
    if client is None:
        logger.error("GEMINI_API_KEY not configured, using fallback line")
        return _fallback(target_word_count)

    prompt = build_prompt(persona, previous_line_text, target_word_count)
    contents = [{"role": "user", "parts": [{"text": prompt}]}]
    config = types.GenerateContentConfig(
        temperature=LINE_TEMPERATURE,
        max_output_tokens=LINE_MAX_OUTPUT_TOKENS,
    )

    for attempt in range(1, LINE_MAX_ATTEMPTS + 1):
        try:
            model, response = await asyncio.wait_for(
                generate_with_fallback(client, contents=contents, config=config),
                timeout=LINE_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.warning("Gemini timeout on attempt %d (%.0fs)", attempt, LINE_TIMEOUT_SECONDS)
            continue
        except Exception:
            logger.exception("Gemini API call failed on attempt %d", attempt)
            continue

        if model is None:
            # Whole chain rate-limited; retrying right away won't help
            break

        raw = _extract_text(response)
        fixed = attempt_fix(raw, target_word_count)
        if fixed is not None:
            if count_words(raw) != target_word_count:
                logger.info(
                    "Truncated %s line from %d to %d words", model, count_words(raw), target_word_count
                )
            return GeneratedLine(text=fixed, fallback_used=False)

        logger.info(
            "AI line attempt %d: got %d words, expected %d. Retrying...",
            attempt, count_words(raw), target_word_count,
        )

    logger.warning("AI line generation failed for persona %s, using fallback", persona.id)
    return _fallback(target_word_count)
