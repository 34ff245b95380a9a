"""
Model-chain fallback for Gemini calls.

Free-tier quotas run out per model, so a 429 on one model says nothing
about the next. Quota errors move on down the chain; anything else is the
caller's problem.
"""

import logging
from typing import Any, Optional, Sequence

from gemini.config import GEMINI_MODEL_CHAIN

logger = logging.getLogger(__name__)


def _is_quota_error(exc: Exception) -> bool:
    err_str = str(exc)
    return "429" in err_str or "RESOURCE_EXHAUSTED" in err_str


async def generate_with_fallback(
    client,
    *,
    contents,
    config,
    models: Optional[Sequence[str]] = None,
) -> tuple[Optional[str], Optional[Any]]:
    """
    Ask each model in turn until one answers.

    Returns (model, response) for the first model that was not rate-limited,
    or (None, None) when the whole chain is exhausted.
    """
    chain = list(models) if models is not None else GEMINI_MODEL_CHAIN
    skipped = []

    for model in chain:
        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            if not _is_quota_error(e):
                raise
            skipped.append(model)
            logger.warning("Model %r quota exhausted, trying next in chain", model)
            continue

        if skipped:
            logger.info("Line generated by %s after skipping %s", model, ", ".join(skipped))
        return model, response

    logger.error("All models in fallback chain exhausted: %s", chain)
    return None, None
