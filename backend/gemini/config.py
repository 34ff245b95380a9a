"""
Gemini settings for AI poem lines.

Lines are a handful of words, so a fast flash model leads the chain and the
lite model is the last resort when quotas run out. Set GEMINI_MODEL in .env
to put a different model first.
"""

import os

# Priority order; duplicates dropped when GEMINI_MODEL names a chain model
_primary = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_MODEL_CHAIN = list(dict.fromkeys([
    _primary,
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
]))

LINE_TEMPERATURE = 0.9          # creative but not unhinged
LINE_MAX_OUTPUT_TOKENS = 100    # a line is at most five words
LINE_MAX_ATTEMPTS = 3           # regenerate when the word count can't be repaired
LINE_TIMEOUT_SECONDS = 10.0
