"""
Prompt construction for AI poem lines.

The persona prompt sets the voice; the rest pins down the output format.
Word-count compliance is still checked afterwards by the word-count guard.
"""

from typing import Optional

from game.personas import AiPersona


def _context_part(previous_line_text: Optional[str]) -> str:
    if previous_line_text:
        return (
            "The previous line in this collaborative poem was:\n"
            f"\"{previous_line_text}\"\n"
            "\n"
            "Continue the poem with your line. You may respond to, contrast with, "
            "or build upon the previous line."
        )
    return (
        "This is the FIRST line of a new collaborative poem. "
        "Begin with something evocative that others can build upon."
    )


def build_prompt(persona: AiPersona, previous_line_text: Optional[str], target_word_count: int) -> str:
    plural = "" if target_word_count == 1 else "s"
    return f"""{persona.prompt}

You are contributing one line to a collaborative poem. Other poets (human and AI) are writing the other lines.

STRICT REQUIREMENTS:
- Output EXACTLY {target_word_count} word{plural}.
- Output ONLY the line itself: no quotes, no explanation, no punctuation that isn't part of the line.
- Do not use line breaks.

{_context_part(previous_line_text)}

Your {target_word_count}-word line:"""
