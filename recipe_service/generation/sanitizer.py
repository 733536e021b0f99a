"""Ingredient sanitization before anything reaches a model prompt.

Ingredients are untrusted user text. Each one is cut at the first "ignore ..."
instruction override, stripped of every character outside the allowed set, and
trimmed. Ingredients left empty are dropped.
"""

import re
from typing import Iterable

from recipe_service.utils.logger import logger


# Everything from an "ignore" instruction to the end of the string
INSTRUCTION_OVERRIDE_PATTERN = re.compile(r"ignore.*$", re.IGNORECASE | re.DOTALL)

# Letters (including Latin-1 accented letters, not × or ÷), digits, comma, space, hyphen, apostrophe
DISALLOWED_CHARACTERS = re.compile(r"[^a-zA-Z0-9À-ÖØ-öø-ÿ, \-']")


def sanitize_ingredient(raw: str) -> str:
    """Sanitize one ingredient. Returns an empty string when nothing usable remains."""
    text = INSTRUCTION_OVERRIDE_PATTERN.sub("", raw)
    text = DISALLOWED_CHARACTERS.sub("", text)
    return text.strip()


def sanitize_ingredients(raw_ingredients: Iterable[str]) -> list[str]:
    """Sanitize a list of raw ingredients, preserving order and duplicates.

    Args:
        raw_ingredients: Untrusted ingredient strings. Non-string items are ignored.

    Returns:
        Non-empty sanitized ingredients. May be shorter than the input; an empty
        result means the request has no valid ingredients.
    """
    sanitized = []
    dropped = 0
    for raw in raw_ingredients:
        if not isinstance(raw, str):
            dropped += 1
            continue
        cleaned = sanitize_ingredient(raw)
        if cleaned:
            sanitized.append(cleaned)
        else:
            dropped += 1

    if dropped:
        logger.debug(f"Sanitizer dropped {dropped} ingredient(s), kept {len(sanitized)}")

    return sanitized
