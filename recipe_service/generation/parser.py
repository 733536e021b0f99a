"""Parsing and validation of raw model output into recipes.

Parsing runs in two stages with distinct failure semantics:

1. Loose extraction (extract_json_array): models wrap JSON in prose or markdown
   despite instructions, so the first-`[`-to-last-`]` substring is taken and parsed.
   Failure here means the whole response is unusable (invalid_format).
2. Strict validation (validate_recipes): each array element must match the
   GeneratedRecipe shape exactly. Failing elements are dropped; the response only
   fails if nothing survives.

A content-policy rejection (`{"error": "..."}`) is detected before both stages.
"""

import json
import re
from typing import Any, Optional

from pydantic import ValidationError

from recipe_service.models.models import GeneratedRecipe, ParsedRecipes
from recipe_service.utils.logger import logger
from recipe_service.utils.safe_execute import safe_execute_sync


# Greedy: from the first "[" to the last "]", across newlines
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

ERROR_MARKER = '"error"'


def detect_rejection(raw: str) -> Optional[str]:
    """Detect a content-policy rejection object.

    Returns:
        The rejection message if `raw` is a JSON object carrying an "error" key,
        None otherwise (including a malformed object, which then fails extraction).
    """
    trimmed = raw.strip()
    if not (trimmed.startswith("{") and ERROR_MARKER in trimmed):
        return None

    parsed = safe_execute_sync(
        lambda: json.loads(trimmed),
        "Rejection object parse",
        log_level="debug",
        default_return=None,
    )
    if isinstance(parsed, dict) and "error" in parsed:
        return str(parsed["error"])
    return None


def extract_json_array(raw: str) -> Optional[list]:
    """Stage 1: extract and parse the first JSON-array-looking substring.

    Returns:
        The parsed list, or None if no array substring exists, it is not valid
        JSON, or it does not decode to a list.
    """
    match = JSON_ARRAY_PATTERN.search(raw)
    if not match:
        return None

    parsed = safe_execute_sync(
        lambda: json.loads(match.group()),
        "JSON array parse",
        log_level="debug",
        default_return=None,
    )
    if not isinstance(parsed, list):
        return None
    return parsed


def validate_recipe(candidate: Any) -> Optional[GeneratedRecipe]:
    """Validate one candidate element; None if it does not match the recipe shape."""
    if not isinstance(candidate, dict):
        return None
    try:
        return GeneratedRecipe.model_validate(candidate)
    except ValidationError as e:
        logger.debug(f"Dropping malformed recipe ({e.error_count()} error(s)): {candidate.get('title')!r}")
        return None


def validate_recipes(candidates: list) -> list[GeneratedRecipe]:
    """Stage 2: keep only the elements that match the recipe shape, in order."""
    validated = [validate_recipe(candidate) for candidate in candidates]
    return [recipe for recipe in validated if recipe is not None]


def parse_recipe_response(raw: str) -> ParsedRecipes:
    """Turn raw model text into a ParsedRecipes envelope.

    Args:
        raw: Raw text returned by the chat-completion call.

    Returns:
        ParsedRecipes with status:
        - ai_error: the model returned a rejection object (message preserved verbatim)
        - invalid_format: no parseable array, or no element survived validation
          (raw text preserved verbatim for diagnostics)
        - ok: one or more validated recipes (possibly fewer than requested)
    """
    rejection = detect_rejection(raw)
    if rejection is not None:
        return ParsedRecipes.ai_error(rejection)

    candidates = extract_json_array(raw)
    if candidates is None:
        return ParsedRecipes.invalid_format(raw)

    recipes = validate_recipes(candidates)
    if not recipes:
        logger.debug(f"No valid recipes in array of {len(candidates)} element(s)")
        return ParsedRecipes.invalid_format(raw)

    if len(recipes) < len(candidates):
        logger.debug(f"Kept {len(recipes)}/{len(candidates)} recipes after validation")

    return ParsedRecipes.ok(recipes)
