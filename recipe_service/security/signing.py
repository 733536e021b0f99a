"""Recipe fingerprints shared between the generate and save steps.

A fingerprint is the hex HMAC-SHA256 of the recipe's canonical JSON under a
server-held secret. The client receives it with each generated recipe and sends
it back as `x-recipe-token` when saving: a mismatch means the recipe was altered,
and a repeated fingerprint for the same user means a duplicate save.
"""

import hashlib
import hmac
import json
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from recipe_service.utils.config import config
from recipe_service.utils.errors import InvalidRecipeTokenError


RecipeLike = Union[BaseModel, Mapping[str, Any]]


def canonical_json(recipe: RecipeLike) -> str:
    """Serialize a recipe deterministically: wire field names, sorted keys, no whitespace."""
    if isinstance(recipe, BaseModel):
        data = recipe.model_dump(mode="json", by_alias=True)
    else:
        data = dict(recipe)
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def sign_recipe(recipe: RecipeLike, secret: Optional[str] = None) -> str:
    """Compute the recipe fingerprint.

    Args:
        recipe: Finalized recipe (model or plain mapping).
        secret: HMAC key. Defaults to config.RECIPE_SIGNING_SECRET.

    Returns:
        64-character lowercase hex digest; identical content gives an identical digest.
    """
    key = (secret if secret is not None else config.RECIPE_SIGNING_SECRET).encode("utf-8")
    payload = canonical_json(recipe).encode("utf-8")
    return hmac.new(key, payload, hashlib.sha256).hexdigest()


def verify_recipe_token(recipe: RecipeLike, token: Optional[str], secret: Optional[str] = None) -> str:
    """Check a client-supplied token against the recipe.

    Returns:
        The expected fingerprint (usable as idempotency key) when the token matches.

    Raises:
        InvalidRecipeTokenError: If the token is missing or does not match.
    """
    if not token:
        raise InvalidRecipeTokenError("Missing token", missing=True)

    expected = sign_recipe(recipe, secret=secret)
    if not hmac.compare_digest(token.strip().lower().encode("utf-8"), expected.encode("utf-8")):
        raise InvalidRecipeTokenError("Invalid token")
    return expected
