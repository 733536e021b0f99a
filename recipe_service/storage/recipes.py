"""Storage for user-saved generated recipes.

The hosted database is the real store in production; InMemoryRecipeStore keeps
the same contract in-process: one row per (user, fingerprint), so a second save
of the same generated content by the same user is rejected.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional, Protocol

from recipe_service.models.models import FinalRecipe, SavedRecipe
from recipe_service.security.signing import verify_recipe_token
from recipe_service.utils.errors import DuplicateRecipeError
from recipe_service.utils.logger import logger


class RecipeStore(Protocol):
    async def find_by_hash(self, user_id: str, recipe_hash: str) -> Optional[SavedRecipe]:
        ...

    async def insert(self, user_id: str, recipe: FinalRecipe, recipe_hash: str) -> SavedRecipe:
        ...


class InMemoryRecipeStore:
    """Dict-backed RecipeStore keyed by (user_id, hash)."""

    def __init__(self) -> None:
        self._rows: dict[tuple[str, str], SavedRecipe] = {}

    async def find_by_hash(self, user_id: str, recipe_hash: str) -> Optional[SavedRecipe]:
        return self._rows.get((user_id, recipe_hash))

    async def insert(self, user_id: str, recipe: FinalRecipe, recipe_hash: str) -> SavedRecipe:
        saved = SavedRecipe(
            **recipe.model_dump(),
            id=str(uuid.uuid4()),
            user_id=user_id,
            hash=recipe_hash,
            created_at=datetime.now(timezone.utc),
        )
        self._rows[(user_id, recipe_hash)] = saved
        return saved

    def __len__(self) -> int:
        return len(self._rows)


async def save_generated_recipe(
    store: RecipeStore,
    user_id: str,
    recipe: FinalRecipe,
    token: Optional[str],
    secret: Optional[str] = None,
) -> SavedRecipe:
    """Verify a generated recipe's token and store it once per user.

    Raises:
        InvalidRecipeTokenError: If the token is missing or does not match the recipe.
        DuplicateRecipeError: If the user already saved this exact recipe.
    """
    recipe_hash = verify_recipe_token(recipe, token, secret=secret)

    if await store.find_by_hash(user_id, recipe_hash) is not None:
        raise DuplicateRecipeError()

    saved = await store.insert(user_id, recipe, recipe_hash)
    logger.info(f"Saved generated recipe {saved.id} ({recipe.title!r})", extra={"user_id": user_id})
    return saved
