"""Unit tests for saving generated recipes."""

import pytest

from conftest import make_recipe
from recipe_service.models.models import FinalRecipe
from recipe_service.security.signing import sign_recipe
from recipe_service.storage.recipes import InMemoryRecipeStore, save_generated_recipe
from recipe_service.utils.errors import DuplicateRecipeError, InvalidRecipeTokenError


SECRET = "storage-secret"


@pytest.fixture
def store():
    return InMemoryRecipeStore()


@pytest.fixture
def final_recipe():
    return FinalRecipe.model_validate({**make_recipe(), "image_url": "https://images.example/garlic.jpg"})


class TestSaveGeneratedRecipe:
    """Test token verification and once-per-user saving."""

    @pytest.mark.asyncio
    async def test_saves_with_fingerprint(self, store, final_recipe):
        token = sign_recipe(final_recipe, secret=SECRET)

        saved = await save_generated_recipe(store, "user-1", final_recipe, token, secret=SECRET)

        assert saved.user_id == "user-1"
        assert saved.hash == token
        assert saved.title == final_recipe.title
        assert saved.image_url == final_recipe.image_url
        assert saved.id
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_duplicate_for_same_user_rejected(self, store, final_recipe):
        token = sign_recipe(final_recipe, secret=SECRET)
        await save_generated_recipe(store, "user-1", final_recipe, token, secret=SECRET)

        with pytest.raises(DuplicateRecipeError, match="Recipe already exists"):
            await save_generated_recipe(store, "user-1", final_recipe, token, secret=SECRET)

        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_same_recipe_for_different_users(self, store, final_recipe):
        token = sign_recipe(final_recipe, secret=SECRET)

        await save_generated_recipe(store, "user-1", final_recipe, token, secret=SECRET)
        await save_generated_recipe(store, "user-2", final_recipe, token, secret=SECRET)

        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_missing_token(self, store, final_recipe):
        with pytest.raises(InvalidRecipeTokenError) as exc_info:
            await save_generated_recipe(store, "user-1", final_recipe, None, secret=SECRET)

        assert exc_info.value.missing is True
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_modified_recipe_rejected(self, store, final_recipe):
        token = sign_recipe(final_recipe, secret=SECRET)
        edited = final_recipe.model_copy(update={"protein": 99.0})

        with pytest.raises(InvalidRecipeTokenError, match="Invalid token"):
            await save_generated_recipe(store, "user-1", edited, token, secret=SECRET)

        assert len(store) == 0


class TestInMemoryRecipeStore:
    @pytest.mark.asyncio
    async def test_find_by_hash(self, store, final_recipe):
        assert await store.find_by_hash("user-1", "abc") is None

        saved = await store.insert("user-1", final_recipe, "abc")

        assert await store.find_by_hash("user-1", "abc") == saved
        assert await store.find_by_hash("user-2", "abc") is None
