"""HTTP routes for AI recipe generation and saving.

- POST /api/recipes/generate: ingredients -> signed recipes (`[{recipe, token}, ...]`)
- POST /api/recipes/save: signed recipe + `x-recipe-token` -> stored recipe

Authentication happens upstream; the authenticated user id arrives in `x-user-id`.
Collaborators are FastAPI dependencies so tests can override them.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from recipe_service.generation.pipeline import RecipeGenerator
from recipe_service.models.models import ApiResponse, FinalRecipe, GenerateRecipesRequest
from recipe_service.storage.recipes import InMemoryRecipeStore, RecipeStore, save_generated_recipe


router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@lru_cache(maxsize=1)
def get_recipe_generator() -> RecipeGenerator:
    """Dependency: shared Gemini-backed generation pipeline."""
    return RecipeGenerator()


@lru_cache(maxsize=1)
def get_recipe_store() -> RecipeStore:
    """Dependency: process-wide recipe store."""
    return InMemoryRecipeStore()


def send_response(status_code: int, message: str, data=None, success: Optional[bool] = None) -> JSONResponse:
    """Wrap a payload in the ApiResponse envelope."""
    if success is None:
        success = status_code < 400
    body = ApiResponse(success=success, message=message, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post("/generate")
async def generate_recipes(
    request: GenerateRecipesRequest,
    generator: RecipeGenerator = Depends(get_recipe_generator),
) -> JSONResponse:
    """Generate recipes from the user's ingredients, each with a photo and a signed token."""
    result = await generator.generate_recipes(request.ingredients, request.meal_type, request.diet_type)

    if result.status == "ai_error":
        return send_response(status.HTTP_400_BAD_REQUEST, result.message or "Ingredients rejected")

    signed = await generator.finalize_recipes(result.data)
    return send_response(
        status.HTTP_200_OK,
        "Recipes generated successfully",
        [item.model_dump(mode="json", by_alias=True) for item in signed],
    )


@router.post("/save")
async def save_recipe(
    recipe: FinalRecipe,
    x_recipe_token: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
    store: RecipeStore = Depends(get_recipe_store),
) -> JSONResponse:
    """Save a previously generated recipe for the current user (once per recipe)."""
    if not x_user_id:
        return send_response(status.HTTP_401_UNAUTHORIZED, "User not found")

    saved = await save_generated_recipe(store, x_user_id, recipe, x_recipe_token)
    return send_response(
        status.HTTP_201_CREATED,
        "Recipe saved successfully",
        saved.model_dump(mode="json", by_alias=True),
    )
