"""End-to-end AI recipe generation.

RecipeGenerator runs the full flow for one request:

1. Sanitize raw ingredients (InvalidIngredientsError if nothing survives)
2. Optionally translate/normalize them (InvalidIngredientsError if that yields [])
3. Build the generation prompt
4. Drive it through the model fallback loop -> ParsedRecipes ("ok" or "ai_error")

finalize_recipes() then attaches a photo to each recipe and signs it, producing
the SignedRecipe list returned to the client.
"""

import asyncio
from enum import Enum
from typing import Iterable, Optional, Union

from recipe_service.generation.completion import ChatCompletionClient, GeminiCompletionClient
from recipe_service.generation.driver import GenerationPolicy, IngredientTranslationDriver, RecipeGenerationDriver
from recipe_service.generation.sanitizer import sanitize_ingredients
from recipe_service.images.pexels import PexelsImageResolver
from recipe_service.models.models import FinalRecipe, GeneratedRecipe, ParsedRecipes, SignedRecipe
from recipe_service.prompts.prompts import build_recipe_prompt
from recipe_service.security.signing import sign_recipe
from recipe_service.utils.errors import InvalidIngredientsError
from recipe_service.utils.logger import logger


class RecipeGenerator:
    """Request-scoped generation pipeline with injectable collaborators."""

    def __init__(
        self,
        client: Optional[ChatCompletionClient] = None,
        policy: Optional[GenerationPolicy] = None,
        image_resolver: Optional[PexelsImageResolver] = None,
        signing_secret: Optional[str] = None,
    ) -> None:
        self.client = client or GeminiCompletionClient()
        self.policy = policy or GenerationPolicy.from_config()
        self.image_resolver = image_resolver or PexelsImageResolver()
        self.signing_secret = signing_secret

    async def prepare_ingredients(self, raw_ingredients: Iterable[str]) -> list[str]:
        """Sanitize (and optionally translate) ingredients.

        Raises:
            InvalidIngredientsError: If no valid ingredient remains.
        """
        sanitized = sanitize_ingredients(raw_ingredients)
        if not sanitized:
            raise InvalidIngredientsError()

        if not self.policy.translate_ingredients:
            return sanitized

        translated = await IngredientTranslationDriver(self.client, self.policy.models).run(sanitized)
        if not translated:
            logger.warning("Ingredient translation produced no usable ingredients")
            raise InvalidIngredientsError()
        return translated

    async def generate_recipes(
        self,
        raw_ingredients: Iterable[str],
        meal_type: Optional[Union[str, Enum]] = None,
        diet_type: Optional[Union[str, Enum]] = None,
    ) -> ParsedRecipes:
        """Generate recipes from raw user ingredients.

        Returns:
            ParsedRecipes with status "ok" (policy.recipe_count recipes) or "ai_error".

        Raises:
            InvalidIngredientsError: If no valid ingredient remains.
            GenerationFailedError: If every model and attempt failed.
        """
        ingredients = await self.prepare_ingredients(raw_ingredients)
        logger.info(f"Generating {self.policy.recipe_count} recipes from {len(ingredients)} ingredient(s)")

        prompt = build_recipe_prompt(
            ingredients,
            meal_type=meal_type,
            diet_type=diet_type,
            recipe_count=self.policy.recipe_count,
            pantry_staples=self.policy.pantry_staples,
        )
        return await RecipeGenerationDriver(self.client, self.policy).run(prompt)

    async def finalize_recipe(self, recipe: GeneratedRecipe) -> SignedRecipe:
        """Attach a photo URL to one recipe and sign the result."""
        image_url = await self.image_resolver.fetch_image_for_recipe(recipe.image_search)
        final = FinalRecipe(**recipe.model_dump(), image_url=image_url)
        return SignedRecipe(recipe=final, token=sign_recipe(final, secret=self.signing_secret))

    async def finalize_recipes(self, recipes: list[GeneratedRecipe]) -> list[SignedRecipe]:
        """Resolve photos for all recipes in parallel and sign each one, preserving order."""
        return list(await asyncio.gather(*(self.finalize_recipe(recipe) for recipe in recipes)))


async def generate_recipes(
    raw_ingredients: Iterable[str],
    meal_type: Optional[Union[str, Enum]] = None,
    diet_type: Optional[Union[str, Enum]] = None,
    generator: Optional[RecipeGenerator] = None,
) -> ParsedRecipes:
    """Generate recipes with a default (Gemini-backed) pipeline unless one is given."""
    generator = generator or RecipeGenerator()
    return await generator.generate_recipes(raw_ingredients, meal_type, diet_type)
