"""Multi-model fallback drivers for recipe generation and ingredient translation.

RecipeGenerationDriver walks an ordered list of models (earlier = preferred) and,
per model, up to `max_retries_per_model` attempts. Each attempt is classified into
an AttemptOutcome and the outcome alone decides the next transition:

- SUCCESS: parser returned at least `recipe_count` valid recipes -> stop, return them
- REJECTED: model returned a content-policy rejection (ai_error) -> stop, return it;
  a rejection is not a transient fault, so no other attempt or model is tried
- RETRY: transport/API failure, invalid_format, or too few valid recipes ->
  sleep a fixed delay, then next attempt (or next model once attempts run out)

When every model and attempt ends in RETRY, GenerationFailedError is raised.
Attempts are strictly sequential: no model racing, each call is awaited before
the next one starts.

IngredientTranslationDriver shares the model iteration but tries each model once
and returns the first usable ingredient array, or [] when all models fail.
"""

import asyncio
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from recipe_service.generation.completion import ChatCompletionClient
from recipe_service.generation.parser import extract_json_array, parse_recipe_response
from recipe_service.models.models import ParsedRecipes
from recipe_service.prompts.prompts import build_translation_prompt
from recipe_service.utils.config import Config, config
from recipe_service.utils.errors import GenerationFailedError
from recipe_service.utils.logger import logger


class AttemptOutcome(str, Enum):
    """Classification of a single model attempt."""

    SUCCESS = "success"
    REJECTED = "rejected"
    RETRY = "retry"


class GenerationPolicy(BaseModel):
    """Retry/fallback policy for the drivers. Built from Config, overridable in tests."""

    models: list[str] = Field(min_length=1)
    max_retries_per_model: int = Field(5, ge=1)
    retry_delay_seconds: float = Field(1.0, ge=0)
    recipe_count: int = Field(4, ge=1)
    pantry_staples: list[str] = Field(default_factory=list)
    translate_ingredients: bool = True

    @classmethod
    def from_config(cls, settings: Config = config) -> "GenerationPolicy":
        return cls(
            models=list(settings.AI_MODELS),
            max_retries_per_model=settings.MAX_RETRIES_PER_MODEL,
            retry_delay_seconds=settings.RETRY_DELAY_SECONDS,
            recipe_count=settings.RECIPES_PER_REQUEST,
            pantry_staples=list(settings.PANTRY_STAPLES),
            translate_ingredients=settings.TRANSLATE_INGREDIENTS,
        )


class AttemptRecord(BaseModel):
    """One step of the driver's walk, kept for logging and inspection."""

    model: str
    attempt: int
    outcome: AttemptOutcome
    detail: str = ""


def classify_attempt(parsed: ParsedRecipes, recipe_count: int) -> AttemptOutcome:
    """Map a parsed response onto the driver's transition."""
    if parsed.status == "ai_error":
        return AttemptOutcome.REJECTED
    if parsed.status == "ok" and len(parsed.data) >= recipe_count:
        return AttemptOutcome.SUCCESS
    return AttemptOutcome.RETRY


class RecipeGenerationDriver:
    """Sequential retry-then-fallback loop over the configured models."""

    def __init__(self, client: ChatCompletionClient, policy: Optional[GenerationPolicy] = None) -> None:
        self.client = client
        self.policy = policy or GenerationPolicy.from_config()
        self.history: list[AttemptRecord] = []

    async def _attempt(self, model: str, prompt: str, attempt: int) -> tuple[AttemptOutcome, Optional[ParsedRecipes]]:
        """Run one call and classify it. Call failures become RETRY."""
        try:
            raw = await self.client.complete(model, prompt)
        except Exception as e:
            self.history.append(AttemptRecord(model=model, attempt=attempt, outcome=AttemptOutcome.RETRY, detail=str(e)))
            logger.warning(
                f"Model {model} - attempt {attempt}/{self.policy.max_retries_per_model} failed: {e}",
                extra={"model": model, "attempt": attempt},
            )
            return AttemptOutcome.RETRY, None

        parsed = parse_recipe_response(raw)
        outcome = classify_attempt(parsed, self.policy.recipe_count)

        detail = parsed.status
        if parsed.status == "ok":
            detail = f"ok ({len(parsed.data)}/{self.policy.recipe_count} recipes)"
        self.history.append(AttemptRecord(model=model, attempt=attempt, outcome=outcome, detail=detail))

        if outcome is AttemptOutcome.RETRY:
            logger.warning(
                f"Model {model} - attempt {attempt}/{self.policy.max_retries_per_model} failed. Status: {detail}",
                extra={"model": model, "attempt": attempt},
            )
            if parsed.status == "invalid_format":
                logger.debug(f"Unparseable response from {model}: {parsed.raw!r}")

        return outcome, parsed

    async def run(self, prompt: str) -> ParsedRecipes:
        """Drive the prompt through the models until success, rejection or exhaustion.

        Returns:
            ParsedRecipes with status "ok" (exactly recipe_count recipes) or "ai_error".

        Raises:
            GenerationFailedError: If all models and attempts failed.
        """
        self.history = []
        models = self.policy.models
        retries = self.policy.max_retries_per_model

        for model_idx, model in enumerate(models):
            for attempt in range(1, retries + 1):
                outcome, parsed = await self._attempt(model, prompt, attempt)

                if outcome is AttemptOutcome.SUCCESS:
                    logger.info(f"Model {model} generated {len(parsed.data)} recipes on attempt {attempt}")
                    return ParsedRecipes.ok(parsed.data[: self.policy.recipe_count])

                if outcome is AttemptOutcome.REJECTED:
                    logger.info(f"Model {model} rejected the ingredients: {parsed.message}")
                    return parsed

                is_last_attempt = model_idx == len(models) - 1 and attempt == retries
                if not is_last_attempt:
                    await asyncio.sleep(self.policy.retry_delay_seconds)

            logger.warning(f"Giving up on model {model} after {retries} attempts")

        logger.error(f"All {len(models)} models failed to generate recipes ({len(self.history)} attempts)")
        raise GenerationFailedError()


def clean_ingredient_names(items: Sequence) -> list[str]:
    """Lowercase and trim translated names, dropping non-strings, blanks and duplicates."""
    cleaned = [item.strip().lower() for item in items if isinstance(item, str)]
    return list(dict.fromkeys(item for item in cleaned if item))


class IngredientTranslationDriver:
    """Translate/normalize ingredients, one attempt per model."""

    def __init__(self, client: ChatCompletionClient, models: Optional[Sequence[str]] = None) -> None:
        self.client = client
        self.models = list(models) if models is not None else list(config.AI_MODELS)

    async def run(self, ingredients: Sequence[str]) -> list[str]:
        """Return the first usable English ingredient list, or [] if every model fails.

        A rejection object, a response without an array, or an array with no usable
        names all count as a failed model; callers treat [] as "no valid ingredients".
        """
        prompt = build_translation_prompt(ingredients)

        for model in self.models:
            try:
                raw = await self.client.complete(model, prompt)
            except Exception as e:
                logger.warning(f"Ingredient translation failed with model {model}: {e}", extra={"model": model})
                continue

            items = extract_json_array(raw.strip())
            if items is None:
                logger.warning(f"Ingredient translation failed with model {model}: no valid array in response")
                continue

            translated = clean_ingredient_names(items)
            if translated:
                logger.debug(f"Model {model} translated {len(ingredients)} ingredient(s) into {translated}")
                return translated

            logger.warning(f"Ingredient translation failed with model {model}: empty ingredient array")

        return []
