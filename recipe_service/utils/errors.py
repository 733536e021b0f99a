"""Exception types raised by the recipe generation service.

Each type also subclasses the built-in exception callers would naturally
catch (ValueError, RuntimeError, ConnectionError), so generic handlers keep working.
"""


class RecipeServiceError(Exception):
    """Base class for all service errors."""


class InvalidIngredientsError(RecipeServiceError, ValueError):
    """No usable ingredient survived sanitization or translation."""

    def __init__(self, message: str = "No valid ingredients provided") -> None:
        super().__init__(message)


class CompletionError(RecipeServiceError, ConnectionError):
    """Chat-completion call failed (transport, quota, empty candidate)."""


class GenerationFailedError(RecipeServiceError, RuntimeError):
    """Every model and every attempt failed without a content-policy rejection."""

    def __init__(self, message: str = "All models failed to generate a valid recipe.") -> None:
        super().__init__(message)


class InvalidRecipeTokenError(RecipeServiceError, ValueError):
    """Recipe token missing or not matching the submitted recipe."""

    def __init__(self, message: str, missing: bool = False) -> None:
        super().__init__(message)
        self.missing = missing


class DuplicateRecipeError(RecipeServiceError):
    """The same user already saved a recipe with this fingerprint."""

    def __init__(self, message: str = "Recipe already exists") -> None:
        super().__init__(message)
