"""Configuration management for Recipe Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


DEFAULT_AI_MODELS = "gemini-2.5-flash,gemini-2.5-flash-lite,gemini-2.0-flash"
DEFAULT_PANTRY_STAPLES = (
    "salt,pepper,water,olive oil,butter,garlic,onion,herbs,vinegar,sugar,lemon juice,mustard,honey"
)
DEFAULT_PLACEHOLDER_IMAGE_URL = (
    "https://recsports.utk.edu/wp-content/uploads/sites/46/2018/05/Image-not-available_1-800x800.jpg"
)


def _parse_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated env value into a list of trimmed, non-empty items."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_bool(raw: str) -> bool:
    return raw.lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Model priority list: earlier models are tried first, later ones are fallbacks
        self.AI_MODELS: list[str] = _parse_list(os.getenv("AI_MODELS", DEFAULT_AI_MODELS))
        # Attempts per model before falling back to the next one. Default: 5
        self.MAX_RETRIES_PER_MODEL: int = int(os.getenv("MAX_RETRIES_PER_MODEL", "5"))
        # Fixed pause between failed attempts (no exponential growth). Default: 1s
        self.RETRY_DELAY_SECONDS: float = float(os.getenv("RETRY_DELAY_SECONDS", "1.0"))
        # Number of recipes requested per generation; fewer valid recipes counts as a failed attempt
        self.RECIPES_PER_REQUEST: int = int(os.getenv("RECIPES_PER_REQUEST", "4"))
        # Staples the model may add on top of the user's ingredients
        self.PANTRY_STAPLES: list[str] = _parse_list(os.getenv("PANTRY_STAPLES", DEFAULT_PANTRY_STAPLES))
        # Translate/normalize raw ingredients to a clean English list before generating
        self.TRANSLATE_INGREDIENTS: bool = _parse_bool(os.getenv("TRANSLATE_INGREDIENTS", "true"))
        # LLM Model Parameters
        # Temperature: 0.7 leaves room for four distinct recipes per request
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Four recipes with steps and macros fit comfortably in 4096 tokens
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "4096"))

        # Pexels photo search. Without a key every lookup returns the placeholder image
        self.PEXELS_API_KEY: str = os.getenv("PEXELS_API_KEY", "")
        self.PEXELS_API_URL: str = os.getenv("PEXELS_API_URL", "https://api.pexels.com/v1/search")
        self.IMAGE_SEARCH_TIMEOUT_SECONDS: float = float(os.getenv("IMAGE_SEARCH_TIMEOUT_SECONDS", "10"))
        self.PLACEHOLDER_IMAGE_URL: str = os.getenv("PLACEHOLDER_IMAGE_URL", DEFAULT_PLACEHOLDER_IMAGE_URL)

        # HMAC key for recipe tokens exchanged between /generate and /save
        self.RECIPE_SIGNING_SECRET: str = os.getenv("RECIPE_SIGNING_SECRET", "")

        # Server Port
        self.PORT: int = int(os.getenv("PORT", "7777"))
        # Allowed browser origins for the frontend
        self.CORS_ORIGINS: list[str] = _parse_list(os.getenv("CORS_ORIGINS", "http://localhost:5173"))

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required secrets are missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not self.RECIPE_SIGNING_SECRET:
            raise ValueError("RECIPE_SIGNING_SECRET environment variable is required")
        if not self.AI_MODELS:
            raise ValueError("AI_MODELS must list at least one model identifier")
        if self.MAX_RETRIES_PER_MODEL < 1:
            raise ValueError(
                f"MAX_RETRIES_PER_MODEL must be at least 1, got: {self.MAX_RETRIES_PER_MODEL}"
            )
        if self.RETRY_DELAY_SECONDS < 0:
            raise ValueError(
                f"RETRY_DELAY_SECONDS must not be negative, got: {self.RETRY_DELAY_SECONDS}"
            )
        if self.RECIPES_PER_REQUEST < 1:
            raise ValueError(
                f"RECIPES_PER_REQUEST must be at least 1, got: {self.RECIPES_PER_REQUEST}"
            )
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.IMAGE_SEARCH_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"IMAGE_SEARCH_TIMEOUT_SECONDS must be positive, got: {self.IMAGE_SEARCH_TIMEOUT_SECONDS}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
