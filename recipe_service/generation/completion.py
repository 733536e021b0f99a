"""Chat-completion seam used by the generation drivers.

The drivers only depend on the ChatCompletionClient protocol:
`complete(model, prompt) -> raw text`, raising CompletionError on any
transport, quota or empty-response failure. GeminiCompletionClient is the
production implementation on top of the google-genai SDK; tests pass stubs.
"""

import asyncio
from typing import Optional, Protocol

from google import genai
from google.genai import types

from recipe_service.utils.config import config
from recipe_service.utils.errors import CompletionError
from recipe_service.utils.logger import logger


class ChatCompletionClient(Protocol):
    """Anything that turns (model, prompt) into raw model text."""

    async def complete(self, model: str, prompt: str) -> str:
        ...


class GeminiCompletionClient:
    """Chat-completion client backed by the Gemini API.

    The SDK client is synchronous, so calls run in a worker thread
    (asyncio.to_thread) to keep the event loop free while a model thinks.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key. Defaults to config.GEMINI_API_KEY.
            temperature: Sampling temperature. Defaults to config.TEMPERATURE.
            max_output_tokens: Response length cap. Defaults to config.MAX_OUTPUT_TOKENS.
            client: Pre-built genai.Client (mainly for tests).

        Raises:
            ValueError: If no API key is available.
        """
        api_key = api_key or config.GEMINI_API_KEY
        if not api_key and client is None:
            raise ValueError("GEMINI_API_KEY is required")

        self.client = client or genai.Client(api_key=api_key)
        self.temperature = config.TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or config.MAX_OUTPUT_TOKENS

    async def complete(self, model: str, prompt: str) -> str:
        """Send a single-message prompt to `model` and return its text.

        Raises:
            CompletionError: If the API call fails or returns no text.
        """
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
        except Exception as e:
            logger.debug(f"Gemini call to {model} failed: {e}")
            raise CompletionError(f"Chat completion failed for model {model}: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise CompletionError(f"Chat completion for model {model} returned no text")
        return text
