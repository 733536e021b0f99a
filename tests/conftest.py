"""Shared pytest configuration.

recipe_service.utils.config validates required settings at import time, so the
test environment variables must be in place before any test module imports it.
"""

import os

import pytest


os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("RECIPE_SIGNING_SECRET", "test-signing-secret")
os.environ.setdefault("RETRY_DELAY_SECONDS", "0")
os.environ["PEXELS_API_KEY"] = ""


class StubCompletionClient:
    """ChatCompletionClient stub: replays scripted responses and records every call.

    Each scripted item is either a string (returned as model text) or an exception
    instance (raised). A callable `responder(model, prompt)` may be given instead.
    """

    def __init__(self, responses=None, responder=None):
        self.responses = list(responses or [])
        self.responder = responder
        self.calls = []

    async def complete(self, model, prompt):
        self.calls.append((model, prompt))
        if self.responder is not None:
            result = self.responder(model, prompt)
        else:
            result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def calls_for(self, model):
        return [call for call in self.calls if call[0] == model]


def make_recipe(title="Garlic Chicken", **overrides):
    """Build a fully valid recipe dict as a model would return it."""
    recipe = {
        "title": title,
        "description": "Juicy pan-seared chicken with garlic. Ready in 20 minutes.",
        "ingredients": ["150 g chicken breast", "1 clove garlic", "5 ml olive oil"],
        "steps": ["Season the chicken.", "Sear 6 minutes per side.", "Add garlic and rest."],
        "kcal": 320,
        "carbs": 2.5,
        "protein": 38,
        "fat": 14,
        "imageSearch": "garlic chicken",
    }
    recipe.update(overrides)
    return recipe


@pytest.fixture
def recipe_factory():
    return make_recipe


@pytest.fixture
def stub_client_factory():
    return StubCompletionClient
