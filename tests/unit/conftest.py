"""Shared fixtures for unit tests.

Model responses are built from real google.genai types so the parsing code is
exercised against the same objects the SDK returns.
"""

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from src.storage.recipe_store import InMemoryRecipeStore

FIXED_NOW = datetime(2026, 10, 19, 8, 30, 0, 123000, tzinfo=timezone.utc)

VALID_RECIPE_JSON = (
    '{"title": "Isoisän juustoleipä", "desc": "Crisp bread with melted cheese.", '
    '"used": ["Tomato", "Cheese"], "needs": ["Bread"], '
    '"instr": ["1. Slice.", "2. Bake."], '
    '"tags": {"cuisine": "Scandinavian", "meal": "Lunch", "diet": "Vegetarian", "time": "<30min"}, '
    '"search_keys": ["tomato", "cheese", "bread"]}'
)


def make_response(
    text: Optional[str] = None,
    finish_reason: types.FinishReason = types.FinishReason.STOP,
    with_parts: bool = True,
    safety_ratings: Optional[list[types.SafetyRating]] = None,
) -> types.GenerateContentResponse:
    """Build a single-candidate GenerateContentResponse."""
    parts = [types.Part(text=text)] if with_parts else []
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=parts),
                finish_reason=finish_reason,
                safety_ratings=safety_ratings,
            )
        ]
    )


def dangerous_rating() -> types.SafetyRating:
    return types.SafetyRating(
        category=types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
        probability=types.HarmProbability.HIGH,
        blocked=True,
    )


@pytest.fixture
def recipe_response() -> types.GenerateContentResponse:
    """Recipe JSON wrapped in prose and a code fence, as models often reply."""
    return make_response(f"Here is your recipe:\n```json\n{VALID_RECIPE_JSON}\n```\nEnjoy!")


@pytest.fixture
def fake_model():
    """GeminiModel stand-in whose generate() is an AsyncMock."""
    model = MagicMock()
    model.model = "gemini-test"
    model.generate = AsyncMock()
    return model


@pytest.fixture
def memory_store() -> InMemoryRecipeStore:
    return InMemoryRecipeStore()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def response_factory():
    """Factory for GenerateContentResponse objects, see make_response()."""
    return make_response


@pytest.fixture
def safety_rating() -> types.SafetyRating:
    return dangerous_rating()


@pytest.fixture
def valid_recipe_json() -> str:
    return VALID_RECIPE_JSON


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
