"""Recipe generation with a permanent, store-backed cache.

RecipeService.get_or_generate() is the get-or-compute pipeline:

1. Validate the ingredient list (non-empty list of strings)
2. Derive the canonical key (sorted copy joined by ",")
3. Return the stored recipe on a hit, unchanged
4. On a miss: prompt the recipe model with the ingredients in their original
   order, extract the candidate text, recover and parse the JSON object,
   validate required fields
5. Attach key, added (ISO-8601 UTC) and createdAt (store server timestamp)
6. Blind set() under the key and return the persisted recipe

No retries and no locking: two concurrent misses for the same key both call
the model and the later write wins. Nothing is written unless step 4
succeeds completely.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable

from src.models.models import Recipe
from src.prompts.prompts import get_recipe_prompt
from src.services.gemini import GeminiModel
from src.services.keys import canonicalize_ingredients
from src.services.parsing import extract_response_text, parse_recipe_json, validate_recipe
from src.storage.recipe_store import RecipeStore
from src.utils.errors import InternalError, InvalidArgumentError, RecipeServiceError
from src.utils.logger import logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_added_timestamp(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix, e.g. 2026-10-19T08:00:00.000Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_ingredients(ingredients: Any) -> list[str]:
    """Reject anything but a non-empty list of strings.

    Raises:
        InvalidArgumentError: Missing, empty, non-list, or non-string items.
    """
    if not isinstance(ingredients, list) or not ingredients:
        raise InvalidArgumentError(
            'The function must be called with an "ingredients" array containing at least one item.'
        )
    if not all(isinstance(item, str) for item in ingredients):
        raise InvalidArgumentError('Every item of the "ingredients" array must be a string.')
    return ingredients


class RecipeService:
    """Get-or-generate recipes keyed by the canonical ingredient set."""

    def __init__(
        self,
        model: GeminiModel,
        store: RecipeStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.model = model
        self.store = store
        self.clock = clock

    async def get_or_generate(self, ingredients: Any) -> Recipe:
        """Return the cached recipe for this ingredient set, generating it on a miss.

        Args:
            ingredients: Ingredient list as submitted by the caller.

        Returns:
            Recipe dict with the model's fields plus key, added and createdAt.

        Raises:
            InvalidArgumentError: Bad ingredient list (no collaborator is called).
            SafetyBlockedError, EmptyResponseError, NoJsonFoundError,
            MalformedJsonError, IncompleteRecipeError: Model output unusable.
            InternalError: Store or model call failed unexpectedly.
        """
        ingredients = validate_ingredients(ingredients)
        key = canonicalize_ingredients(ingredients)
        log_extra = {"ingredient_key": key}

        try:
            cached = await asyncio.to_thread(self.store.get, key)
            if cached is not None:
                logger.info("Found existing recipe in store", extra=log_extra)
                return cached

            logger.info("No existing recipe found. Generating a new one.", extra=log_extra)
            recipe = await self._generate(ingredients)

            recipe["key"] = key
            recipe["added"] = format_added_timestamp(self.clock())
            recipe["createdAt"] = self.store.server_timestamp()

            persisted = await asyncio.to_thread(self.store.set, key, recipe)
            logger.info("New recipe saved to store", extra=log_extra)
            return persisted

        except RecipeServiceError as e:
            logger.error(
                f"Recipe generation failed: {e.message}. Diagnostics: {e.diagnostics}",
                extra={**log_extra, "error_kind": e.kind.value},
            )
            raise
        except Exception as e:
            logger.error(
                f"Unexpected error while generating the recipe: {e}",
                exc_info=True,
                extra={**log_extra, "error_kind": "internal"},
            )
            raise InternalError(
                "An unexpected error occurred while generating the recipe.",
                details={"originalError": str(e)},
            ) from e

    async def _generate(self, ingredients: list[str]) -> dict[str, Any]:
        response = await self.model.generate(get_recipe_prompt(ingredients))
        raw_text = extract_response_text(
            response,
            blocked_message="The recipe request was blocked for safety reasons. Please try different ingredients.",
            empty_message="The AI failed to generate a recipe response.",
        )
        return validate_recipe(parse_recipe_json(raw_text))
