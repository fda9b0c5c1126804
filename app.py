"""Pantry Chef HTTP service.

Single entry point for the service:
- Validates configuration (fail-fast on missing credentials)
- Builds the Gemini client and one model handle per task (vision, recipe)
- Builds the recipe store selected by STORE_BACKEND
- Wires the services into the FastAPI app and serves it with uvicorn

Run with: python app.py
"""

import uvicorn
from fastapi import FastAPI

from src.api.server import create_app
from src.services.gemini import GeminiModel, create_genai_client
from src.services.ingredients import IngredientExtractionService
from src.services.recipes import RecipeService
from src.storage.recipe_store import create_recipe_store
from src.utils.config import config
from src.utils.logger import logger


def build_app() -> FastAPI:
    """Construct every collaborator and return the configured app."""
    config.validate()

    client = create_genai_client(config)
    vision_model = GeminiModel(client, config.IMAGE_DETECTION_MODEL)
    recipe_model = GeminiModel(
        client,
        config.RECIPE_MODEL,
        temperature=config.TEMPERATURE,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
    )
    store = create_recipe_store(config)

    logger.info(f"Vision model: {config.IMAGE_DETECTION_MODEL}, recipe model: {config.RECIPE_MODEL}")
    return create_app(
        recipe_service=RecipeService(recipe_model, store),
        ingredient_service=IngredientExtractionService(vision_model, config.MAX_IMAGE_SIZE_MB),
    )


if __name__ == "__main__":
    try:
        app = build_app()
    except Exception as e:
        logger.error(f"Service initialization failed: {e}")
        raise SystemExit(1)

    logger.info(f"Starting Pantry Chef on port {config.PORT}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
