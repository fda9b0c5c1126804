#!/usr/bin/env python3
"""Ad hoc query runner for Pantry Chef.

Generate a recipe directly without starting the HTTP server.

Usage:
    python query.py "Tomato, Cheese, Bread"
    python query.py --image images/fridge.jpg          # Extract ingredients from a photo first
    python query.py --debug "Tomato, Cheese"           # Show full JSON response
    python query.py --memory "Tomato, Cheese"          # Use the in-memory store instead of Firestore

Features:
- Photo → ingredient text → split list → recipe, same as the browser flow
- Cached recipes are returned without calling the model
- Markdown rendering of the recipe, tolerant of unexpected field shapes
"""

import asyncio
import base64
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markdown import Markdown

from src.services.gemini import GeminiModel, create_genai_client
from src.services.ingredients import IngredientExtractionService
from src.services.recipes import RecipeService
from src.storage.recipe_store import create_recipe_store
from src.utils.config import config
from src.utils.errors import RecipeServiceError
from src.utils.logger import logger

console = Console()


def split_ingredient_text(text: str) -> list[str]:
    """Split comma-separated ingredient text into trimmed, non-empty items."""
    return [item.strip() for item in text.split(",") if item.strip()]


def _as_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if value in (None, ""):
        return []
    return [str(value)]


def render_recipe(recipe: dict[str, Any]) -> str:
    """Format a recipe dict as markdown.

    Fields are validated for presence only, so every value is coerced
    defensively before display.
    """
    lines = [f"# {recipe.get('title', 'Untitled recipe')}", ""]
    if recipe.get("desc"):
        lines += [str(recipe["desc"]), ""]

    tags = recipe.get("tags")
    if isinstance(tags, dict):
        tag_text = " · ".join(str(tags[name]) for name in ("cuisine", "meal", "diet", "time") if tags.get(name))
        if tag_text:
            lines += [f"*{tag_text}*", ""]

    used = _as_list(recipe.get("used"))
    needs = _as_list(recipe.get("needs"))
    if used:
        lines += ["## You have", *[f"- {item}" for item in used], ""]
    if needs:
        lines += ["## You also need", *[f"- {item}" for item in needs], ""]

    steps = _as_list(recipe.get("instr"))
    if steps:
        lines += ["## Instructions", *[f"{idx}. {step}" for idx, step in enumerate(steps, start=1)], ""]

    return "\n".join(lines)


async def _run(ingredient_text: Optional[str], image_path: Optional[str]) -> dict[str, Any]:
    client = create_genai_client(config)
    recipe_service = RecipeService(
        GeminiModel(
            client,
            config.RECIPE_MODEL,
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        ),
        create_recipe_store(config),
    )

    if image_path:
        image_file = Path(image_path)
        if not image_file.exists():
            console.print(f"[red]✗ Error: Image file not found: {image_path}[/red]")
            sys.exit(1)

        logger.info(f"Loading image: {image_file.name}...")
        image_data = base64.b64encode(image_file.read_bytes()).decode("utf-8")

        ingredient_service = IngredientExtractionService(
            GeminiModel(client, config.IMAGE_DETECTION_MODEL),
            config.MAX_IMAGE_SIZE_MB,
        )
        ingredient_text = await ingredient_service.extract_from_image(image_data)
        console.print(f"[bold cyan]Detected ingredients:[/bold cyan] {ingredient_text}")

    ingredients = split_ingredient_text(ingredient_text or "")
    return await recipe_service.get_or_generate(ingredients)


def run_query(
    ingredient_text: Optional[str],
    image_path: Optional[str] = None,
    debug: bool = False,
    memory: bool = False,
) -> None:
    """Generate (or fetch) a recipe and print it.

    Args:
        ingredient_text: Comma-separated ingredients; ignored when image_path is given.
        image_path: Optional JPEG photo to extract ingredients from.
        debug: If True, display the full recipe JSON.
        memory: If True, use the in-memory store.
    """
    if memory:
        config.STORE_BACKEND = "memory"

    try:
        config.validate()
        recipe = asyncio.run(_run(ingredient_text, image_path))
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except RecipeServiceError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        if debug and e.details:
            console.print_json(data=e.details)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Recipe[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print_json(data=recipe, default=str)
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print()

    console.print(Markdown(render_recipe(recipe)))


def _usage() -> None:
    print('Usage: python query.py [--debug] [--memory] [--image PATH] "<ingredient, ingredient, ...>"')


if __name__ == "__main__":
    debug_mode = False
    memory_mode = False
    image_path = None
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        if sys.argv[argv_start] == "--debug":
            debug_mode = True
            argv_start += 1
        elif sys.argv[argv_start] == "--memory":
            memory_mode = True
            argv_start += 1
        elif sys.argv[argv_start] == "--image":
            argv_start += 1
            if argv_start >= len(sys.argv):
                print("Error: --image flag requires a file path")
                sys.exit(1)
            image_path = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {sys.argv[argv_start]}")
            sys.exit(1)

    ingredient_text = " ".join(sys.argv[argv_start:]) or None
    if not ingredient_text and not image_path:
        _usage()
        sys.exit(1)

    run_query(ingredient_text, image_path=image_path, debug=debug_mode, memory=memory_mode)
