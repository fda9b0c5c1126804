"""Prompts for the Gemini vision and recipe models.

INGREDIENT_EXTRACTION_PROMPT asks the vision model for a bare comma-separated
list. get_recipe_prompt() builds the chef persona prompt that asks the text
model for the recipe JSON object described by REQUIRED_RECIPE_FIELDS.
"""

INGREDIENT_EXTRACTION_PROMPT = (
    "List all edible ingredients and foodstuffs in this image. "
    "Respond ONLY with a comma-separated list without any titles or other explanations. "
    "Example: Milk, Tomato, Cheese, Bread."
)


_PERSONA = (
    "You are an experienced and warm-hearted Finnish chef-grandfather, mentored by the great "
    "Jacques Pépin. You share your wisdom with passion and approachability. Your goal is to inspire "
    "and guide, creating delicious, practical recipes that respect the ingredients."
)


_RECIPE_SCHEMA = """Respond ONLY in a valid JSON format, with no other text, comments, or markdown. The JSON object must contain:
- "title": A catchy, Finnish name for the recipe.
- "desc": A short, appealing description of the recipe (max 2-3 sentences).
- "used": An array of the provided ingredients that you used.
- "needs": An array of other essential ingredients needed for the recipe.
- "instr": An array of clear, numbered preparation steps.
- "tags": An object with the following fields: "cuisine" (e.g., Italian, Scandinavian), "meal" (e.g., Breakfast, Dinner), "diet" (e.g., Vegetarian, Vegan, Gluten-free), "time" (e.g., "<30min", "30-60min", ">60min").
- "search_keys": An array of all ingredients used in the recipe ("used" and "needs") in a simple, singular, lowercase format (e.g., "tomato", "onion", "beef")."""


def get_recipe_prompt(ingredients: list[str]) -> str:
    """Build the recipe generation prompt.

    Ingredients appear in the order the user gave them, not in cache-key
    order.

    Args:
        ingredients: Ingredient list as submitted.

    Returns:
        str: Complete prompt for the recipe model.
    """
    return (
        f"{_PERSONA}\n\n"
        f"Your task is to create a recipe from the following ingredients: {', '.join(ingredients)}.\n\n"
        f"{_RECIPE_SCHEMA}\n"
    )
