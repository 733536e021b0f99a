"""Prompt templates for recipe generation and ingredient translation.

Both prompts are pure functions of their arguments. The formatting rules they
spell out (ingredient boundaries, JSON-array-only output, the exact field names,
the `{"error": ...}` rejection object) are what the response parser relies on,
so change them together with `recipe_service.generation.parser`.
"""

from enum import Enum
from typing import Optional, Sequence, Union


NOT_SPECIFIED = "NOT SPECIFIED"

# Exact rejection message the models are told to return; the parser surfaces it as ai_error
REJECTION_MESSAGE = "No valid recipe can be created with the given ingredients."


def _format_option(value: Optional[Union[str, Enum]]) -> str:
    """Render an optional meal/diet tag, falling back to NOT SPECIFIED."""
    if value is None:
        return NOT_SPECIFIED
    text = value.value if isinstance(value, Enum) else str(value)
    text = text.strip().replace("_", " ")
    return text or NOT_SPECIFIED


def _format_list(items: Sequence[str]) -> str:
    return ", ".join(items)


def _format_quoted_list(items: Sequence[str]) -> str:
    return ", ".join(f'"{item}"' for item in items)


def build_recipe_prompt(
    ingredients: Sequence[str],
    meal_type: Optional[Union[str, Enum]] = None,
    diet_type: Optional[Union[str, Enum]] = None,
    recipe_count: int = 4,
    pantry_staples: Sequence[str] = (),
) -> str:
    """Build the recipe generation instruction.

    Args:
        ingredients: Sanitized (and optionally translated) ingredient names.
        meal_type: Meal type tag, or None for NOT SPECIFIED.
        diet_type: Diet type tag, or None for NOT SPECIFIED.
        recipe_count: Exact number of recipes the model must return.
        pantry_staples: Staples the model may add beyond the user's ingredients.

    Returns:
        str: The complete prompt, identical for identical arguments.
    """
    if pantry_staples:
        staples_section = f"""✅ Optional basics (if needed):
[{_format_quoted_list(pantry_staples)}]

🚫 Do NOT invent or substitute any ingredient not listed above."""
    else:
        staples_section = "🚫 Do NOT invent, substitute or add any ingredient not listed above, not even basics."

    return f"""
You are a professional chef and certified nutritionist. Your task is to create {recipe_count} unique recipes using only the validated ingredients below:

✅ Ingredients to use (ONLY these):
[{_format_list(ingredients)}]

{staples_section}

🍳 Rules:
- Create **exactly {recipe_count} DIFFERENT and CREATIVE recipes**
- Each recipe is for **1 single serving**
- All recipes must be **realistic, easy to prepare, and well-balanced**
- Use a **subset** of allowed ingredients per recipe
- Every recipe must be unique in taste, preparation, and ingredients

📏 Use **metric units** (g, ml, etc.)
🧠 Write in **English** only

🍽️ Meal type: {_format_option(meal_type)}
🥗 Diet type: {_format_option(diet_type)}

📦 Output format (strict JSON, {recipe_count} objects in an array):
[
  {{
    "title": "Name of the recipe",
    "description": "Short, enticing description (2–3 sentences)",
    "ingredients": ["ingredient with quantity", "..."],
    "steps": ["Step 1", "Step 2", "..."],
    "kcal": number,
    "carbs": number,
    "protein": number,
    "fat": number,
    "imageSearch": "Phrase to find an image (e.g., 'mushroom pasta')"
  }},
  ...
]

🛑 Return only the JSON array. No explanations, no markdown.
"""


def build_translation_prompt(ingredients: Sequence[str]) -> str:
    """Build the ingredient translation/normalization instruction.

    The model either returns a JSON array of clean English ingredient names or
    the rejection object containing REJECTION_MESSAGE.
    """
    return f"""
You are a multilingual culinary assistant.

You MUST immediately return an error and STOP the entire process if **any** ingredient is:

❌ immoral, offensive, unsafe, inedible or inappropriate (e.g., "blood", "poison", "urine", "violence", "knife", "drugs")
❌ fictional or non-existent (e.g., "unicorn", "magic", "happiness", "love", "soul", "dream")
❌ not a real food item or not used in cooking (e.g., "rock", "plastic", "soap", "glass", "wood", "metal")
❌ related to bodily fluids, chemicals, or dangerous items

Your job is to:
1. Translate each of the following ingredients to English, maintaining accuracy.
2. Remove anything that is not a food ingredient (e.g., brand names, kitchen tools).
3. Normalize the format (e.g., lowercase, no duplicates).
4. Return a JSON array of cleaned English ingredient names only (no quantities).

Original ingredients:
[{_format_list(ingredients)}]

If the ingredients are ok, return only the cleaned array. No extra content, no explanation.
Otherwise, return ONLY the following JSON, and nothing else:
{{
  "error": "{REJECTION_MESSAGE}"
}}
"""
