"""Data models and schemas for the recipe generation service.

Defines Pydantic models for request/response validation and domain objects.
All models use Pydantic v2 for strict validation and OpenAPI schema generation.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MealType(str, Enum):
    """Meal the generated recipes are meant for."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"


class DietType(str, Enum):
    """Dietary style the generated recipes must respect."""

    BALANCED = "balanced"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten_free"
    DAIRY_FREE = "dairy_free"
    KETO = "keto"
    LOW_CARB = "low_carb"
    HIGH_PROTEIN = "high_protein"


class GenerateRecipesRequest(BaseModel):
    """Input schema for AI recipe generation.

    Ingredients are untrusted free text; they are sanitized before reaching any prompt.
    Accepts either a list or a comma-separated string, and camelCase keys
    (`mealType`, `dietType`) as sent by the web client.
    """

    model_config = ConfigDict(populate_by_name=True)

    ingredients: Annotated[
        List[Annotated[str, Field(max_length=200)]],
        Field(min_length=1, max_length=50, description="Raw ingredient strings (1-50 items, max 200 chars each)"),
    ]
    meal_type: Annotated[
        Optional[MealType],
        Field(None, alias="mealType", description="Optional meal type (breakfast, lunch, dinner, ...)"),
    ]
    diet_type: Annotated[
        Optional[DietType],
        Field(None, alias="dietType", description="Optional diet type (vegetarian, vegan, keto, ...)"),
    ]

    @field_validator("ingredients", mode="before")
    @classmethod
    def split_ingredients(cls, value: Any) -> Any:
        """Split a comma-separated ingredients string into a list."""
        if isinstance(value, str):
            return [item for item in value.split(",") if item.strip()]
        return value


class GeneratedRecipe(BaseModel):
    """A model-generated recipe that passed shape validation.

    This is the only recipe shape allowed to cross into persistence: every field is
    required, numbers must be finite non-negative numbers (no numeric strings, booleans, inf or NaN)
    and list items must be strings.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: Annotated[str, Field(strict=True, min_length=1, description="Recipe name")]
    description: Annotated[str, Field(strict=True, description="Short description (2-3 sentences)")]
    ingredients: Annotated[List[Annotated[str, Field(strict=True)]], Field(description="Ingredients with quantities")]
    steps: Annotated[List[Annotated[str, Field(strict=True)]], Field(description="Ordered preparation steps")]
    kcal: Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False, description="Energy per serving (kcal)")]
    carbs: Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False, description="Carbohydrates per serving (g)")]
    protein: Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False, description="Protein per serving (g)")]
    fat: Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False, description="Fat per serving (g)")]
    image_search: Annotated[
        str,
        Field(strict=True, alias="imageSearch", description="Short phrase used to look up a photo"),
    ]


class FinalRecipe(GeneratedRecipe):
    """Generated recipe with its resolved image URL; the object that gets signed."""

    image_url: Annotated[str, Field(min_length=1, max_length=1000, description="Resolved photo URL")]


class SignedRecipe(BaseModel):
    """Finalized recipe paired with its HMAC fingerprint (sent back as `x-recipe-token`)."""

    recipe: FinalRecipe
    token: Annotated[str, Field(min_length=64, max_length=64, description="Hex HMAC-SHA256 of the recipe")]


class ParsedRecipes(BaseModel):
    """Result envelope of parsing one model response.

    Exactly one payload is meaningful depending on status:
    - ok: `data` holds at least one validated recipe
    - ai_error: `message` holds the model's content-policy rejection
    - invalid_format: `raw` holds the offending text (internal diagnostics only)
    """

    status: Literal["ok", "ai_error", "invalid_format"]
    data: List[GeneratedRecipe] = Field(default_factory=list)
    message: Optional[str] = None
    raw: Optional[str] = None

    @classmethod
    def ok(cls, recipes: List[GeneratedRecipe]) -> "ParsedRecipes":
        return cls(status="ok", data=recipes)

    @classmethod
    def ai_error(cls, message: str) -> "ParsedRecipes":
        return cls(status="ai_error", message=message)

    @classmethod
    def invalid_format(cls, raw: str) -> "ParsedRecipes":
        return cls(status="invalid_format", raw=raw)


class SavedRecipe(FinalRecipe):
    """Recipe stored for a user, keyed by its fingerprint."""

    id: str
    user_id: str
    hash: str
    created_at: datetime


class ApiResponse(BaseModel):
    """Uniform JSON envelope for every HTTP response."""

    success: bool
    message: str
    data: Optional[Any] = None
