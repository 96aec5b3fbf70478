"""Schemas for nutrition database search results and AI recipe parsing"""

from pydantic import BaseModel, Field
from typing import Optional, List


class NutritionSearchResult(BaseModel):
    """A food returned by the nutrition database search"""

    id: str = Field(..., description="Food identifier in the nutrition database")
    name: str
    calories: float = Field(..., description="Calories for the reference serving")
    serving_size: Optional[str] = Field(None, description="e.g. '100'")
    serving_unit: Optional[str] = Field(None, description="e.g. 'g', 'cup'")
    brand_name: Optional[str] = None
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None

    model_config = {"from_attributes": True}


class NutritionSearchResponse(BaseModel):
    """Search results for a text query"""

    query: str
    results: List[NutritionSearchResult] = Field(default_factory=list)
    count: int = 0


class ParsedIngredient(BaseModel):
    """One ingredient extracted from a recipe description"""

    name: str
    quantity: float
    unit: str
    calories: float
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None


class ParsedRecipe(BaseModel):
    """Structured output of the AI recipe parser"""

    ingredients: List[ParsedIngredient]
    confidence: float = Field(..., description="Model confidence between 0.0 and 1.0")


class RecipeParseRequest(BaseModel):
    """Natural language recipe description to parse"""

    description: str = Field(
        ...,
        description="e.g. 'chicken stir fry with 2 cups rice and vegetables'",
    )
