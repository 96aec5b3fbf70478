"""Schemas for custom meals and their ingredients"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date as date_type
from uuid import UUID

from domain.schemas.nutrition_schemas import NutritionSearchResult
from domain.schemas.log_schemas import FoodItemResponse


class IngredientRowForm(BaseModel):
    """One ingredient row of the meal builder, as typed by the user"""

    name: Optional[str] = ""
    quantity: Optional[str] = ""
    unit: Optional[str] = "serving"
    calories: Optional[str] = ""
    protein: Optional[str] = ""
    carbohydrates: Optional[str] = ""
    fats: Optional[str] = ""

    model_config = {"coerce_numbers_to_str": True}


class MealForm(BaseModel):
    """Meal builder form: name, serving count and ingredient rows"""

    name: Optional[str] = ""
    servings: Optional[str] = Field("", description="Blank means 1 serving")
    ingredients: List[IngredientRowForm] = Field(default_factory=list)

    model_config = {"coerce_numbers_to_str": True}


class IngredientData(BaseModel):
    """Validated ingredient values, ready to persist"""

    name: str
    quantity: float
    unit: str
    calories: float
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None

    model_config = {"from_attributes": True}


class IngredientResponse(IngredientData):
    ingredient_id: UUID


class CustomMealResponse(BaseModel):
    """A saved meal with totals and per-serving values"""

    custom_meal_id: UUID
    name: str
    servings_count: float
    created_at: datetime
    last_used_at: datetime
    ingredients: List[IngredientResponse] = Field(default_factory=list)
    total_calories: float
    total_protein: float
    total_carbohydrates: float
    total_fats: float
    calories_per_serving: float
    protein_per_serving: float
    carbohydrates_per_serving: float
    fats_per_serving: float

    model_config = {"from_attributes": True}


class AddMealToLogRequest(BaseModel):
    serving_multiplier: float = Field(1.0, description="Servings to log, must be > 0")
    date: Optional[date_type] = Field(None, description="Defaults to today")


class AddMealToLogResponse(BaseModel):
    meal_id: UUID
    date: date_type
    serving_multiplier: float
    food_items: List[FoodItemResponse]
    total_calories: float


class IngredientFromSearchRequest(BaseModel):
    """Convert a nutrition search result into a meal ingredient"""

    result: NutritionSearchResult
    serving_multiplier: float = 1.0
