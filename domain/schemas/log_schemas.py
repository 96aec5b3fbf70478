"""Schemas for daily logs, food items and exercise items"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date as date_type
from uuid import UUID

from domain.enums import FoodItemSource, ExerciseType, ExerciseIntensity
from domain.schemas.nutrition_schemas import NutritionSearchResult


# ---------------------------------------------------------------------------
# Food items
# ---------------------------------------------------------------------------


class FoodItemCreate(BaseModel):
    """Structured food item, e.g. from a client that already validated input"""

    name: str
    calories: float
    serving_size: Optional[str] = None
    serving_unit: Optional[str] = None
    source: FoodItemSource = FoodItemSource.MANUAL
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None
    timestamp: Optional[datetime] = None


class FoodItemUpdate(BaseModel):
    """Partial update of a food item; omitted fields are left unchanged"""

    name: Optional[str] = None
    calories: Optional[float] = None
    serving_size: Optional[str] = None
    serving_unit: Optional[str] = None
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None


class ManualFoodEntryForm(BaseModel):
    """Raw text fields of the manual food entry form"""

    name: Optional[str] = ""
    calories: Optional[str] = ""
    serving_size: Optional[str] = ""
    serving_unit: Optional[str] = ""

    model_config = {"coerce_numbers_to_str": True}


class FoodFromSearchRequest(BaseModel):
    """Log a nutrition search result, scaled by a number of servings"""

    result: NutritionSearchResult
    servings: float = Field(1.0, description="Serving multiplier, must be > 0")


class FoodItemResponse(BaseModel):
    food_item_id: UUID
    name: str
    calories: float
    timestamp: datetime
    serving_size: Optional[str] = None
    serving_unit: Optional[str] = None
    source: FoodItemSource
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Exercise items
# ---------------------------------------------------------------------------


class ExerciseItemCreate(BaseModel):
    name: str
    calories_burned: float
    duration_minutes: Optional[float] = None
    exercise_type: ExerciseType = ExerciseType.WALKING
    intensity: ExerciseIntensity = ExerciseIntensity.MODERATE
    notes: Optional[str] = None
    timestamp: Optional[datetime] = None


class ExerciseItemUpdate(BaseModel):
    name: Optional[str] = None
    calories_burned: Optional[float] = None
    duration_minutes: Optional[float] = None
    exercise_type: Optional[ExerciseType] = None
    intensity: Optional[ExerciseIntensity] = None
    notes: Optional[str] = None


class ExerciseEntryForm(BaseModel):
    """Raw exercise entry form; calories are estimated from the MET table"""

    exercise_type: ExerciseType = ExerciseType.WALKING
    intensity: ExerciseIntensity = ExerciseIntensity.MODERATE
    duration: Optional[str] = ""
    body_weight_kg: float = Field(70.0, description="Body weight used for estimation")
    name: Optional[str] = ""
    notes: Optional[str] = ""

    model_config = {"coerce_numbers_to_str": True}


class ExerciseItemResponse(BaseModel):
    exercise_item_id: UUID
    name: str
    calories_burned: float
    duration_minutes: Optional[float] = None
    exercise_type: ExerciseType
    intensity: ExerciseIntensity
    notes: Optional[str] = None
    timestamp: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Daily log
# ---------------------------------------------------------------------------


class GoalForm(BaseModel):
    """Raw text of the goal setting form"""

    goal: Optional[str] = ""

    model_config = {"coerce_numbers_to_str": True}


class DailyLogResponse(BaseModel):
    """A daily log with its items and derived totals"""

    log_id: UUID
    date: date_type
    daily_goal: Optional[float] = None
    food_items: List[FoodItemResponse] = Field(default_factory=list)
    exercise_items: List[ExerciseItemResponse] = Field(default_factory=list)
    total_calories: float
    total_exercise_calories: float
    net_calories: float
    remaining_calories: Optional[float] = None
    total_protein: float
    total_carbohydrates: float
    total_fats: float

    model_config = {"from_attributes": True}
