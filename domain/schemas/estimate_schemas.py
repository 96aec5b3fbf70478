"""Schemas for calorie goal and exercise estimates"""

from pydantic import BaseModel, Field
from typing import Optional

from domain.enums import Sex, ActivityLevel, ExerciseType, ExerciseIntensity


class CalorieGoalEstimateRequest(BaseModel):
    """Inputs for a Mifflin-St Jeor based daily calorie suggestion.

    Height is taken from ``height_cm`` or, when that is missing, from
    ``height_feet`` / ``height_inches``.
    """

    age: int = Field(..., description="Age in years")
    sex: Sex
    weight_kg: float
    height_cm: Optional[float] = None
    height_feet: Optional[int] = None
    height_inches: Optional[int] = None
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    weekly_weight_loss_lbs: float = Field(
        0.0, description="Target weekly loss in pounds; 0 means maintain"
    )


class CalorieGoalEstimateResponse(BaseModel):
    height_cm: float
    bmr: float
    maintenance_calories: float
    suggested_calories: float


class ExerciseEstimateRequest(BaseModel):
    exercise_type: ExerciseType
    intensity: ExerciseIntensity = ExerciseIntensity.MODERATE
    duration_minutes: float
    weight_kg: float


class ExerciseEstimateResponse(BaseModel):
    exercise_type: ExerciseType
    intensity: ExerciseIntensity
    met: float
    calories_burned: float
