"""Calorie goal and exercise estimate routes"""

from fastapi import APIRouter
import logging

from app.exceptions import FieldValidationError
from domain.schemas.estimate_schemas import (
    CalorieGoalEstimateRequest,
    CalorieGoalEstimateResponse,
    ExerciseEstimateRequest,
    ExerciseEstimateResponse,
)
from services.estimators import CalorieEstimator, ExerciseCalorieEstimator

router = APIRouter(prefix="/estimates", tags=["Estimates"])
logger = logging.getLogger("countme.api.estimates")


@router.post("/calorie-goal", response_model=CalorieGoalEstimateResponse)
def estimate_calorie_goal(request: CalorieGoalEstimateRequest):
    """Suggest a daily calorie goal (Mifflin-St Jeor)"""
    if request.height_cm is not None:
        height_cm = request.height_cm
    elif request.height_feet is not None:
        height_cm = CalorieEstimator.feet_inches_to_cm(
            request.height_feet, request.height_inches or 0
        )
    else:
        raise FieldValidationError("height_cm", "Height is required")

    args = (request.weight_kg, height_cm, request.age, request.sex)
    return CalorieGoalEstimateResponse(
        height_cm=height_cm,
        bmr=CalorieEstimator.bmr(*args),
        maintenance_calories=CalorieEstimator.maintenance(*args, request.activity_level),
        suggested_calories=CalorieEstimator.suggested_calories(
            *args, request.activity_level, request.weekly_weight_loss_lbs
        ),
    )


@router.post("/exercise", response_model=ExerciseEstimateResponse)
def estimate_exercise(request: ExerciseEstimateRequest):
    """Calories burned for an exercise, without logging it"""
    return ExerciseEstimateResponse(
        exercise_type=request.exercise_type,
        intensity=request.intensity,
        met=ExerciseCalorieEstimator.met_value(request.exercise_type, request.intensity),
        calories_burned=ExerciseCalorieEstimator.calories(
            request.exercise_type,
            request.intensity,
            request.weight_kg,
            request.duration_minutes,
        ),
    )
