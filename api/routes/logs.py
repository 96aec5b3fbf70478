"""Daily log routes: food, exercise and calorie goal"""

from datetime import date
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
import logging

from api.dependencies import get_tracker
from api.responses import success_response, saved_message
from domain.enums import FoodItemSource
from domain.schemas.log_schemas import (
    DailyLogResponse,
    ExerciseEntryForm,
    ExerciseItemCreate,
    ExerciseItemResponse,
    ExerciseItemUpdate,
    FoodFromSearchRequest,
    FoodItemCreate,
    FoodItemResponse,
    FoodItemUpdate,
    GoalForm,
    ManualFoodEntryForm,
)
from services.calorie_tracker import CalorieTrackerService
from services.estimators import ExerciseCalorieEstimator
from services import form_validation

router = APIRouter(prefix="/logs", tags=["Daily Logs"])
logger = logging.getLogger("countme.api.logs")


def _log_response(log) -> DailyLogResponse:
    return DailyLogResponse.model_validate(log)


@router.get("", response_model=List[DailyLogResponse])
def list_logs(
    start: date = Query(..., description="First date (inclusive)"),
    end: date = Query(..., description="Last date (inclusive)"),
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    """Historical logs between two dates, oldest first"""
    return [_log_response(log) for log in tracker.historical_logs(start, end)]


@router.get("/{log_date}", response_model=DailyLogResponse)
def get_log(log_date: date, tracker: CalorieTrackerService = Depends(get_tracker)):
    """Load the log for a date, creating an empty one on first access"""
    return _log_response(tracker.load_log(log_date))


@router.put("/{log_date}/goal")
def set_goal(
    log_date: date,
    form: GoalForm,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    """Set the daily calorie goal from the goal form"""
    goal = form_validation.validate_goal(form.goal)
    log = tracker.set_daily_goal(log_date, goal)
    return success_response(
        data=_log_response(log), message=f"Daily goal set to {goal:g} kcal"
    )


# ---------------------------------------------------------------------------
# Food items
# ---------------------------------------------------------------------------


@router.post("/{log_date}/food", status_code=status.HTTP_201_CREATED)
def add_food_item(
    log_date: date,
    data: FoodItemCreate,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    item = tracker.add_food_item(log_date, data)
    return success_response(
        data=FoodItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.post("/{log_date}/food/manual", status_code=status.HTTP_201_CREATED)
def add_manual_food_entry(
    log_date: date,
    form: ManualFoodEntryForm,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    """
    Add a food item from the manual entry form.

    All fields arrive as typed text; nothing is saved unless the name is
    present and calories parse as a non-negative number.
    """
    fields = form_validation.validate_manual_food_entry(
        form.name, form.calories, form.serving_size, form.serving_unit
    )
    item = tracker.add_food_item(
        log_date, FoodItemCreate(source=FoodItemSource.MANUAL, **fields)
    )
    return success_response(
        data=FoodItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.post("/{log_date}/food/from-search", status_code=status.HTTP_201_CREATED)
def add_food_from_search(
    log_date: date,
    request: FoodFromSearchRequest,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    item = tracker.add_search_result(log_date, request.result, request.servings)
    return success_response(
        data=FoodItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.patch("/{log_date}/food/{item_id}")
def update_food_item(
    log_date: date,
    item_id: UUID,
    data: FoodItemUpdate,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    item = tracker.update_food_item(log_date, item_id, data)
    return success_response(
        data=FoodItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.delete("/{log_date}/food/{item_id}")
def remove_food_item(
    log_date: date,
    item_id: UUID,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    log = tracker.remove_food_item(log_date, item_id)
    return success_response(data=_log_response(log), message="Food item deleted")


# ---------------------------------------------------------------------------
# Exercise items
# ---------------------------------------------------------------------------


@router.post("/{log_date}/exercise", status_code=status.HTTP_201_CREATED)
def add_exercise_item(
    log_date: date,
    data: ExerciseItemCreate,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    item = tracker.add_exercise_item(log_date, data)
    return success_response(
        data=ExerciseItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.post("/{log_date}/exercise/estimate", status_code=status.HTTP_201_CREATED)
def add_estimated_exercise(
    log_date: date,
    form: ExerciseEntryForm,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    """Add an exercise whose burned calories are estimated from the MET table"""
    fields = form_validation.validate_exercise_entry(
        form.exercise_type, form.duration, form.body_weight_kg, form.name, form.notes
    )
    calories = ExerciseCalorieEstimator.calories(
        form.exercise_type,
        form.intensity,
        fields["body_weight_kg"],
        fields["duration_minutes"],
    )
    item = tracker.add_exercise_item(
        log_date,
        ExerciseItemCreate(
            name=fields["name"],
            calories_burned=calories,
            duration_minutes=fields["duration_minutes"],
            exercise_type=form.exercise_type,
            intensity=form.intensity,
            notes=fields["notes"],
        ),
    )
    return success_response(
        data=ExerciseItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.patch("/{log_date}/exercise/{item_id}")
def update_exercise_item(
    log_date: date,
    item_id: UUID,
    data: ExerciseItemUpdate,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    item = tracker.update_exercise_item(log_date, item_id, data)
    return success_response(
        data=ExerciseItemResponse.model_validate(item), message=saved_message(item.name)
    )


@router.delete("/{log_date}/exercise/{item_id}")
def remove_exercise_item(
    log_date: date,
    item_id: UUID,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    log = tracker.remove_exercise_item(log_date, item_id)
    return success_response(data=_log_response(log), message="Exercise deleted")
