"""Custom meal routes: library, meal builder, recipe parsing and logging"""

from datetime import date
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
import logging

from api.dependencies import get_meal_manager
from api.responses import success_response, saved_message, deleted_message, added_message
from app.exceptions import ConfirmationRequiredError
from domain.schemas.log_schemas import FoodItemResponse
from domain.schemas.meal_schemas import (
    AddMealToLogRequest,
    AddMealToLogResponse,
    CustomMealResponse,
    IngredientData,
    IngredientFromSearchRequest,
    MealForm,
)
from domain.schemas.nutrition_schemas import ParsedRecipe, RecipeParseRequest
from services.custom_meal_service import CustomMealManager
from services.form_validation import validate_meal_form
from services.ingredient_converter import IngredientConverter, ServingSizeCalculator

router = APIRouter(prefix="/meals", tags=["Custom Meals"])
logger = logging.getLogger("countme.api.meals")


def _meal_response(meal) -> CustomMealResponse:
    return CustomMealResponse.model_validate(meal)


@router.get("", response_model=List[CustomMealResponse])
def list_meals(
    q: str = Query("", description="Case-insensitive name filter"),
    manager: CustomMealManager = Depends(get_meal_manager),
):
    """Saved meals, most recently used first"""
    return [_meal_response(meal) for meal in manager.search_custom_meals(q)]


@router.post("/parse-recipe", response_model=ParsedRecipe)
def parse_recipe(
    request: RecipeParseRequest,
    manager: CustomMealManager = Depends(get_meal_manager),
):
    """
    Extract ingredients from a natural language recipe description.

    The result feeds the meal builder; it is not saved until the user
    submits the meal form.
    """
    return manager.parse_recipe(request.description)


@router.post("/ingredients/from-search", response_model=IngredientData)
def ingredient_from_search(request: IngredientFromSearchRequest):
    """Turn a nutrition search result into a meal builder ingredient"""
    ingredient = IngredientConverter.from_search_result(request.result)
    return ServingSizeCalculator.apply_multiplier(request.serving_multiplier, ingredient)


@router.get("/{meal_id}", response_model=CustomMealResponse)
def get_meal(meal_id: UUID, manager: CustomMealManager = Depends(get_meal_manager)):
    return _meal_response(manager.get_custom_meal(meal_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_meal(form: MealForm, manager: CustomMealManager = Depends(get_meal_manager)):
    """Save a meal from the meal builder form"""
    name, servings, ingredients = validate_meal_form(form)
    meal = manager.save_custom_meal(name, ingredients, servings)
    return success_response(data=_meal_response(meal), message=saved_message(meal.name))


@router.put("/{meal_id}")
def update_meal(
    meal_id: UUID,
    form: MealForm,
    manager: CustomMealManager = Depends(get_meal_manager),
):
    name, servings, ingredients = validate_meal_form(form)
    meal = manager.update_custom_meal(meal_id, name, ingredients, servings)
    return success_response(data=_meal_response(meal), message=saved_message(meal.name))


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: UUID,
    confirm: bool = Query(False, description="Must be true to delete"),
    manager: CustomMealManager = Depends(get_meal_manager),
):
    """
    Delete a meal. Food items already logged from it are kept.

    Without ``confirm=true`` nothing is deleted and the response carries the
    confirmation prompt to show.
    """
    meal = manager.get_custom_meal(meal_id)
    if not confirm:
        raise ConfirmationRequiredError(
            f"Are you sure you want to delete '{meal.name}'? This action cannot be undone.",
            details={"meal_id": str(meal_id)},
        )
    name = manager.delete_custom_meal(meal_id)
    return success_response(data={"deleted": str(meal_id)}, message=deleted_message(name))


@router.post("/{meal_id}/log", status_code=status.HTTP_201_CREATED)
def add_meal_to_log(
    meal_id: UUID,
    request: AddMealToLogRequest,
    manager: CustomMealManager = Depends(get_meal_manager),
):
    """Add each ingredient of the meal to a day's log, scaled by servings"""
    log_date = request.date or date.today()
    items = manager.add_custom_meal_to_log(meal_id, request.serving_multiplier, log_date)
    meal = manager.get_custom_meal(meal_id)
    payload = AddMealToLogResponse(
        meal_id=meal_id,
        date=log_date,
        serving_multiplier=request.serving_multiplier,
        food_items=[FoodItemResponse.model_validate(item) for item in items],
        total_calories=sum(item.calories for item in items),
    )
    return success_response(data=payload, message=added_message(meal.name))
