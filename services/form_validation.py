"""
Form validation for raw text input.

Each entry form of the app (manual food entry, goal, exercise, meal builder)
submits strings. The helpers here trim and parse them, and raise
FieldValidationError / ServiceValidationError carrying the message the form
shows next to the offending field. Nothing is saved while any field fails.
"""

import math
from typing import Dict, List, Optional, Tuple

from app.exceptions import FieldValidationError, ServiceValidationError
from domain.enums import ExerciseType
from domain.schemas.meal_schemas import IngredientData, IngredientRowForm, MealForm
from domain.validators import MAX_DAILY_GOAL, MAX_MEAL_NAME_LENGTH


def _trim(text: Optional[str]) -> str:
    return (text or "").strip()


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse trimmed text as a finite float; None when it is not a number."""
    try:
        value = float(_trim(text))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def validate_manual_food_entry(
    name: Optional[str],
    calories: Optional[str],
    serving_size: Optional[str] = None,
    serving_unit: Optional[str] = None,
) -> Dict[str, object]:
    """Validate the manual entry form and return cleaned values."""
    trimmed_name = _trim(name)
    if not trimmed_name:
        raise FieldValidationError("name", "Food name is required")

    trimmed_calories = _trim(calories)
    if not trimmed_calories:
        raise FieldValidationError("calories", "Calories value is required")

    value = parse_number(trimmed_calories)
    if value is None:
        raise FieldValidationError("calories", "Calories must be a valid number")
    if value < 0:
        raise FieldValidationError("calories", "Calories must be a non-negative number")

    return {
        "name": trimmed_name,
        "calories": value,
        "serving_size": _trim(serving_size) or None,
        "serving_unit": _trim(serving_unit) or None,
    }


def validate_goal(text: Optional[str]) -> float:
    trimmed = _trim(text)
    if not trimmed:
        raise FieldValidationError("goal", "Goal value is required")

    value = parse_number(trimmed)
    if value is None:
        raise FieldValidationError("goal", "Goal must be a valid number")
    if value <= 0:
        raise FieldValidationError("goal", "Goal must be a positive number")
    if value > MAX_DAILY_GOAL:
        raise FieldValidationError(
            "goal", f"Goal must be {int(MAX_DAILY_GOAL)} calories or less"
        )
    return value


def validate_exercise_entry(
    exercise_type: ExerciseType,
    duration: Optional[str],
    body_weight_kg: float,
    name: Optional[str] = None,
    notes: Optional[str] = None,
) -> Dict[str, object]:
    """Validate the exercise form; a blank label falls back to the type name."""
    minutes = parse_number(duration)
    if minutes is None or minutes <= 0:
        raise FieldValidationError("duration", "Please enter a valid duration.")
    if body_weight_kg is None or body_weight_kg <= 0:
        raise FieldValidationError("body_weight_kg", "Please enter a valid body weight.")

    return {
        "name": _trim(name) or exercise_type.display_name,
        "duration_minutes": minutes,
        "body_weight_kg": float(body_weight_kg),
        "notes": _trim(notes) or None,
    }


def validate_meal_name(name: Optional[str]) -> str:
    trimmed = _trim(name)
    if not trimmed:
        raise FieldValidationError("name", "Meal name is required")
    if len(trimmed) > MAX_MEAL_NAME_LENGTH:
        raise FieldValidationError(
            "name", f"Meal name must be {MAX_MEAL_NAME_LENGTH} characters or less"
        )
    return trimmed


def validate_serving_count(text: Optional[str]) -> float:
    """Blank means one serving."""
    trimmed = _trim(text)
    if not trimmed:
        return 1.0

    value = parse_number(trimmed)
    if value is None:
        raise FieldValidationError("servings", "Must be a valid number")
    if value <= 0:
        raise FieldValidationError("servings", "Must be greater than 0")
    return value


def check_ingredient_row(row: IngredientRowForm) -> Tuple[Optional[IngredientData], Dict[str, str]]:
    """
    Check one ingredient row field by field.

    Returns:
        (data, errors) - data is None whenever errors is non-empty
    """
    errors: Dict[str, str] = {}

    name = _trim(row.name)
    if not name:
        errors["name"] = "Name is required"

    quantity = None
    if not _trim(row.quantity):
        errors["quantity"] = "Required"
    else:
        quantity = parse_number(row.quantity)
        if quantity is None:
            errors["quantity"] = "Required"
        elif quantity <= 0:
            errors["quantity"] = "Must be > 0"

    calories = None
    if not _trim(row.calories):
        errors["calories"] = "Required"
    else:
        calories = parse_number(row.calories)
        if calories is None:
            errors["calories"] = "Required"
        elif calories < 0:
            errors["calories"] = "Must be >= 0"

    macros: Dict[str, Optional[float]] = {}
    for field in ("protein", "carbohydrates", "fats"):
        raw = _trim(getattr(row, field))
        if not raw:
            macros[field] = None
            continue
        value = parse_number(raw)
        if value is None:
            errors[field] = "Must be a valid number"
        elif value < 0:
            errors[field] = "Cannot be negative"
        macros[field] = value

    if errors:
        return None, errors

    return (
        IngredientData(
            name=name,
            quantity=quantity,
            unit=_trim(row.unit) or "serving",
            calories=calories,
            **macros,
        ),
        errors,
    )


def validate_ingredient_row(row: IngredientRowForm) -> IngredientData:
    data, errors = check_ingredient_row(row)
    if errors:
        field, message = next(iter(errors.items()))
        raise FieldValidationError(field, message, details={"fields": errors})
    return data


def validate_meal_form(form: MealForm) -> Tuple[str, float, List[IngredientData]]:
    """
    Validate the whole meal builder form.

    Returns:
        (name, servings_count, ingredients)

    Raises:
        FieldValidationError: name, servings or empty ingredient list
        ServiceValidationError: one or more ingredient rows are invalid;
            ``details["ingredients"]`` maps row index to field errors
    """
    name = validate_meal_name(form.name)
    if not form.ingredients:
        raise FieldValidationError("ingredients", "At least one ingredient is required")
    servings = validate_serving_count(form.servings)

    ingredients: List[IngredientData] = []
    row_errors: Dict[str, Dict[str, str]] = {}
    for index, row in enumerate(form.ingredients):
        data, errors = check_ingredient_row(row)
        if errors:
            row_errors[str(index)] = errors
        else:
            ingredients.append(data)

    if row_errors:
        raise ServiceValidationError(
            "Please correct the highlighted ingredient fields.",
            details={"ingredients": row_errors},
            code="INGREDIENT_ROW_INVALID",
        )
    return name, servings, ingredients
