"""
Range checks shared by the ORM models and the service layer.

Every check raises FieldValidationError with a message that can be shown
to the user as-is.
"""

from typing import Optional

from app.exceptions import FieldValidationError

MAX_CALORIES = 50_000.0
MAX_MACRO_GRAMS = 10_000.0
MAX_DURATION_MINUTES = 1_440.0
MAX_DAILY_GOAL = 50_000.0
MAX_MEAL_NAME_LENGTH = 100

MACRO_FIELDS = ("protein", "carbohydrates", "fats")


def validate_name(model_type: str, name: Optional[str], field: str = "name") -> str:
    if name is None or not name.strip():
        raise FieldValidationError(
            field, f"{model_type} name cannot be empty or whitespace-only."
        )
    return name


def validate_calories(model_type: str, value: Optional[float], field: str = "calories") -> float:
    if value is None:
        raise FieldValidationError(field, f"{model_type} {field} is required.")
    value = float(value)
    if value < 0:
        raise FieldValidationError(
            field, f"{model_type} calories cannot be negative (got {value})."
        )
    if value > MAX_CALORIES:
        raise FieldValidationError(
            field, f"{model_type} calories {value} exceeds maximum of {MAX_CALORIES}."
        )
    return value


def validate_macro(model_type: str, field: str, value: Optional[float]) -> Optional[float]:
    """Missing macros are allowed; present ones must be in range."""
    if value is None:
        return None
    value = float(value)
    if value < 0:
        raise FieldValidationError(
            field, f"{model_type} {field} cannot be negative (got {value})."
        )
    if value > MAX_MACRO_GRAMS:
        raise FieldValidationError(
            field,
            f"{model_type} {field} {value}g exceeds maximum of {MAX_MACRO_GRAMS}g.",
        )
    return value


def validate_duration(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if value < 0:
        raise FieldValidationError(
            "duration_minutes", f"Duration cannot be negative (got {value} minutes)."
        )
    if value > MAX_DURATION_MINUTES:
        raise FieldValidationError(
            "duration_minutes",
            f"Duration {value} minutes exceeds maximum of {MAX_DURATION_MINUTES} minutes.",
        )
    return value


def validate_quantity(value: float) -> float:
    value = float(value)
    if value <= 0:
        raise FieldValidationError(
            "quantity", f"Ingredient quantity must be positive (got {value})."
        )
    return value


def validate_unit(unit: Optional[str]) -> str:
    if unit is None or not unit.strip():
        raise FieldValidationError(
            "unit", "Ingredient unit cannot be empty or whitespace-only."
        )
    return unit


def validate_servings(value: float) -> float:
    value = float(value)
    if value <= 0:
        raise FieldValidationError(
            "servings_count", f"Servings count must be positive (got {value})."
        )
    return value


def validate_goal(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if value < 0:
        raise FieldValidationError(
            "daily_goal", f"Daily goal cannot be negative (got {value})."
        )
    if value > MAX_DAILY_GOAL:
        raise FieldValidationError(
            "daily_goal", f"Daily goal {value} exceeds maximum of {MAX_DAILY_GOAL}."
        )
    return value
