"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    CountMeError,
    ServiceValidationError,
    FieldValidationError,
    NotFoundError,
    TrackerError,
    NoCurrentLogError,
    InvalidGoalError,
    NutritionAPIError,
    AIParserError,
    IngredientConversionError,
    ServingSizeError,
    ConfirmationRequiredError,
)

__all__ = [
    "settings",
    "CountMeError",
    "ServiceValidationError",
    "FieldValidationError",
    "NotFoundError",
    "TrackerError",
    "NoCurrentLogError",
    "InvalidGoalError",
    "NutritionAPIError",
    "AIParserError",
    "IngredientConversionError",
    "ServingSizeError",
    "ConfirmationRequiredError",
]
