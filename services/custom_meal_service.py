"""
Custom meal manager.

Saves reusable meals, searches them, and expands a meal into individual food
items when it is added to a daily log. ``error_message`` holds the
user-facing message of the last failed operation (cleared when the next
operation starts), mirroring what the meal screens display.
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from app.exceptions import (
    AIParserError,
    CountMeError,
    FieldValidationError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import FoodItemSource
from domain.models import CustomMeal, Ingredient, FoodItem
from domain.models.database import utcnow
from domain.schemas.meal_schemas import IngredientData
from domain.schemas.nutrition_schemas import ParsedRecipe
from domain.validators import validate_servings
from repositories.custom_meal_repository import CustomMealRepository
from repositories.daily_log_repository import DailyLogRepository
from services.form_validation import validate_meal_name

logger = logging.getLogger("countme.meals")

UNEXPECTED_PARSE_ERROR = (
    "An unexpected error occurred. Please try again or enter ingredients manually."
)
INVALID_MULTIPLIER = "Serving size must be greater than zero."


class CustomMealManager:
    """
    Args:
        db: Database session
        recipe_parser: object with ``parse_recipe(description)`` returning a
            ParsedRecipe (optional; parsing fails without it)
        network_monitor: object with an ``is_connected`` flag (optional)
    """

    def __init__(self, db: Session, recipe_parser=None, network_monitor=None):
        self.db = db
        self.meals = CustomMealRepository(db)
        self.logs = DailyLogRepository(db)
        self.recipe_parser = recipe_parser
        self.network_monitor = network_monitor
        self.error_message: Optional[str] = None

    @contextmanager
    def _operation(self, fallback: str):
        """Clear the last error; record the message of any failure and re-raise."""
        self.error_message = None
        try:
            yield
        except CountMeError as e:
            self.error_message = e.message
            raise
        except Exception:
            self.meals.rollback()
            self.error_message = fallback
            logger.exception(fallback)
            raise

    # ------------------------------------------------------------------
    # Recipe parsing
    # ------------------------------------------------------------------

    def parse_recipe(self, description: str) -> ParsedRecipe:
        self.error_message = None
        if self.network_monitor is not None and not self.network_monitor.is_connected:
            error = AIParserError(
                AIParserError.NETWORK_ERROR, reason="no internet connection"
            )
            self.error_message = error.message
            raise error

        try:
            if self.recipe_parser is None:
                raise RuntimeError("recipe parser is not configured")
            return self.recipe_parser.parse_recipe(description)
        except AIParserError as e:
            self.error_message = e.message
            raise
        except Exception as e:
            logger.exception("Unexpected error while parsing recipe")
            self.error_message = UNEXPECTED_PARSE_ERROR
            raise AIParserError(AIParserError.NETWORK_ERROR, reason=str(e)) from e

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    @staticmethod
    def _build_ingredients(ingredients: Sequence[IngredientData]) -> List[Ingredient]:
        if not ingredients:
            raise FieldValidationError("ingredients", "At least one ingredient is required")
        return [
            Ingredient(position=index, **data.model_dump())
            for index, data in enumerate(ingredients)
        ]

    def get_custom_meal(self, meal_id: UUID) -> CustomMeal:
        meal = self.meals.get_by_id(meal_id)
        if meal is None:
            raise NotFoundError(f"Custom meal {meal_id} not found")
        return meal

    def save_custom_meal(
        self,
        name: str,
        ingredients: Sequence[IngredientData],
        servings_count: float = 1.0,
    ) -> CustomMeal:
        with self._operation("Unable to save custom meal. Please try again."):
            validate_servings(servings_count)
            meal = CustomMeal(
                name=validate_meal_name(name),
                servings_count=servings_count,
                ingredients=self._build_ingredients(ingredients),
            )
            meal = self.meals.create(meal)
            logger.info(
                f"Saved custom meal '{meal.name}' with {len(meal.ingredients)} ingredients"
            )
            return meal

    def update_custom_meal(
        self,
        meal_id: UUID,
        name: str,
        ingredients: Sequence[IngredientData],
        servings_count: float = 1.0,
    ) -> CustomMeal:
        """Replace name, ingredients and servings; the meal counts as used."""
        with self._operation("Unable to update custom meal. Please try again."):
            meal = self.get_custom_meal(meal_id)
            validate_servings(servings_count)
            new_name = validate_meal_name(name)
            new_ingredients = self._build_ingredients(ingredients)

            meal.name = new_name
            meal.servings_count = servings_count
            meal.ingredients = new_ingredients
            meal.last_used_at = utcnow()
            meal = self.meals.update(meal)
            logger.info(f"Updated custom meal {meal_id}")
            return meal

    def delete_custom_meal(self, meal_id: UUID) -> str:
        """Delete a meal and its ingredients. Already logged food items stay."""
        with self._operation("Unable to delete custom meal. Please try again."):
            meal = self.get_custom_meal(meal_id)
            name = meal.name
            self.meals.delete(meal)
            logger.info(f"Deleted custom meal {meal_id} ('{name}')")
            return name

    def load_all_custom_meals(self) -> List[CustomMeal]:
        """All meals, most recently used first."""
        with self._operation("Unable to load custom meals. Please try again."):
            return self.meals.list_recent()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @staticmethod
    def filter_meals(meals: Sequence[CustomMeal], query: str) -> List[CustomMeal]:
        """Case-insensitive substring filter on meal names; blank keeps all."""
        needle = (query or "").strip().lower()
        if not needle:
            return list(meals)
        return [meal for meal in meals if needle in meal.name.lower()]

    def search_custom_meals(self, query: str) -> List[CustomMeal]:
        with self._operation("Unable to search custom meals. Please try again."):
            needle = (query or "").strip()
            if not needle:
                return self.meals.list_recent()
            return self.meals.search_by_name(needle)

    # ------------------------------------------------------------------
    # Logging a meal
    # ------------------------------------------------------------------

    def add_custom_meal_to_log(
        self, meal_id: UUID, serving_multiplier: float, log_date: date
    ) -> List[FoodItem]:
        """
        Add every ingredient of a meal to the log for ``log_date`` as its own
        food item, scaled by ``serving_multiplier``.

        The created items are independent copies: editing or deleting the
        meal later does not change them.
        """
        with self._operation("Unable to add custom meal to log. Please try again."):
            if serving_multiplier is None or serving_multiplier <= 0:
                raise ServiceValidationError(
                    INVALID_MULTIPLIER, code="INVALID_SERVING_MULTIPLIER"
                )

            meal = self.get_custom_meal(meal_id)
            log = self.logs.get_or_create(log_date)
            now = utcnow()

            items = [
                FoodItem(
                    name=ingredient.name,
                    calories=ingredient.calories * serving_multiplier,
                    timestamp=now,
                    serving_size=str(ingredient.quantity * serving_multiplier),
                    serving_unit=ingredient.unit,
                    source=FoodItemSource.CUSTOM_MEAL,
                    protein=_scale(ingredient.protein, serving_multiplier),
                    carbohydrates=_scale(ingredient.carbohydrates, serving_multiplier),
                    fats=_scale(ingredient.fats, serving_multiplier),
                )
                for ingredient in meal.ingredients
            ]

            meal.last_used_at = now
            self.logs.add_food_items(log, items)
            logger.info(
                f"Added custom meal '{meal.name}' x{serving_multiplier} "
                f"({len(items)} items) to {log_date}"
            )
            return items


def _scale(value: Optional[float], multiplier: float) -> Optional[float]:
    return None if value is None else value * multiplier
