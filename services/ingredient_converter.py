"""
Conversion of search results and logged food items into meal ingredients,
and serving-size scaling of ingredients.
"""

import logging
from typing import Optional

from app.exceptions import IngredientConversionError, ServingSizeError
from domain.schemas.meal_schemas import IngredientData

logger = logging.getLogger("countme.ingredients")


def _parse_quantity(serving_size: Optional[str]) -> float:
    """Numeric serving size when it is positive, otherwise one serving."""
    if serving_size is None:
        return 1.0
    try:
        quantity = float(serving_size)
    except ValueError:
        return 1.0
    return quantity if quantity > 0 else 1.0


class IngredientConverter:
    @staticmethod
    def _convert(source) -> IngredientData:
        if not source.name:
            raise IngredientConversionError.missing_field("name")
        if source.calories < 0:
            raise IngredientConversionError.invalid_value("calories", float(source.calories))

        for field in ("protein", "carbohydrates", "fats"):
            value = getattr(source, field)
            if value is not None and value < 0:
                raise IngredientConversionError.invalid_value(field, float(value))

        return IngredientData(
            name=source.name,
            quantity=_parse_quantity(source.serving_size),
            unit=source.serving_unit or "serving",
            calories=source.calories,
            protein=source.protein,
            carbohydrates=source.carbohydrates,
            fats=source.fats,
        )

    @staticmethod
    def from_search_result(result) -> IngredientData:
        """Convert a NutritionSearchResult into an ingredient"""
        ingredient = IngredientConverter._convert(result)
        logger.debug(f"Converted search result {result.id} to ingredient '{ingredient.name}'")
        return ingredient

    @staticmethod
    def from_food_item(item) -> IngredientData:
        """Convert a logged FoodItem into an ingredient"""
        return IngredientConverter._convert(item)


class ServingSizeCalculator:
    @staticmethod
    def apply_multiplier(multiplier: float, ingredient: IngredientData) -> IngredientData:
        """Return a new ingredient with quantity, calories and macros scaled."""
        if multiplier <= 0:
            raise ServingSizeError(float(multiplier))

        def scale(value: Optional[float]) -> Optional[float]:
            return None if value is None else value * multiplier

        return IngredientData(
            name=ingredient.name,
            quantity=ingredient.quantity * multiplier,
            unit=ingredient.unit,
            calories=ingredient.calories * multiplier,
            protein=scale(ingredient.protein),
            carbohydrates=scale(ingredient.carbohydrates),
            fats=scale(ingredient.fats),
        )
