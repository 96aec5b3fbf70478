"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.nutrition_schemas import (
    NutritionSearchResult,
    NutritionSearchResponse,
    ParsedIngredient,
    ParsedRecipe,
    RecipeParseRequest,
)
from domain.schemas.log_schemas import (
    FoodItemCreate,
    FoodItemUpdate,
    ManualFoodEntryForm,
    FoodFromSearchRequest,
    FoodItemResponse,
    ExerciseItemCreate,
    ExerciseItemUpdate,
    ExerciseEntryForm,
    ExerciseItemResponse,
    GoalForm,
    DailyLogResponse,
)
from domain.schemas.meal_schemas import (
    IngredientRowForm,
    MealForm,
    IngredientData,
    IngredientResponse,
    CustomMealResponse,
    AddMealToLogRequest,
    AddMealToLogResponse,
    IngredientFromSearchRequest,
)
from domain.schemas.estimate_schemas import (
    CalorieGoalEstimateRequest,
    CalorieGoalEstimateResponse,
    ExerciseEstimateRequest,
    ExerciseEstimateResponse,
)

__all__ = [
    # Nutrition schemas
    "NutritionSearchResult",
    "NutritionSearchResponse",
    "ParsedIngredient",
    "ParsedRecipe",
    "RecipeParseRequest",
    # Log schemas
    "FoodItemCreate",
    "FoodItemUpdate",
    "ManualFoodEntryForm",
    "FoodFromSearchRequest",
    "FoodItemResponse",
    "ExerciseItemCreate",
    "ExerciseItemUpdate",
    "ExerciseEntryForm",
    "ExerciseItemResponse",
    "GoalForm",
    "DailyLogResponse",
    # Meal schemas
    "IngredientRowForm",
    "MealForm",
    "IngredientData",
    "IngredientResponse",
    "CustomMealResponse",
    "AddMealToLogRequest",
    "AddMealToLogResponse",
    "IngredientFromSearchRequest",
    # Estimate schemas
    "CalorieGoalEstimateRequest",
    "CalorieGoalEstimateResponse",
    "ExerciseEstimateRequest",
    "ExerciseEstimateResponse",
]
