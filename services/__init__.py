"""Services package - Business logic layer"""

from services.calorie_tracker import CalorieTrackerService
from services.custom_meal_service import CustomMealManager
from services.debounce import Debouncer
from services.estimators import CalorieEstimator, ExerciseCalorieEstimator
from services.ingredient_converter import IngredientConverter, ServingSizeCalculator

__all__ = [
    "CalorieTrackerService",
    "CustomMealManager",
    "Debouncer",
    "CalorieEstimator",
    "ExerciseCalorieEstimator",
    "IngredientConverter",
    "ServingSizeCalculator",
]
