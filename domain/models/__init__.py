"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.daily_log import DailyLog, FoodItem, ExerciseItem
from domain.models.custom_meal import CustomMeal, Ingredient

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Daily log models
    "DailyLog",
    "FoodItem",
    "ExerciseItem",
    # Custom meal models
    "CustomMeal",
    "Ingredient",
]
