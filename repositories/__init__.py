"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.daily_log_repository import DailyLogRepository
from repositories.custom_meal_repository import CustomMealRepository

__all__ = [
    "BaseRepository",
    "DailyLogRepository",
    "CustomMealRepository",
]
