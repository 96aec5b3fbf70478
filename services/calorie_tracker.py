"""
Calorie tracker service.

Daily logs are keyed by calendar date. Loading a date creates its log on
first access, so adding food or exercise never needs a separate "create
log" step. Updating or removing an item requires the log to exist already.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.exceptions import (
    FieldValidationError,
    InvalidGoalError,
    NoCurrentLogError,
    NotFoundError,
    NutritionAPIError,
    ServiceValidationError,
)
from domain.enums import FoodItemSource
from domain.models import DailyLog, FoodItem, ExerciseItem
from domain.schemas.log_schemas import (
    FoodItemCreate,
    FoodItemUpdate,
    ExerciseItemCreate,
    ExerciseItemUpdate,
)
from domain.schemas.nutrition_schemas import NutritionSearchResult
from domain.validators import MAX_DAILY_GOAL
from repositories.daily_log_repository import DailyLogRepository
from services.ingredient_converter import IngredientConverter, ServingSizeCalculator

logger = logging.getLogger("countme.tracker")

# Columns a PATCH may change but never clear
REQUIRED_FOOD_FIELDS = {"name": "Food name", "calories": "Calories"}
REQUIRED_EXERCISE_FIELDS = {
    "name": "Exercise name",
    "calories_burned": "Calories burned",
    "exercise_type": "Exercise type",
    "intensity": "Intensity",
}


def _changes(data, required: Dict[str, str]) -> Dict[str, Any]:
    """Fields set on a partial update; explicit nulls on required fields are rejected."""
    changes = data.model_dump(exclude_unset=True)
    for field, label in required.items():
        if field in changes and changes[field] is None:
            raise FieldValidationError(field, f"{label} is required")
    return changes


class CalorieTrackerService:
    """
    Food, exercise and goal operations on daily logs.

    Args:
        db: Database session
        nutrition_client: object with ``search(query)`` returning
            NutritionSearchResult items (optional; search fails without it)
        network_monitor: object with an ``is_connected`` flag (optional)
    """

    def __init__(self, db: Session, nutrition_client=None, network_monitor=None):
        self.db = db
        self.logs = DailyLogRepository(db)
        self.nutrition_client = nutrition_client
        self.network_monitor = network_monitor

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def load_log(self, log_date: date) -> DailyLog:
        """Return the log for a date, creating an empty one when missing."""
        log = self.logs.get_by_date(log_date)
        if log is None:
            log = self.logs.create(DailyLog(date=log_date))
            logger.info(f"Created daily log for {log_date}")
        return log

    def get_log(self, log_date: date) -> DailyLog:
        log = self.logs.get_by_date(log_date)
        if log is None:
            raise NotFoundError(f"No daily log found for {log_date.isoformat()}")
        return log

    def _current_log(self, log_date: date) -> DailyLog:
        log = self.logs.get_by_date(log_date)
        if log is None:
            raise NoCurrentLogError()
        return log

    @staticmethod
    def summary(log: DailyLog) -> Dict[str, Any]:
        """Totals for a log (missing macros count as zero)."""
        return {
            "date": log.date,
            "daily_goal": log.daily_goal,
            "total_calories": log.total_calories,
            "total_exercise_calories": log.total_exercise_calories,
            "net_calories": log.net_calories,
            "remaining_calories": log.remaining_calories,
            "total_protein": log.total_protein,
            "total_carbohydrates": log.total_carbohydrates,
            "total_fats": log.total_fats,
        }

    def historical_logs(self, start: date, end: date) -> List[DailyLog]:
        """Logs from start to end inclusive, oldest first."""
        if start > end:
            raise ServiceValidationError(
                "Start date must be on or before end date",
                details={"start": start.isoformat(), "end": end.isoformat()},
            )
        return self.logs.get_range(start, end)

    def set_daily_goal(self, log_date: date, calories: float) -> DailyLog:
        if calories is None or calories <= 0:
            raise InvalidGoalError()
        if calories > MAX_DAILY_GOAL:
            raise InvalidGoalError(
                f"Daily goal must be {int(MAX_DAILY_GOAL)} calories or less."
            )

        log = self.load_log(log_date)
        log.daily_goal = calories
        log = self.logs.update(log)
        logger.info(f"Daily goal for {log_date} set to {calories}")
        return log

    # ------------------------------------------------------------------
    # Food items
    # ------------------------------------------------------------------

    def _rollback_on_error(self, func, *args):
        try:
            return func(*args)
        except Exception:
            self.logs.rollback()
            raise

    def add_food_item(self, log_date: date, data: FoodItemCreate) -> FoodItem:
        log = self.load_log(log_date)
        fields = data.model_dump(exclude_none=True)
        item = FoodItem(**fields)
        self._rollback_on_error(self.logs.add_food_items, log, [item])
        logger.info(f"Added food item '{item.name}' ({item.calories} kcal) to {log_date}")
        return item

    def update_food_item(self, log_date: date, item_id: UUID, data: FoodItemUpdate) -> FoodItem:
        log = self._current_log(log_date)
        item = self.logs.get_food_item(log.log_id, item_id)
        if item is None:
            raise NotFoundError(f"Food item {item_id} not found in log for {log_date}")
        changes = _changes(data, REQUIRED_FOOD_FIELDS)

        def apply():
            for field, value in changes.items():
                setattr(item, field, value)
            return self.logs.update(item)

        return self._rollback_on_error(apply)

    def remove_food_item(self, log_date: date, item_id: UUID) -> DailyLog:
        log = self._current_log(log_date)
        item = self.logs.get_food_item(log.log_id, item_id)
        if item is None:
            raise NotFoundError(f"Food item {item_id} not found in log for {log_date}")
        log = self.logs.remove_item(log, item)
        logger.info(f"Removed food item {item_id} from {log_date}")
        return log

    # ------------------------------------------------------------------
    # Exercise items
    # ------------------------------------------------------------------

    def add_exercise_item(self, log_date: date, data: ExerciseItemCreate) -> ExerciseItem:
        log = self.load_log(log_date)
        item = ExerciseItem(**data.model_dump(exclude_none=True))
        self._rollback_on_error(self.logs.add_exercise_item, log, item)
        logger.info(
            f"Added exercise '{item.name}' ({item.calories_burned} kcal burned) to {log_date}"
        )
        return item

    def update_exercise_item(
        self, log_date: date, item_id: UUID, data: ExerciseItemUpdate
    ) -> ExerciseItem:
        log = self._current_log(log_date)
        item = self.logs.get_exercise_item(log.log_id, item_id)
        if item is None:
            raise NotFoundError(f"Exercise item {item_id} not found in log for {log_date}")
        changes = _changes(data, REQUIRED_EXERCISE_FIELDS)

        def apply():
            for field, value in changes.items():
                setattr(item, field, value)
            return self.logs.update(item)

        return self._rollback_on_error(apply)

    def remove_exercise_item(self, log_date: date, item_id: UUID) -> DailyLog:
        log = self._current_log(log_date)
        item = self.logs.get_exercise_item(log.log_id, item_id)
        if item is None:
            raise NotFoundError(f"Exercise item {item_id} not found in log for {log_date}")
        log = self.logs.remove_item(log, item)
        logger.info(f"Removed exercise item {item_id} from {log_date}")
        return log

    # ------------------------------------------------------------------
    # Nutrition search
    # ------------------------------------------------------------------

    def search_food(self, query: str) -> List[NutritionSearchResult]:
        """Search the nutrition database; a blank query returns no results."""
        if not query or not query.strip():
            return []
        if self.network_monitor is not None and not self.network_monitor.is_connected:
            raise NutritionAPIError(NutritionAPIError.OFFLINE)
        if self.nutrition_client is None:
            raise NutritionAPIError(
                NutritionAPIError.NETWORK_ERROR, reason="nutrition search is not configured"
            )

        try:
            results = self.nutrition_client.search(query.strip())
        except NutritionAPIError as e:
            logger.warning(f"Food search for '{query}' failed: {e.kind}")
            raise
        logger.debug(f"Food search for '{query}' returned {len(results)} results")
        return results

    def add_search_result(
        self, log_date: date, result: NutritionSearchResult, servings: float = 1.0
    ) -> FoodItem:
        """Log a search result scaled by the number of servings."""
        scaled = ServingSizeCalculator.apply_multiplier(
            servings, IngredientConverter.from_search_result(result)
        )
        data = FoodItemCreate(
            name=scaled.name,
            calories=scaled.calories,
            serving_size=str(scaled.quantity),
            serving_unit=scaled.unit,
            source=FoodItemSource.API,
            protein=scaled.protein,
            carbohydrates=scaled.carbohydrates,
            fats=scaled.fats,
        )
        return self.add_food_item(log_date, data)
