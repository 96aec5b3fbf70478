"""
Daily Log Repository - Data access for daily logs and their food/exercise items
"""

from typing import List, Optional
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import DailyLog, FoodItem, ExerciseItem


class DailyLogRepository(BaseRepository[DailyLog]):
    """Repository for daily log data access"""

    def __init__(self, db: Session):
        super().__init__(db, DailyLog)

    def _query(self):
        return self.db.query(DailyLog).options(
            selectinload(DailyLog.food_items),
            selectinload(DailyLog.exercise_items),
        )

    def get_by_date(self, log_date: date) -> Optional[DailyLog]:
        """Get the log for a calendar date"""
        return self._query().filter(DailyLog.date == log_date).first()

    def get_or_create(self, log_date: date) -> DailyLog:
        """Get the log for a date, creating an empty one when missing"""
        log = self.get_by_date(log_date)
        if log is None:
            log = self.create(DailyLog(date=log_date))
        return log

    def get_range(self, start: date, end: date) -> List[DailyLog]:
        """Logs between start and end (inclusive), oldest first"""
        return (
            self._query()
            .filter(DailyLog.date >= start, DailyLog.date <= end)
            .order_by(DailyLog.date.asc())
            .all()
        )

    def get_food_item(self, log_id: UUID, item_id: UUID) -> Optional[FoodItem]:
        return (
            self.db.query(FoodItem)
            .filter(FoodItem.log_id == log_id, FoodItem.food_item_id == item_id)
            .first()
        )

    def get_exercise_item(self, log_id: UUID, item_id: UUID) -> Optional[ExerciseItem]:
        return (
            self.db.query(ExerciseItem)
            .filter(
                ExerciseItem.log_id == log_id,
                ExerciseItem.exercise_item_id == item_id,
            )
            .first()
        )

    def add_food_items(self, log: DailyLog, items: List[FoodItem]) -> DailyLog:
        """Append food items to a log in one transaction"""
        log.food_items.extend(items)
        return self.update(log)

    def add_exercise_item(self, log: DailyLog, item: ExerciseItem) -> DailyLog:
        log.exercise_items.append(item)
        return self.update(log)

    def remove_item(self, log: DailyLog, item) -> DailyLog:
        """Delete a food or exercise item belonging to the log"""
        items = log.food_items if isinstance(item, FoodItem) else log.exercise_items
        # delete-orphan cascade removes the row
        items.remove(item)
        self.db.commit()
        self.db.refresh(log)
        return log
