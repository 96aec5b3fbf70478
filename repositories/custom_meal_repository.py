"""
Custom Meal Repository - Data access for saved meals and their ingredients
"""

from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import CustomMeal


class CustomMealRepository(BaseRepository[CustomMeal]):
    """Repository for custom meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, CustomMeal)

    def _query(self):
        return self.db.query(CustomMeal).options(selectinload(CustomMeal.ingredients))

    def list_recent(self) -> List[CustomMeal]:
        """All meals, most recently used first"""
        return self._query().order_by(CustomMeal.last_used_at.desc()).all()

    def search_by_name(self, query: str) -> List[CustomMeal]:
        """Case-insensitive substring match on the meal name"""
        return (
            self._query()
            .filter(func.lower(CustomMeal.name).contains(query.lower(), autoescape=True))
            .order_by(CustomMeal.last_used_at.desc())
            .all()
        )
