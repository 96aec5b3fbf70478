"""
Daily log models - food and exercise entries recorded for a calendar date.
"""

from sqlalchemy import (
    Column,
    Text,
    Float,
    Date,
    DateTime,
    ForeignKey,
    Uuid,
    CheckConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship, validates
import uuid

from domain.models.database import Base, utcnow
from domain.enums import FoodItemSource, ExerciseType, ExerciseIntensity
from domain import validators


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class DailyLog(Base):
    """
    Aggregate of food and exercise items recorded for one calendar date,
    plus an optional calorie goal.
    """

    __tablename__ = "daily_log"

    log_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    date = Column(Date, nullable=False, unique=True, index=True)
    daily_goal = Column(Float)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    food_items = relationship(
        "FoodItem",
        back_populates="daily_log",
        cascade="all, delete-orphan",
        order_by="FoodItem.timestamp",
    )
    exercise_items = relationship(
        "ExerciseItem",
        back_populates="daily_log",
        cascade="all, delete-orphan",
        order_by="ExerciseItem.timestamp",
    )

    @validates("daily_goal")
    def _validate_goal(self, key, value):
        return validators.validate_goal(value)

    @property
    def total_calories(self) -> float:
        return sum(item.calories for item in self.food_items)

    @property
    def total_exercise_calories(self) -> float:
        return sum(item.calories_burned for item in self.exercise_items)

    @property
    def net_calories(self) -> float:
        return self.total_calories - self.total_exercise_calories

    @property
    def remaining_calories(self):
        """Goal minus net calories, or None when no goal is set."""
        if self.daily_goal is None:
            return None
        return self.daily_goal - self.net_calories

    @property
    def total_protein(self) -> float:
        return sum(item.protein or 0.0 for item in self.food_items)

    @property
    def total_carbohydrates(self) -> float:
        return sum(item.carbohydrates or 0.0 for item in self.food_items)

    @property
    def total_fats(self) -> float:
        return sum(item.fats or 0.0 for item in self.food_items)

    def __repr__(self):
        return f"<DailyLog(id={self.log_id}, date={self.date})>"


class FoodItem(Base):
    """A food entry with calories and optional macros"""

    __tablename__ = "food_item"

    food_item_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    log_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("daily_log.log_id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(Text, nullable=False)
    calories = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utcnow)
    serving_size = Column(Text)
    serving_unit = Column(Text)
    source = Column(
        SQLEnum(
            FoodItemSource,
            values_callable=_enum_values,
            native_enum=False,
            name="food_item_source",
        ),
        nullable=False,
        default=FoodItemSource.MANUAL,
    )
    protein = Column(Float)
    carbohydrates = Column(Float)
    fats = Column(Float)

    daily_log = relationship("DailyLog", back_populates="food_items")

    __table_args__ = (
        CheckConstraint("calories >= 0", name="ck_food_calories_nonneg"),
    )

    @validates("name")
    def _validate_name(self, key, value):
        return validators.validate_name("FoodItem", value)

    @validates("calories")
    def _validate_calories(self, key, value):
        return validators.validate_calories("FoodItem", value)

    @validates("protein", "carbohydrates", "fats")
    def _validate_macro(self, key, value):
        return validators.validate_macro("FoodItem", key, value)

    def __repr__(self):
        return f"<FoodItem(id={self.food_item_id}, name='{self.name}', calories={self.calories})>"


class ExerciseItem(Base):
    """An exercise entry; burned calories are subtracted from the day's intake"""

    __tablename__ = "exercise_item"

    exercise_item_id = Column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    log_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("daily_log.log_id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(Text, nullable=False)
    calories_burned = Column(Float, nullable=False)
    duration_minutes = Column(Float)
    exercise_type = Column(
        SQLEnum(
            ExerciseType,
            values_callable=_enum_values,
            native_enum=False,
            name="exercise_type",
        ),
        nullable=False,
        default=ExerciseType.WALKING,
    )
    intensity = Column(
        SQLEnum(
            ExerciseIntensity,
            values_callable=_enum_values,
            native_enum=False,
            name="exercise_intensity",
        ),
        nullable=False,
        default=ExerciseIntensity.MODERATE,
    )
    notes = Column(Text)
    timestamp = Column(DateTime, nullable=False, default=utcnow)

    daily_log = relationship("DailyLog", back_populates="exercise_items")

    __table_args__ = (
        CheckConstraint("calories_burned >= 0", name="ck_exercise_calories_nonneg"),
    )

    @validates("name")
    def _validate_name(self, key, value):
        return validators.validate_name("ExerciseItem", value)

    @validates("calories_burned")
    def _validate_calories(self, key, value):
        return validators.validate_calories("ExerciseItem", value, field=key)

    @validates("duration_minutes")
    def _validate_duration(self, key, value):
        return validators.validate_duration(value)

    def __repr__(self):
        return f"<ExerciseItem(id={self.exercise_item_id}, name='{self.name}')>"
