"""
Custom meal models - reusable ingredient lists that can be added to a daily log.
"""

from sqlalchemy import (
    Column,
    Text,
    Float,
    Integer,
    DateTime,
    ForeignKey,
    Uuid,
    CheckConstraint,
)
from sqlalchemy.orm import relationship, validates
import uuid

from domain.models.database import Base, utcnow
from domain import validators


class CustomMeal(Base):
    """A saved meal: named list of ingredients plus the number of servings it makes"""

    __tablename__ = "custom_meal"

    custom_meal_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    servings_count = Column(Float, nullable=False, default=1.0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    last_used_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    ingredients = relationship(
        "Ingredient",
        back_populates="custom_meal",
        cascade="all, delete-orphan",
        order_by="Ingredient.position",
    )

    __table_args__ = (
        CheckConstraint("servings_count > 0", name="ck_meal_servings_positive"),
    )

    @validates("name")
    def _validate_name(self, key, value):
        return validators.validate_name("CustomMeal", value)

    @validates("servings_count")
    def _validate_servings(self, key, value):
        return validators.validate_servings(value)

    @property
    def total_calories(self) -> float:
        return sum(ing.calories for ing in self.ingredients)

    @property
    def total_protein(self) -> float:
        return sum(ing.protein or 0.0 for ing in self.ingredients)

    @property
    def total_carbohydrates(self) -> float:
        return sum(ing.carbohydrates or 0.0 for ing in self.ingredients)

    @property
    def total_fats(self) -> float:
        return sum(ing.fats or 0.0 for ing in self.ingredients)

    @property
    def calories_per_serving(self) -> float:
        return self.total_calories / self.servings_count

    @property
    def protein_per_serving(self) -> float:
        return self.total_protein / self.servings_count

    @property
    def carbohydrates_per_serving(self) -> float:
        return self.total_carbohydrates / self.servings_count

    @property
    def fats_per_serving(self) -> float:
        return self.total_fats / self.servings_count

    def __repr__(self):
        return f"<CustomMeal(id={self.custom_meal_id}, name='{self.name}')>"


class Ingredient(Base):
    """One component of a custom meal"""

    __tablename__ = "ingredient"

    ingredient_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    custom_meal_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("custom_meal.custom_meal_id", ondelete="CASCADE"),
        nullable=False,
    )
    position = Column(Integer, nullable=False, default=0)
    name = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(Text, nullable=False)
    calories = Column(Float, nullable=False)
    protein = Column(Float)
    carbohydrates = Column(Float)
    fats = Column(Float)

    custom_meal = relationship("CustomMeal", back_populates="ingredients")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_ingredient_quantity_positive"),
        CheckConstraint("calories >= 0", name="ck_ingredient_calories_nonneg"),
    )

    @validates("name")
    def _validate_name(self, key, value):
        return validators.validate_name("Ingredient", value)

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return validators.validate_quantity(value)

    @validates("unit")
    def _validate_unit(self, key, value):
        return validators.validate_unit(value)

    @validates("calories")
    def _validate_calories(self, key, value):
        return validators.validate_calories("Ingredient", value)

    @validates("protein", "carbohydrates", "fats")
    def _validate_macro(self, key, value):
        return validators.validate_macro("Ingredient", key, value)

    def __repr__(self):
        return f"<Ingredient(id={self.ingredient_id}, name='{self.name}', quantity={self.quantity} {self.unit})>"
