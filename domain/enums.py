"""
Domain enums for CountMe application.
Contains all enumeration types used across the domain models.
"""

import enum


class FoodItemSource(str, enum.Enum):
    """Where a logged food item came from"""

    API = "api"
    MANUAL = "manual"
    CUSTOM_MEAL = "customMeal"


class ExerciseType(str, enum.Enum):
    """Exercise categories with MET-based calorie estimates"""

    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    STRENGTH_TRAINING = "strengthTraining"
    YOGA = "yoga"
    SWIMMING = "swimming"
    ROWING = "rowing"
    ELLIPTICAL = "elliptical"
    HIIT = "hiit"
    HIKING = "hiking"
    SPORTS = "sports"

    @property
    def display_name(self) -> str:
        if self is ExerciseType.STRENGTH_TRAINING:
            return "Strength Training"
        if self is ExerciseType.HIIT:
            return "HIIT"
        return self.value.capitalize()


class ExerciseIntensity(str, enum.Enum):
    """Perceived exercise intensity"""

    LIGHT = "light"
    MODERATE = "moderate"
    VIGOROUS = "vigorous"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Sex(str, enum.Enum):
    """Biological sex used by the Mifflin-St Jeor equation"""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, enum.Enum):
    """Daily activity levels for maintenance calorie estimates"""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"

    @property
    def multiplier(self) -> float:
        return {
            ActivityLevel.SEDENTARY: 1.2,
            ActivityLevel.LIGHT: 1.375,
            ActivityLevel.MODERATE: 1.5,
            ActivityLevel.VERY: 1.9,
        }[self]
