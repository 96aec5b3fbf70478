"""
Calorie estimators.

- Daily needs: Mifflin-St Jeor BMR scaled by an activity multiplier, minus
  the deficit for a weekly weight-loss target (3500 kcal per pound).
- Exercise: MET x body weight (kg) x duration (hours).
"""

from typing import Dict, Tuple

from domain.enums import Sex, ActivityLevel, ExerciseType, ExerciseIntensity

CM_PER_INCH = 2.54
KCAL_PER_POUND = 3500.0

# (light, moderate, vigorous)
MET_VALUES: Dict[ExerciseType, Tuple[float, float, float]] = {
    ExerciseType.WALKING: (2.8, 3.8, 5.0),
    ExerciseType.RUNNING: (6.0, 7.0, 8.5),
    ExerciseType.CYCLING: (4.0, 6.8, 10.0),
    ExerciseType.STRENGTH_TRAINING: (3.0, 5.0, 6.0),
    ExerciseType.YOGA: (2.0, 3.0, 4.0),
    ExerciseType.SWIMMING: (5.8, 7.0, 9.5),
    ExerciseType.ROWING: (4.8, 7.0, 8.5),
    ExerciseType.ELLIPTICAL: (4.8, 6.0, 7.5),
    ExerciseType.HIIT: (6.0, 8.0, 10.0),
    ExerciseType.HIKING: (5.0, 6.5, 8.0),
    ExerciseType.SPORTS: (4.0, 6.0, 8.0),
}

_INTENSITY_INDEX = {
    ExerciseIntensity.LIGHT: 0,
    ExerciseIntensity.MODERATE: 1,
    ExerciseIntensity.VIGOROUS: 2,
}


class CalorieEstimator:
    """Daily calorie needs from body measurements"""

    @staticmethod
    def feet_inches_to_cm(feet: int, inches: float) -> float:
        return (feet * 12.0 + inches) * CM_PER_INCH

    @staticmethod
    def cm_to_feet_inches(cm: float) -> Tuple[int, float]:
        total_inches = cm / CM_PER_INCH
        feet = int(total_inches / 12.0)
        return feet, total_inches - feet * 12.0

    @staticmethod
    def bmr(weight_kg: float, height_cm: float, age: int, sex: Sex) -> float:
        """Basal metabolic rate; 0 when any measurement is not positive."""
        if weight_kg <= 0 or height_cm <= 0 or age <= 0:
            return 0.0
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        return base + 5 if sex == Sex.MALE else base - 161

    @staticmethod
    def maintenance(
        weight_kg: float, height_cm: float, age: int, sex: Sex, activity: ActivityLevel
    ) -> float:
        bmr = CalorieEstimator.bmr(weight_kg, height_cm, age, sex)
        return max(bmr * activity.multiplier, 0.0)

    @staticmethod
    def suggested_calories(
        weight_kg: float,
        height_cm: float,
        age: int,
        sex: Sex,
        activity: ActivityLevel,
        loss_per_week_lbs: float,
    ) -> float:
        tdee = CalorieEstimator.maintenance(weight_kg, height_cm, age, sex, activity)
        daily_deficit = max(loss_per_week_lbs, 0.0) * KCAL_PER_POUND / 7.0
        return max(tdee - daily_deficit, 0.0)


class ExerciseCalorieEstimator:
    """Calories burned from the MET table"""

    @staticmethod
    def met_value(exercise_type: ExerciseType, intensity: ExerciseIntensity) -> float:
        return MET_VALUES[exercise_type][_INTENSITY_INDEX[intensity]]

    @staticmethod
    def calories(
        exercise_type: ExerciseType,
        intensity: ExerciseIntensity,
        weight_kg: float,
        duration_minutes: float,
    ) -> float:
        met = ExerciseCalorieEstimator.met_value(exercise_type, intensity)
        return met * weight_kg * (duration_minutes / 60.0)
