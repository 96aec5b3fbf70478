"""
Tests for the calorie tracker service.

This test suite covers:
- Loading logs (created on first access) and historical ranges
- Daily goal limits
- Adding, updating and removing food and exercise items
- Nutrition search gating (blank query, offline, missing client)
- Logging a search result scaled by servings
"""

import uuid

import pytest
from sqlalchemy.orm import Session

from app.exceptions import (
    FieldValidationError,
    InvalidGoalError,
    NoCurrentLogError,
    NotFoundError,
    NutritionAPIError,
    ServiceValidationError,
    ServingSizeError,
)
from domain.enums import FoodItemSource
from domain.schemas.log_schemas import (
    ExerciseItemCreate,
    ExerciseItemUpdate,
    FoodItemCreate,
    FoodItemUpdate,
)
from services.calorie_tracker import CalorieTrackerService
from test_constants import TODAY, YESTERDAY, LAST_WEEK, DAILY_GOAL, FOODS
from test_fixtures import FakeNutritionClient, make_network_monitor, make_search_result


def _create(food: str) -> FoodItemCreate:
    return FoodItemCreate(**FOODS[food])


# =============================================================================
# LOGS AND GOALS
# =============================================================================


def test_load_log_creates_once(db_session: Session):
    """
    Verifies:
    - first load creates an empty log for the date
    - second load returns the same log
    """
    tracker = CalorieTrackerService(db_session)

    first = tracker.load_log(TODAY)
    second = tracker.load_log(TODAY)

    assert first.log_id == second.log_id
    assert first.food_items == []
    assert first.daily_goal is None


def test_get_log_missing_raises(db_session: Session):
    with pytest.raises(NotFoundError):
        CalorieTrackerService(db_session).get_log(TODAY)


def test_set_daily_goal(db_session: Session):
    tracker = CalorieTrackerService(db_session)

    log = tracker.set_daily_goal(TODAY, DAILY_GOAL)

    assert log.daily_goal == DAILY_GOAL
    assert tracker.get_log(TODAY).remaining_calories == DAILY_GOAL


@pytest.mark.parametrize("goal", [0, -500])
def test_set_daily_goal_rejects_non_positive(db_session: Session, goal):
    with pytest.raises(InvalidGoalError) as exc_info:
        CalorieTrackerService(db_session).set_daily_goal(TODAY, goal)
    assert exc_info.value.message == "Daily goal must be a positive number."


def test_set_daily_goal_rejects_above_maximum(db_session: Session):
    with pytest.raises(InvalidGoalError) as exc_info:
        CalorieTrackerService(db_session).set_daily_goal(TODAY, 50_001)
    assert "50000" in exc_info.value.message


def test_historical_logs_range(db_session: Session):
    """
    Verifies:
    - only logs within the inclusive range are returned
    - results are ordered oldest first
    """
    tracker = CalorieTrackerService(db_session)
    for log_date in (TODAY, LAST_WEEK, YESTERDAY):
        tracker.load_log(log_date)

    logs = tracker.historical_logs(YESTERDAY, TODAY)
    assert [log.date for log in logs] == [YESTERDAY, TODAY]

    all_logs = tracker.historical_logs(LAST_WEEK, TODAY)
    assert [log.date for log in all_logs] == [LAST_WEEK, YESTERDAY, TODAY]


def test_historical_logs_rejects_inverted_range(db_session: Session):
    with pytest.raises(ServiceValidationError):
        CalorieTrackerService(db_session).historical_logs(TODAY, LAST_WEEK)


def test_summary(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    tracker.set_daily_goal(TODAY, DAILY_GOAL)
    tracker.add_food_item(TODAY, _create("chicken_breast"))
    tracker.add_exercise_item(TODAY, ExerciseItemCreate(name="Walk", calories_burned=65.0))

    summary = CalorieTrackerService.summary(tracker.get_log(TODAY))

    assert summary["total_calories"] == 165.0
    assert summary["total_exercise_calories"] == 65.0
    assert summary["net_calories"] == 100.0
    assert summary["remaining_calories"] == DAILY_GOAL - 100.0
    assert summary["total_protein"] == 31.0


# =============================================================================
# FOOD ITEMS
# =============================================================================


def test_add_food_item_creates_log(db_session: Session):
    tracker = CalorieTrackerService(db_session)

    item = tracker.add_food_item(TODAY, _create("banana"))

    assert item.food_item_id is not None
    assert item.source == FoodItemSource.MANUAL
    assert item.timestamp is not None
    log = tracker.get_log(TODAY)
    assert [food.name for food in log.food_items] == ["Banana"]
    assert log.total_calories == 105.0


def test_update_food_item(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    item = tracker.add_food_item(TODAY, _create("brown_rice"))

    updated = tracker.update_food_item(
        TODAY, item.food_item_id, FoodItemUpdate(calories=324.0, serving_size="1.5")
    )

    assert updated.calories == 324.0
    assert updated.serving_size == "1.5"
    assert updated.name == "Brown Rice"
    assert tracker.get_log(TODAY).total_calories == 324.0


@pytest.mark.parametrize("field", ["name", "calories"])
def test_update_food_item_rejects_clearing_required_field(db_session: Session, field):
    tracker = CalorieTrackerService(db_session)
    item = tracker.add_food_item(TODAY, _create("brown_rice"))

    with pytest.raises(FieldValidationError) as exc_info:
        tracker.update_food_item(TODAY, item.food_item_id, FoodItemUpdate(**{field: None}))

    assert exc_info.value.field == field
    assert exc_info.value.http_status == 400
    assert tracker.get_log(TODAY).total_calories == FOODS["brown_rice"]["calories"]


def test_update_exercise_item_rejects_null_intensity(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    item = tracker.add_exercise_item(TODAY, ExerciseItemCreate(name="Row", calories_burned=300.0))

    with pytest.raises(FieldValidationError) as exc_info:
        tracker.update_exercise_item(
            TODAY, item.exercise_item_id, ExerciseItemUpdate(intensity=None)
        )

    assert exc_info.value.message == "Intensity is required"

def test_update_food_item_without_log(db_session: Session):
    with pytest.raises(NoCurrentLogError):
        CalorieTrackerService(db_session).update_food_item(
            TODAY, uuid.uuid4(), FoodItemUpdate(calories=10.0)
        )


def test_update_unknown_food_item(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    tracker.load_log(TODAY)

    with pytest.raises(NotFoundError):
        tracker.update_food_item(TODAY, uuid.uuid4(), FoodItemUpdate(calories=10.0))


def test_update_food_item_from_other_day_not_found(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    item = tracker.add_food_item(YESTERDAY, _create("banana"))
    tracker.load_log(TODAY)

    with pytest.raises(NotFoundError):
        tracker.remove_food_item(TODAY, item.food_item_id)


def test_remove_food_item(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    banana = tracker.add_food_item(TODAY, _create("banana"))
    tracker.add_food_item(TODAY, _create("greek_yogurt"))

    log = tracker.remove_food_item(TODAY, banana.food_item_id)

    assert [food.name for food in log.food_items] == ["Greek Yogurt"]
    assert log.total_calories == 100.0


def test_invalid_food_item_is_not_saved(db_session: Session):
    tracker = CalorieTrackerService(db_session)

    with pytest.raises(ServiceValidationError):
        tracker.add_food_item(TODAY, FoodItemCreate(name="Mystery", calories=-10.0))

    assert tracker.load_log(TODAY).food_items == []


# =============================================================================
# EXERCISE ITEMS
# =============================================================================


def test_exercise_lifecycle(db_session: Session):
    """
    Verifies:
    - exercise adds to total_exercise_calories
    - partial updates leave other fields alone
    - removal drops it from the log
    """
    tracker = CalorieTrackerService(db_session)
    tracker.add_food_item(TODAY, _create("brown_rice"))
    run = tracker.add_exercise_item(
        TODAY, ExerciseItemCreate(name="Run", calories_burned=245.0, duration_minutes=30)
    )
    assert tracker.get_log(TODAY).net_calories == pytest.approx(-29.0)

    updated = tracker.update_exercise_item(
        TODAY, run.exercise_item_id, ExerciseItemUpdate(notes="intervals")
    )
    assert updated.notes == "intervals"
    assert updated.calories_burned == 245.0

    log = tracker.remove_exercise_item(TODAY, run.exercise_item_id)
    assert log.exercise_items == []
    assert log.net_calories == 216.0


def test_remove_exercise_without_log(db_session: Session):
    with pytest.raises(NoCurrentLogError):
        CalorieTrackerService(db_session).remove_exercise_item(TODAY, uuid.uuid4())


# =============================================================================
# NUTRITION SEARCH
# =============================================================================


def test_search_food_trims_query(db_session: Session):
    client = FakeNutritionClient(results=[make_search_result("banana")])
    tracker = CalorieTrackerService(db_session, nutrition_client=client)

    results = tracker.search_food("  banana ")

    assert client.queries == ["banana"]
    assert results[0].name == "Banana"


@pytest.mark.parametrize("query", ["", "   "])
def test_search_food_blank_query_skips_api(db_session: Session, query):
    client = FakeNutritionClient()
    tracker = CalorieTrackerService(db_session, nutrition_client=client)

    assert tracker.search_food(query) == []
    assert client.queries == []


def test_search_food_offline(db_session: Session):
    client = FakeNutritionClient()
    tracker = CalorieTrackerService(
        db_session, nutrition_client=client, network_monitor=make_network_monitor(False)
    )

    with pytest.raises(NutritionAPIError) as exc_info:
        tracker.search_food("banana")

    assert exc_info.value.kind == NutritionAPIError.OFFLINE
    assert exc_info.value.retryable is True
    assert client.queries == []


def test_search_food_without_client(db_session: Session):
    with pytest.raises(NutritionAPIError) as exc_info:
        CalorieTrackerService(db_session).search_food("banana")
    assert exc_info.value.kind == NutritionAPIError.NETWORK_ERROR


def test_search_food_propagates_api_errors(db_session: Session):
    client = FakeNutritionClient(error=NutritionAPIError(NutritionAPIError.RATE_LIMIT_EXCEEDED))
    tracker = CalorieTrackerService(db_session, nutrition_client=client)

    with pytest.raises(NutritionAPIError) as exc_info:
        tracker.search_food("banana")
    assert exc_info.value.http_status == 429


def test_add_search_result_scales_servings(db_session: Session):
    """
    Verifies:
    - calories, macros and serving size are multiplied
    - the item is tagged as coming from the API
    """
    tracker = CalorieTrackerService(db_session)

    item = tracker.add_search_result(TODAY, make_search_result("chicken_breast"), servings=1.5)

    assert item.source == FoodItemSource.API
    assert item.calories == pytest.approx(247.5)
    assert item.protein == pytest.approx(46.5)
    assert item.serving_size == "150.0"
    assert item.serving_unit == "g"


def test_add_search_result_rejects_zero_servings(db_session: Session):
    tracker = CalorieTrackerService(db_session)

    with pytest.raises(ServingSizeError):
        tracker.add_search_result(TODAY, make_search_result(), servings=0)
