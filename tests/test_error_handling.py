"""
Error handling and edge case tests.

This test suite covers:
- The error envelope produced by each exception handler
- Request validation failures (bad dates, bad enums, bad UUIDs)
- Unexpected exceptions turning into a generic 500
- Transaction rollback after a failed write
- Error serialization helpers on the exception classes
"""

from datetime import date
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.dependencies import get_meal_manager
from api.middleware import make_serializable
from app.exceptions import (
    AIParserError,
    ConfirmationRequiredError,
    CountMeError,
    FieldValidationError,
    NutritionAPIError,
    ServiceValidationError,
)
from domain.models import DailyLog
from main import app
from services.calorie_tracker import CalorieTrackerService
from domain.schemas.log_schemas import FoodItemCreate
from test_constants import TODAY
from test_fixtures import client


# =============================================================================
# ERROR ENVELOPE
# =============================================================================


def test_domain_error_envelope():
    """
    Verifies:
    - success is false
    - error carries code, message and field
    - timestamp is present
    """
    response = client.post(f"/logs/{TODAY}/food/manual", json={"name": "", "calories": "100"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == {
        "message": "Food name is required",
        "code": "FIELD_VALIDATION_ERROR",
        "field": "name",
    }
    assert "timestamp" in body


def test_request_validation_error_envelope():
    response = client.get("/logs/not-a-date")

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Request validation failed"
    assert error["details"][0]["loc"] == ["path", "log_date"]


def test_invalid_enum_rejected():
    response = client.post(
        "/estimates/exercise",
        json={"exercise_type": "skydiving", "duration_minutes": 10, "weight_kg": 70},
    )
    assert response.status_code == 422


def test_invalid_uuid_rejected():
    response = client.get("/meals/not-a-uuid")
    assert response.status_code == 422


def test_unknown_route_uses_http_error_envelope():
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "HTTP_404"


def test_unexpected_exception_returns_500():
    class ExplodingManager:
        def search_custom_meals(self, query):
            raise RuntimeError("database connection lost")

    app.dependency_overrides[get_meal_manager] = lambda: ExplodingManager()
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.get("/meals")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_SERVER_ERROR"
    assert error["message"] == "An unexpected error occurred"
    # internal details are not leaked
    assert "database connection lost" not in response.text


# =============================================================================
# ROLLBACK
# =============================================================================


def test_failed_write_is_rolled_back(db_session: Session, monkeypatch):
    """
    Verifies:
    - an error during commit leaves the session usable
    - no partial food item is stored
    """
    tracker = CalorieTrackerService(db_session)
    tracker.load_log(TODAY)

    def failing_update(entity):
        db_session.flush()
        raise RuntimeError("commit failed")

    monkeypatch.setattr(tracker.logs, "update", failing_update)

    with pytest.raises(RuntimeError):
        tracker.add_food_item(TODAY, FoodItemCreate(name="Pizza", calories=285.0))

    monkeypatch.undo()
    db_session.expire_all()
    log = db_session.query(DailyLog).filter(DailyLog.date == TODAY).one()
    assert log.food_items == []


def test_duplicate_date_not_created_twice(db_session: Session):
    tracker = CalorieTrackerService(db_session)
    tracker.load_log(date(2025, 1, 1))
    tracker.load_log(date(2025, 1, 1))

    assert db_session.query(DailyLog).count() == 1


# =============================================================================
# EXCEPTION SERIALIZATION
# =============================================================================


def test_field_error_to_dict():
    error = FieldValidationError("calories", "Calories value is required")
    assert error.to_dict() == {
        "message": "Calories value is required",
        "code": "FIELD_VALIDATION_ERROR",
        "field": "calories",
    }
    assert error.http_status == 400


def test_network_errors_are_retryable():
    assert NutritionAPIError(NutritionAPIError.TIMEOUT).retryable is True
    assert NutritionAPIError(NutritionAPIError.OFFLINE).http_status == 503
    assert NutritionAPIError(NutritionAPIError.INVALID_DATA).retryable is False
    assert NutritionAPIError(NutritionAPIError.INVALID_DATA).http_status == 502
    assert AIParserError(AIParserError.PARSING_FAILED).retryable is False
    assert "retryable" not in AIParserError(AIParserError.PARSING_FAILED).to_dict()
    assert AIParserError(AIParserError.TIMEOUT).to_dict()["retryable"] is True


def test_network_error_message_includes_reason():
    error = NutritionAPIError(NutritionAPIError.NETWORK_ERROR, reason="connection reset")
    assert error.message == (
        "Network error occurred: connection reset. Please check your internet connection."
    )


def test_error_codes():
    assert ServiceValidationError().code == "SERVICE_VALIDATION_ERROR"
    assert ServiceValidationError("bad", code="CUSTOM").code == "CUSTOM"
    assert ConfirmationRequiredError("sure?").http_status == 409
    assert CountMeError().http_status == 500


def test_make_serializable():
    meal_id = uuid.uuid4()
    payload = {"ids": (meal_id,), "when": date(2025, 3, 14), "n": 1.5, "none": None}

    assert make_serializable(payload) == {
        "ids": [str(meal_id)],
        "when": "2025-03-14",
        "n": 1.5,
        "none": None,
    }
