"""
Tests for the debounced search WebSockets.

Covers:
- Food search: only the last query of a burst is sent to the API
- Blank input clears results immediately
- API errors arrive as error frames and keep the socket open
- Custom meal search over the library
"""

import pytest

from api.dependencies import get_nutrition_client
from app.config import settings
from app.exceptions import NutritionAPIError
from main import app
from test_fixtures import FakeNutritionClient, client, make_meal_form, make_search_result


@pytest.fixture(autouse=True)
def short_debounce(monkeypatch):
    monkeypatch.setattr(settings, "food_search_debounce_ms", 100)
    monkeypatch.setattr(settings, "meal_search_debounce_ms", 100)


def _use_nutrition_client(fake: FakeNutritionClient) -> FakeNutritionClient:
    app.dependency_overrides[get_nutrition_client] = lambda: fake
    return fake


def test_food_search_debounces_typing():
    """
    Verifies:
    - a burst of keystrokes triggers one search
    - the search uses the final text
    """
    fake = _use_nutrition_client(FakeNutritionClient(results=[make_search_result("chicken_breast")]))

    with client.websocket_connect("/ws/food-search") as ws:
        ws.send_text("ch")
        ws.send_text("chick")
        ws.send_text("chicken")
        frame = ws.receive_json()

    assert frame["type"] == "results"
    assert frame["query"] == "chicken"
    assert [r["name"] for r in frame["results"]] == ["Chicken Breast"]
    assert fake.queries == ["chicken"]


def test_food_search_blank_clears():
    fake = _use_nutrition_client(FakeNutritionClient())

    with client.websocket_connect("/ws/food-search") as ws:
        ws.send_text("ban")
        ws.send_text("   ")
        frame = ws.receive_json()

    assert frame == {"type": "cleared", "results": []}
    assert fake.queries == []


def test_food_search_error_frame_keeps_socket_open():
    fake = _use_nutrition_client(FakeNutritionClient(error=NutritionAPIError(NutritionAPIError.TIMEOUT)))

    with client.websocket_connect("/ws/food-search") as ws:
        ws.send_text("banana")
        error_frame = ws.receive_json()

        fake.error = None
        fake.results = [make_search_result("banana")]
        ws.send_text("banana bread")
        results_frame = ws.receive_json()

    assert error_frame["type"] == "error"
    assert error_frame["query"] == "banana"
    assert error_frame["error"]["code"] == "NUTRITION_API_TIMEOUT"
    assert error_frame["error"]["retryable"] is True
    assert results_frame["type"] == "results"
    assert results_frame["query"] == "banana bread"


def test_meal_search():
    client.post("/meals", json=make_meal_form(name="Chicken Rice Bowl"))
    client.post("/meals", json=make_meal_form(name="Banana Smoothie", foods=("banana",)))

    with client.websocket_connect("/ws/meal-search") as ws:
        ws.send_text("rice")
        frame = ws.receive_json()

    assert frame["type"] == "results"
    assert [meal["name"] for meal in frame["results"]] == ["Chicken Rice Bowl"]
    assert frame["results"][0]["total_calories"] == pytest.approx(381.0)
