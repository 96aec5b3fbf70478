"""
Search-as-you-type over WebSockets.

Every text frame is the current content of the search box. Frames are
debounced: the query only runs once the user pauses typing. A blank frame
clears the results immediately and cancels any pending search.

Server frames:
    {"type": "results", "query": ..., "results": [...]}
    {"type": "cleared", "results": []}
    {"type": "error", "query": ..., "error": {"code", "message", "retryable"?}}
"""

import logging
from typing import Awaitable, Callable, List

import anyio
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from api.dependencies import get_meal_manager, get_tracker
from app.config import settings
from app.exceptions import CountMeError
from domain.schemas.meal_schemas import CustomMealResponse
from services.calorie_tracker import CalorieTrackerService
from services.custom_meal_service import CustomMealManager
from services.debounce import Debouncer

router = APIRouter(tags=["Realtime Search"])
logger = logging.getLogger("countme.api.realtime")


async def _serve_debounced(
    websocket: WebSocket,
    delay_ms: int,
    search: Callable[[str], List[dict]],
) -> None:
    async def run(query: str) -> None:
        try:
            results = await anyio.to_thread.run_sync(search, query)
        except CountMeError as e:
            await websocket.send_json({"type": "error", "query": query, "error": e.to_dict()})
            return
        await websocket.send_json({"type": "results", "query": query, "results": results})

    debouncer = Debouncer(delay_ms / 1000.0, run)
    await websocket.accept()
    try:
        while True:
            query = (await websocket.receive_text()).strip()
            if not query:
                debouncer.cancel()
                await websocket.send_json({"type": "cleared", "results": []})
                continue
            debouncer.submit(query)
    except WebSocketDisconnect:
        logger.debug("Search socket closed")
    finally:
        debouncer.cancel()


@router.websocket("/ws/food-search")
async def food_search_socket(
    websocket: WebSocket,
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    """Debounced nutrition database search"""

    def search(query: str) -> List[dict]:
        return [result.model_dump() for result in tracker.search_food(query)]

    await _serve_debounced(websocket, settings.food_search_debounce_ms, search)


@router.websocket("/ws/meal-search")
async def meal_search_socket(
    websocket: WebSocket,
    manager: CustomMealManager = Depends(get_meal_manager),
):
    """Debounced custom meal library search"""

    def search(query: str) -> List[dict]:
        return [
            CustomMealResponse.model_validate(meal).model_dump(mode="json")
            for meal in manager.search_custom_meals(query)
        ]

    await _serve_debounced(websocket, settings.meal_search_debounce_ms, search)
