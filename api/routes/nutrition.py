"""Nutrition database search routes"""

from fastapi import APIRouter, Depends, Query
import logging

from api.dependencies import get_tracker
from domain.schemas.nutrition_schemas import NutritionSearchResponse
from services.calorie_tracker import CalorieTrackerService

router = APIRouter(prefix="/nutrition", tags=["Nutrition Search"])
logger = logging.getLogger("countme.api.nutrition")


@router.get("/search", response_model=NutritionSearchResponse)
def search_foods(
    q: str = Query("", description="Food name to search for"),
    tracker: CalorieTrackerService = Depends(get_tracker),
):
    """
    Search the nutrition database.

    A blank query returns an empty result list without calling the API.
    Network failures come back as retryable errors.
    """
    results = tracker.search_food(q)
    return NutritionSearchResponse(query=q, results=results, count=len(results))
