"""
API dependencies for dependency injection.

External clients live on ``app.state`` (created in the application lifespan).
When the lifespan has not run, e.g. a bare TestClient, they are created on
first use. Tests replace them through ``app.dependency_overrides``.
"""

from typing import Generator, Optional
from fastapi import Depends
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from domain.models import get_db_session
from adapters.nutrition_api_client import NutritionAPIClient
from adapters.recipe_parser import AIRecipeParser
from adapters.network_monitor import NetworkMonitor
from services.calorie_tracker import CalorieTrackerService
from services.custom_meal_service import CustomMealManager


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            ...
    """
    yield from get_db_session()


def get_nutrition_client(conn: HTTPConnection) -> NutritionAPIClient:
    client = getattr(conn.app.state, "nutrition_client", None)
    if client is None:
        client = NutritionAPIClient.from_settings()
        conn.app.state.nutrition_client = client
    return client


def get_recipe_parser(conn: HTTPConnection) -> AIRecipeParser:
    parser = getattr(conn.app.state, "recipe_parser", None)
    if parser is None:
        parser = AIRecipeParser.from_settings()
        conn.app.state.recipe_parser = parser
    return parser


def get_network_monitor(conn: HTTPConnection) -> Optional[NetworkMonitor]:
    """The running monitor, or None when monitoring is disabled."""
    return getattr(conn.app.state, "network_monitor", None)


def get_tracker(
    db: Session = Depends(get_db),
    nutrition_client=Depends(get_nutrition_client),
    network_monitor=Depends(get_network_monitor),
) -> CalorieTrackerService:
    return CalorieTrackerService(
        db, nutrition_client=nutrition_client, network_monitor=network_monitor
    )


def get_meal_manager(
    db: Session = Depends(get_db),
    recipe_parser=Depends(get_recipe_parser),
    network_monitor=Depends(get_network_monitor),
) -> CustomMealManager:
    return CustomMealManager(
        db, recipe_parser=recipe_parser, network_monitor=network_monitor
    )
