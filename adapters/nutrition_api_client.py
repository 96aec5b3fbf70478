"""
FatSecret nutrition database client.

Searches use the ``foods.search`` method over a signed GET request. Each food
comes back with a one-line description such as
"Per 100g - Calories: 165kcal | Fat: 3.57g | Carbs: 0.00g | Protein: 31.02g",
which is parsed into calories, serving size and macros.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import httpx

from adapters.oauth1 import OAuth1Signer
from app.config import settings
from app.exceptions import NutritionAPIError
from domain.schemas.nutrition_schemas import NutritionSearchResult

logger = logging.getLogger("countme.nutrition_api")

_CALORIES_RE = re.compile(r"Calories:\s*(\d+(?:\.\d+)?)\s*kcal", re.IGNORECASE)
_SERVING_RE = re.compile(r"Per\s+(\d+(?:\.\d+)?)\s*([a-zA-Z]+)", re.IGNORECASE)


def extract_calories(description: str) -> Optional[float]:
    match = _CALORIES_RE.search(description)
    return float(match.group(1)) if match else None


def parse_serving_info(description: str) -> Tuple[Optional[str], Optional[str]]:
    """('100', 'g') from 'Per 100g - ...'; (None, None) when absent."""
    match = _SERVING_RE.search(description)
    if not match:
        return None, None
    return match.group(1), match.group(2)


def extract_macro(description: str, name: str) -> Optional[float]:
    match = re.search(rf"{name}:\s*(\d+(?:\.\d+)?)\s*g", description, re.IGNORECASE)
    return float(match.group(1)) if match else None


def parse_food(food: Dict[str, Any]) -> Optional[NutritionSearchResult]:
    """Convert one FatSecret food entry; None when it has no calorie value."""
    description = food["food_description"]
    calories = extract_calories(description)
    if calories is None:
        return None
    serving_size, serving_unit = parse_serving_info(description)
    return NutritionSearchResult(
        id=str(food["food_id"]),
        name=food["food_name"],
        calories=calories,
        serving_size=serving_size,
        serving_unit=serving_unit,
        brand_name=food.get("brand_name"),
        protein=extract_macro(description, "Protein"),
        carbohydrates=extract_macro(description, "Carbs"),
        fats=extract_macro(description, "Fat"),
    )


def parse_search_response(payload: Any) -> List[NutritionSearchResult]:
    """
    Parse a decoded ``foods.search`` response.

    Raises:
        NutritionAPIError(invalid_data): payload does not have the expected shape
    """
    try:
        foods = (payload.get("foods") or {}).get("food")
        if foods is None:
            return []
        # A single match is returned as an object instead of a list
        if isinstance(foods, dict):
            foods = [foods]
        results = [parse_food(food) for food in foods]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise NutritionAPIError(NutritionAPIError.INVALID_DATA, reason=str(e)) from e
    return [result for result in results if result is not None]


class NutritionAPIClient:
    """
    Args:
        consumer_key / consumer_secret: FatSecret OAuth credentials
        base_url: REST endpoint
        timeout: request timeout in seconds
        client: optional pre-configured httpx.Client (tests pass a MockTransport)
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        base_url: str = "https://platform.fatsecret.com/rest/server.api",
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url
        self.signer = OAuth1Signer(consumer_key, consumer_secret)
        self.client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls) -> "NutritionAPIClient":
        return cls(
            consumer_key=settings.fatsecret_consumer_key,
            consumer_secret=settings.fatsecret_consumer_secret,
            base_url=settings.fatsecret_base_url,
            timeout=settings.nutrition_api_timeout_sec,
        )

    def close(self) -> None:
        self.client.close()

    def search(self, query: str) -> List[NutritionSearchResult]:
        params = self.signer.signed_params(
            "GET",
            self.base_url,
            {"method": "foods.search", "search_expression": query, "format": "json"},
        )

        try:
            response = self.client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(f"Nutrition API timed out for '{query}'")
            raise NutritionAPIError(NutritionAPIError.TIMEOUT) from e
        except httpx.HTTPError as e:
            logger.warning(f"Nutrition API request failed: {e}")
            raise NutritionAPIError(NutritionAPIError.NETWORK_ERROR, reason=str(e)) from e

        if response.status_code == 429:
            raise NutritionAPIError(NutritionAPIError.RATE_LIMIT_EXCEEDED)
        if not 200 <= response.status_code < 300:
            logger.warning(f"Nutrition API returned HTTP {response.status_code}")
            raise NutritionAPIError(NutritionAPIError.INVALID_RESPONSE)

        try:
            payload = response.json()
        except ValueError as e:
            raise NutritionAPIError(NutritionAPIError.INVALID_DATA, reason=str(e)) from e

        if isinstance(payload, dict) and "error" in payload:
            logger.warning(f"Nutrition API error payload: {payload['error']}")
            raise NutritionAPIError(NutritionAPIError.INVALID_RESPONSE)

        results = parse_search_response(payload)
        logger.info(f"Nutrition search '{query}' returned {len(results)} foods")
        return results
