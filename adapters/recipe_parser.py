"""
AI recipe parser backed by an Ollama-compatible chat endpoint.

A free-text description ("chicken stir fry with 2 cups rice") is sent to a
local LLM which answers with a JSON list of ingredients and nutrition
estimates. The answer is extracted, decoded and validated before it reaches
the meal builder.
"""

import logging
import re
import time
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from app.config import settings
from app.exceptions import AIParserError
from domain.schemas.nutrition_schemas import ParsedIngredient, ParsedRecipe

logger = logging.getLogger("countme.recipe_parser")

ALLOWED_UNITS = {"cup", "tbsp", "tsp", "oz", "lb", "gram", "kg", "piece", "serving"}
MIN_DESCRIPTION_LENGTH = 10
MAX_DESCRIPTION_LENGTH = 500
MIN_LETTERS = 5
MAX_INGREDIENTS = 20

SYSTEM_PROMPT = "You are a nutrition data extraction assistant."

_JSON_OBJECT_RE = re.compile(r"\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}")

PROMPT_TEMPLATE = """You are a nutrition data extraction assistant. Parse the following recipe description into structured ingredients with nutritional information.

Recipe: "{description}"

CRITICAL REQUIREMENTS:
1. Return ONLY valid JSON - no markdown, no explanations, no additional text
2. Use the exact schema provided below
3. Normalize ingredient names (e.g., "chicken breast" not "some chicken")
4. Provide realistic nutritional estimates based on standard USDA data
5. If you cannot determine nutritional data with confidence, omit optional fields
6. All numeric values must be positive numbers (no negatives, no zero)

REQUIRED JSON SCHEMA:
{{
  "ingredients": [
    {{
      "name": "string (required, non-empty)",
      "quantity": number (required, positive),
      "unit": "string (required, one of: cup, tbsp, tsp, oz, lb, gram, kg, piece, serving)",
      "calories": number (required, positive),
      "protein": number (optional, grams),
      "carbohydrates": number (optional, grams),
      "fats": number (optional, grams)
    }}
  ],
  "confidence": number (required, 0.0 to 1.0)
}}

EXAMPLE INPUT: "chicken stir fry with rice and broccoli"
EXAMPLE OUTPUT:
{{
  "ingredients": [
    {{"name": "chicken breast", "quantity": 6, "unit": "oz", "calories": 187, "protein": 35, "carbohydrates": 0, "fats": 4}},
    {{"name": "white rice", "quantity": 1, "unit": "cup", "calories": 206, "protein": 4, "carbohydrates": 45, "fats": 0.4}},
    {{"name": "broccoli", "quantity": 1, "unit": "cup", "calories": 31, "protein": 2.5, "carbohydrates": 6, "fats": 0.3}}
  ],
  "confidence": 0.9
}}

Now parse this recipe:
"{description}"

Return ONLY the JSON object, nothing else."""


def validate_description(description: str) -> None:
    """Reject descriptions that are too short, too long or mostly non-letters."""
    trimmed = description.strip()
    if len(trimmed) < MIN_DESCRIPTION_LENGTH:
        raise AIParserError(AIParserError.INSUFFICIENT_DATA)
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        raise AIParserError(AIParserError.INVALID_RESPONSE)
    if sum(1 for ch in trimmed if ch.isalpha()) < MIN_LETTERS:
        raise AIParserError(AIParserError.INSUFFICIENT_DATA)


def sanitize_input(description: str) -> str:
    """Strip sequences that could break out of the quoted prompt."""
    sanitized = (
        description.replace("\\n\\n", " ").replace("```", "").replace('"""', "")
    )
    return sanitized.strip()


def build_prompt(description: str) -> str:
    return PROMPT_TEMPLATE.format(description=description)


def extract_json(content: str) -> str:
    """Pull the JSON object out of model output (markdown fences, prose around it)."""
    cleaned = content.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned.replace("```json", "").replace("```", "")
    elif cleaned.startswith("```"):
        cleaned = cleaned.replace("```", "")
    cleaned = cleaned.strip()

    if not cleaned.startswith("{"):
        match = _JSON_OBJECT_RE.search(cleaned)
        if match:
            cleaned = match.group(0)
    return cleaned


def validate_ingredient(ingredient: ParsedIngredient) -> None:
    if not ingredient.name:
        raise AIParserError(AIParserError.INSUFFICIENT_DATA)
    if ingredient.quantity <= 0 or ingredient.calories <= 0:
        raise AIParserError(AIParserError.INVALID_RESPONSE)
    for value in (ingredient.protein, ingredient.carbohydrates, ingredient.fats):
        if value is not None and value < 0:
            raise AIParserError(AIParserError.INVALID_RESPONSE)
    if ingredient.unit.lower() not in ALLOWED_UNITS:
        raise AIParserError(AIParserError.INVALID_RESPONSE)


def parse_recipe_json(text: str) -> ParsedRecipe:
    try:
        recipe = ParsedRecipe.model_validate_json(text)
    except ValidationError as e:
        logger.debug(f"Recipe JSON did not decode: {e}")
        raise AIParserError(AIParserError.PARSING_FAILED) from e

    if not recipe.ingredients:
        raise AIParserError(AIParserError.INSUFFICIENT_DATA)
    if not 0.0 <= recipe.confidence <= 1.0:
        raise AIParserError(AIParserError.INVALID_RESPONSE)
    if len(recipe.ingredients) > MAX_INGREDIENTS:
        raise AIParserError(AIParserError.PARSING_FAILED)
    for ingredient in recipe.ingredients:
        validate_ingredient(ingredient)
    return recipe


class AIRecipeParser:
    """
    Args:
        endpoint: chat endpoint URL
        model: model name passed to the endpoint
        timeout: request timeout in seconds
        max_attempts: attempts before giving up on retryable failures
        client: optional pre-configured httpx.Client
        sleep: backoff sleep function (tests pass a no-op)
    """

    def __init__(
        self,
        endpoint: str = "http://localhost:11434/api/chat",
        model: str = "gpt-oss:20b",
        timeout: float = 30.0,
        max_attempts: int = 3,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.endpoint = endpoint
        self.model = model
        self.max_attempts = max_attempts
        self.client = client or httpx.Client(timeout=timeout)
        self.sleep = sleep

    @classmethod
    def from_settings(cls) -> "AIRecipeParser":
        return cls(
            endpoint=settings.recipe_parser_endpoint,
            model=settings.recipe_parser_model,
            timeout=settings.recipe_parser_timeout_sec,
            max_attempts=settings.recipe_parser_max_attempts,
        )

    def close(self) -> None:
        self.client.close()

    def parse_recipe(self, description: str) -> ParsedRecipe:
        validate_description(description)
        return self._parse_with_retry(sanitize_input(description))

    def _parse_with_retry(self, description: str) -> ParsedRecipe:
        last_error: Optional[AIParserError] = None
        for attempt in range(self.max_attempts):
            try:
                return self._perform_parsing(description)
            except AIParserError as e:
                last_error = e
                if e.kind == AIParserError.INSUFFICIENT_DATA:
                    raise
                if e.kind == AIParserError.TIMEOUT and attempt > 0:
                    raise
                logger.warning(
                    f"Recipe parse attempt {attempt + 1}/{self.max_attempts} failed: {e.kind}"
                )
                if attempt < self.max_attempts - 1:
                    self.sleep(2.0 ** attempt)
            except Exception as e:
                raise AIParserError(AIParserError.NETWORK_ERROR, reason=str(e)) from e
        raise last_error or AIParserError(AIParserError.PARSING_FAILED)

    def _perform_parsing(self, description: str) -> ParsedRecipe:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(description)},
            ],
            "stream": False,
            "options": {"temperature": 0.3, "num_predict": 1000},
        }

        try:
            response = self.client.post(self.endpoint, json=body)
        except httpx.TimeoutException as e:
            raise AIParserError(AIParserError.TIMEOUT) from e
        except httpx.HTTPError as e:
            raise AIParserError(AIParserError.NETWORK_ERROR, reason=str(e)) from e

        if not 200 <= response.status_code < 300:
            raise AIParserError(AIParserError.INVALID_RESPONSE)

        try:
            content = response.json()["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise AIParserError(AIParserError.INVALID_RESPONSE) from e
        if not isinstance(content, str):
            raise AIParserError(AIParserError.INVALID_RESPONSE)

        return parse_recipe_json(extract_json(content))
