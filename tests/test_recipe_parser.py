"""
Tests for the AI recipe parser.

This test suite covers:
- Description checks and prompt sanitizing
- JSON extraction from model output (fences, surrounding prose)
- Ingredient and confidence validation
- Retry behaviour with exponential backoff
- Transport error mapping

The chat endpoint is an httpx.MockTransport returning Ollama-shaped bodies.
"""

import json

import httpx
import pytest

from adapters.recipe_parser import (
    AIRecipeParser,
    build_prompt,
    extract_json,
    parse_recipe_json,
    sanitize_input,
    validate_description,
)
from app.exceptions import AIParserError
from test_fixtures import make_parsed_recipe, ollama_response

DESCRIPTION = "chicken stir fry with 2 cups rice and broccoli"
RECIPE_JSON = make_parsed_recipe().model_dump_json()


class ScriptedEndpoint:
    """Replays a list of responses (or exceptions) and records request bodies."""

    def __init__(self, *steps):
        self.steps = list(steps)
        self.bodies = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(json.loads(request.content))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


def _parser(endpoint, sleeps=None, max_attempts=3) -> AIRecipeParser:
    return AIRecipeParser(
        endpoint="http://ollama.test/api/chat",
        model="test-model",
        max_attempts=max_attempts,
        client=httpx.Client(transport=httpx.MockTransport(endpoint)),
        sleep=(sleeps.append if sleeps is not None else (lambda seconds: None)),
    )


def _ok(content: str = RECIPE_JSON) -> httpx.Response:
    return httpx.Response(200, json=ollama_response(content))


# =============================================================================
# INPUT CHECKS
# =============================================================================


@pytest.mark.parametrize("description", ["", "soup", "12345 67890 !!", "   a b c   "])
def test_description_too_thin(description):
    with pytest.raises(AIParserError) as exc_info:
        validate_description(description)
    assert exc_info.value.kind == AIParserError.INSUFFICIENT_DATA


def test_description_too_long():
    with pytest.raises(AIParserError) as exc_info:
        validate_description("rice " * 120)
    assert exc_info.value.kind == AIParserError.INVALID_RESPONSE


def test_sanitize_input_strips_prompt_breakers():
    assert sanitize_input('  pasta ```with``` """sauce"""  ') == "pasta with sauce"


def test_build_prompt_embeds_description():
    prompt = build_prompt(DESCRIPTION)

    assert prompt.count(f'"{DESCRIPTION}"') == 2
    assert '"ingredients": [' in prompt
    assert "{{" not in prompt


# =============================================================================
# JSON EXTRACTION AND VALIDATION
# =============================================================================


def test_extract_json_from_markdown_fence():
    content = f"```json\n{RECIPE_JSON}\n```"
    assert json.loads(extract_json(content)) == json.loads(RECIPE_JSON)


def test_extract_json_from_prose():
    content = 'Sure! Here is the data: {"ingredients": [{"name": "egg", "quantity": 2, "unit": "piece", "calories": 144}], "confidence": 0.8} Enjoy.'
    extracted = json.loads(extract_json(content))

    assert extracted["confidence"] == 0.8
    assert extracted["ingredients"][0]["name"] == "egg"


def test_parse_recipe_json_valid():
    recipe = parse_recipe_json(RECIPE_JSON)

    assert [ing.name for ing in recipe.ingredients] == ["chicken breast", "white rice", "broccoli"]
    assert recipe.confidence == 0.9


@pytest.mark.parametrize(
    "text, kind",
    [
        ("not json at all", AIParserError.PARSING_FAILED),
        ('{"confidence": 0.9}', AIParserError.PARSING_FAILED),
        ('{"ingredients": [], "confidence": 0.9}', AIParserError.INSUFFICIENT_DATA),
        (
            '{"ingredients": [{"name": "egg", "quantity": 2, "unit": "piece", "calories": 144}], "confidence": 1.5}',
            AIParserError.INVALID_RESPONSE,
        ),
        (
            '{"ingredients": [{"name": "egg", "quantity": 0, "unit": "piece", "calories": 144}], "confidence": 0.9}',
            AIParserError.INVALID_RESPONSE,
        ),
        (
            '{"ingredients": [{"name": "egg", "quantity": 2, "unit": "dozen", "calories": 144}], "confidence": 0.9}',
            AIParserError.INVALID_RESPONSE,
        ),
        (
            '{"ingredients": [{"name": "egg", "quantity": 2, "unit": "piece", "calories": 144, "fats": -1}], "confidence": 0.9}',
            AIParserError.INVALID_RESPONSE,
        ),
        (
            '{"ingredients": [{"name": "", "quantity": 2, "unit": "piece", "calories": 144}], "confidence": 0.9}',
            AIParserError.INSUFFICIENT_DATA,
        ),
    ],
)
def test_parse_recipe_json_rejects(text, kind):
    with pytest.raises(AIParserError) as exc_info:
        parse_recipe_json(text)
    assert exc_info.value.kind == kind


def test_parse_recipe_json_too_many_ingredients():
    ingredient = {"name": "spice", "quantity": 1, "unit": "tsp", "calories": 5}
    text = json.dumps({"ingredients": [ingredient] * 21, "confidence": 0.5})

    with pytest.raises(AIParserError) as exc_info:
        parse_recipe_json(text)
    assert exc_info.value.kind == AIParserError.PARSING_FAILED


def test_unit_check_is_case_insensitive():
    text = '{"ingredients": [{"name": "flour", "quantity": 2, "unit": "Cup", "calories": 910}], "confidence": 0.7}'
    assert parse_recipe_json(text).ingredients[0].unit == "Cup"


# =============================================================================
# HTTP AND RETRIES
# =============================================================================


def test_parse_recipe_request_body():
    """
    Verifies:
    - non-streaming chat request with system and user messages
    - configured model and low temperature
    """
    endpoint = ScriptedEndpoint(_ok())

    recipe = _parser(endpoint).parse_recipe(DESCRIPTION)

    body = endpoint.bodies[0]
    assert body["model"] == "test-model"
    assert body["stream"] is False
    assert body["options"]["temperature"] == 0.3
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert DESCRIPTION in body["messages"][1]["content"]
    assert len(recipe.ingredients) == 3


def test_parse_recipe_validates_before_calling():
    endpoint = ScriptedEndpoint()

    with pytest.raises(AIParserError):
        _parser(endpoint).parse_recipe("egg")
    assert endpoint.bodies == []


def test_retry_then_success_with_backoff():
    sleeps = []
    endpoint = ScriptedEndpoint(_ok("I cannot help with that."), httpx.Response(500), _ok())

    recipe = _parser(endpoint, sleeps=sleeps).parse_recipe(DESCRIPTION)

    assert recipe.confidence == 0.9
    assert len(endpoint.bodies) == 3
    assert sleeps == [1.0, 2.0]


def test_retries_exhausted_raise_last_error():
    sleeps = []
    endpoint = ScriptedEndpoint(httpx.Response(503), httpx.Response(503), httpx.Response(503))

    with pytest.raises(AIParserError) as exc_info:
        _parser(endpoint, sleeps=sleeps).parse_recipe(DESCRIPTION)

    assert exc_info.value.kind == AIParserError.INVALID_RESPONSE
    assert len(endpoint.bodies) == 3
    assert sleeps == [1.0, 2.0]


def test_insufficient_data_is_not_retried():
    endpoint = ScriptedEndpoint(_ok('{"ingredients": [], "confidence": 0.2}'))

    with pytest.raises(AIParserError) as exc_info:
        _parser(endpoint).parse_recipe(DESCRIPTION)

    assert exc_info.value.kind == AIParserError.INSUFFICIENT_DATA
    assert len(endpoint.bodies) == 1


def test_timeout_retried_once_then_raised():
    class TimingOut(ScriptedEndpoint):
        def __call__(self, request):
            self.bodies.append(json.loads(request.content))
            raise httpx.ReadTimeout("slow model", request=request)

    endpoint = TimingOut()

    with pytest.raises(AIParserError) as exc_info:
        _parser(endpoint).parse_recipe(DESCRIPTION)

    assert exc_info.value.kind == AIParserError.TIMEOUT
    assert exc_info.value.retryable is True
    assert len(endpoint.bodies) == 2


def test_connection_error_maps_to_network_error():
    class Refusing(ScriptedEndpoint):
        def __call__(self, request):
            self.bodies.append(json.loads(request.content))
            raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(AIParserError) as exc_info:
        _parser(Refusing(), max_attempts=1).parse_recipe(DESCRIPTION)

    assert exc_info.value.kind == AIParserError.NETWORK_ERROR
    assert "Connection refused" in exc_info.value.message


def test_missing_message_content_is_invalid_response():
    endpoint = ScriptedEndpoint(httpx.Response(200, json={"done": True}))

    with pytest.raises(AIParserError) as exc_info:
        _parser(endpoint, max_attempts=1).parse_recipe(DESCRIPTION)
    assert exc_info.value.kind == AIParserError.INVALID_RESPONSE
