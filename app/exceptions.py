from typing import Any, Mapping, Optional


class CountMeError(Exception):
    """Base class for errors that surface to API clients.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
        retryable: True when the failure is network-related and retrying may help
    """

    http_status = 500
    default_code: Optional[str] = None
    retryable = False

    def __init__(self, message: str = "Unexpected error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        if self.retryable:
            payload["retryable"] = True
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(CountMeError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class FieldValidationError(ServiceValidationError):
    """Validation failure tied to a single input field."""

    default_code = "FIELD_VALIDATION_ERROR"

    def __init__(self, field: str, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)
        self.field = field

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["field"] = self.field
        return payload


class NotFoundError(CountMeError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class TrackerError(CountMeError):
    """Errors raised by calorie tracker operations."""

    http_status = 400
    default_code = "TRACKER_ERROR"


class NoCurrentLogError(TrackerError):
    http_status = 409
    default_code = "NO_CURRENT_LOG"

    def __init__(self, message: str = "No daily log is currently loaded. Please load a log first."):
        super().__init__(message)


class InvalidGoalError(TrackerError):
    default_code = "INVALID_GOAL"

    def __init__(self, message: str = "Daily goal must be a positive number."):
        super().__init__(message)


class NutritionAPIError(CountMeError):
    """Failure talking to the nutrition database.

    ``kind`` is one of INVALID_RESPONSE, NETWORK_ERROR, INVALID_DATA,
    RATE_LIMIT_EXCEEDED, TIMEOUT or OFFLINE.
    """

    INVALID_RESPONSE = "invalid_response"
    NETWORK_ERROR = "network_error"
    INVALID_DATA = "invalid_data"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    TIMEOUT = "timeout"
    OFFLINE = "offline"

    MESSAGES = {
        INVALID_RESPONSE: "The nutrition API returned an invalid response. Please try again.",
        NETWORK_ERROR: "Network error occurred: {reason}. Please check your internet connection.",
        INVALID_DATA: "Unable to parse nutrition data. The API response format may have changed.",
        RATE_LIMIT_EXCEEDED: "Too many requests to the nutrition API. Please wait a moment and try again.",
        TIMEOUT: "The request took too long to complete. Please check your internet connection and try again.",
        OFFLINE: "No internet connection. Please check your network and try again.",
    }
    STATUS = {
        RATE_LIMIT_EXCEEDED: 429,
        TIMEOUT: 504,
        OFFLINE: 503,
    }
    NETWORK_KINDS = {NETWORK_ERROR, RATE_LIMIT_EXCEEDED, TIMEOUT, OFFLINE}

    def __init__(self, kind: str, reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason
        message = self.MESSAGES[kind].format(reason=reason or "unknown error")
        super().__init__(message, code=f"NUTRITION_API_{kind.upper()}")

    @property
    def http_status(self) -> int:
        return self.STATUS.get(self.kind, 502)

    @property
    def retryable(self) -> bool:
        return self.kind in self.NETWORK_KINDS


class AIParserError(CountMeError):
    """Failure parsing a recipe description with the AI service.

    ``kind`` is one of INVALID_RESPONSE, NETWORK_ERROR, PARSING_FAILED,
    TIMEOUT or INSUFFICIENT_DATA.
    """

    INVALID_RESPONSE = "invalid_response"
    NETWORK_ERROR = "network_error"
    PARSING_FAILED = "parsing_failed"
    TIMEOUT = "timeout"
    INSUFFICIENT_DATA = "insufficient_data"

    MESSAGES = {
        INVALID_RESPONSE: "The AI service returned an invalid response. Please try again or enter ingredients manually.",
        NETWORK_ERROR: "Network error occurred: {reason}. Please check your internet connection.",
        PARSING_FAILED: "Unable to parse the recipe. Please try again or enter ingredients manually.",
        TIMEOUT: "The request took too long to complete. Please check your internet connection and try again.",
        INSUFFICIENT_DATA: "Unable to extract enough information from the recipe description. Please provide more details or enter ingredients manually.",
    }
    STATUS = {
        INSUFFICIENT_DATA: 422,
        TIMEOUT: 504,
    }
    NETWORK_KINDS = {NETWORK_ERROR, TIMEOUT}

    def __init__(self, kind: str, reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason
        message = self.MESSAGES[kind].format(reason=reason or "unknown error")
        super().__init__(message, code=f"AI_PARSER_{kind.upper()}")

    @property
    def http_status(self) -> int:
        return self.STATUS.get(self.kind, 502)

    @property
    def retryable(self) -> bool:
        return self.kind in self.NETWORK_KINDS


class IngredientConversionError(ServiceValidationError):
    """Raised when a search result or food item cannot become an ingredient."""

    default_code = "INGREDIENT_CONVERSION_ERROR"

    @classmethod
    def missing_field(cls, field: str) -> "IngredientConversionError":
        return cls(f"Missing required field: {field}")

    @classmethod
    def invalid_value(cls, field: str, value: float) -> "IngredientConversionError":
        return cls(f"Invalid value for {field}: {value}. Must be non-negative.")


class ServingSizeError(ServiceValidationError):
    default_code = "INVALID_SERVING_SIZE"

    def __init__(self, multiplier: float):
        super().__init__(f"Serving size must be greater than zero (received: {multiplier})")
        self.multiplier = multiplier


class ConfirmationRequiredError(CountMeError):
    """Raised when a destructive action is requested without explicit confirmation."""

    http_status = 409
    default_code = "CONFIRMATION_REQUIRED"
