"""
Standardized API response models and utilities.
Mutating endpoints wrap their payload with a short confirmation message that
clients show as a toast.
"""

from typing import Generic, TypeVar, Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime, timezone

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel, Generic[T]):
    """Generic API response wrapper"""

    success: bool = Field(..., description="Indicates if the operation was successful")
    message: Optional[str] = Field(None, description="Toast message for the client")
    data: Optional[T] = Field(None, description="Response payload")
    timestamp: datetime = Field(default_factory=_now, description="Response timestamp")

    model_config = {"from_attributes": True}


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Plain-language error message")
    field: Optional[str] = Field(None, description="Field that caused the error")
    retryable: Optional[bool] = Field(
        None, description="True when retrying the request may succeed"
    )
    details: Optional[dict] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(default_factory=_now, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    timestamp: datetime = Field(default_factory=_now, description="Check timestamp")


class NetworkStatusResponse(BaseModel):
    connected: bool
    monitoring: bool = Field(..., description="Whether the background probe is running")
    timestamp: datetime = Field(default_factory=_now)


def success_response(data: Any = None, message: str = None) -> dict:
    """Create a standardized success response"""
    return {
        "success": True,
        "message": message,
        "data": data,
        "timestamp": _now(),
    }


def saved_message(name: str) -> str:
    return f"'{name}' saved successfully"


def deleted_message(name: str) -> str:
    return f"'{name}' deleted successfully"


def added_message(name: str) -> str:
    return f"'{name}' added successfully"
