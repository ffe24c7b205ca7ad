"""
Common schemas for API responses and error handling.
"""

from typing import Any, ClassVar, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ErrorDetail(BaseModel):
    """Schema for detailed error information."""

    error_code: str = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error context")
    suggestions: Optional[List[str]] = Field(None, description="Helpful suggestions for resolving the error")
    retry_after: Optional[int] = Field(None, description="Seconds to wait before retrying")


class ErrorResponse(BaseModel):
    """Schema for API error responses."""

    error: ErrorDetail
    error_id: str
    timestamp: str

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": {
                        "error_code": "NOT_FOUND",
                        "message": "Event 42 not found",
                        "details": {"resource_type": "event", "resource_id": 42},
                        "suggestions": ["Check the event ID"]
                    },
                    "error_id": "0b6f4a4e-5d0e-4c1c-9a53-5e0b1d1f2f10",
                    "timestamp": "2024-01-01T12:00:00+00:00"
                },
                {
                    "error": {
                        "error_code": "OPTIMISTIC_LOCK_FAILURE",
                        "message": "layout 42 was modified by another transaction",
                        "details": {"resource_type": "layout", "resource_id": 42, "expected_version": 3},
                        "retry_after": 1
                    },
                    "error_id": "5f1c9a43-5a3b-4c43-b1a3-1fb2b7e4a0d2",
                    "timestamp": "2024-01-01T12:00:00+00:00"
                }
            ]
        }
    )


class MessageResponse(BaseModel):
    """Schema for simple acknowledgement responses."""

    message: str = Field(..., description="Result message")


class HealthStatus(BaseModel):
    """Schema for health check responses."""

    status: str = Field(..., description="Overall health status")
    service: str = Field(..., description="Service name")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Role not allowed"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}


class PartialUpdate(BaseModel):
    """Base for PATCH-style update bodies: omitted fields stay as they are."""

    model_config = ConfigDict(populate_by_name=True)

    # Field names that may be explicitly cleared with null
    nullable_fields: ClassVar[Set[str]] = set()

    @model_validator(mode="before")
    @classmethod
    def reject_null_required(cls, data):
        if not isinstance(data, dict):
            return data
        for name, field in cls.model_fields.items():
            if name in cls.nullable_fields:
                continue
            for key in (field.alias, name):
                if key and key in data and data[key] is None:
                    raise ValueError(f"{key} must not be null")
        return data
