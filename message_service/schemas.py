"""
Pydantic schemas for request/response validation.

This module contains:
- The request model for POST /
- Response models for messages, errors and health checks
"""

from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Pydantic Request Models
# =============================================================================

class MessageCreate(BaseModel):
    """
    Pydantic model for validating a new message.

    Validates:
    - text: required, non-empty string
    - id: optional, at most 60 characters; generated server-side when absent
    """
    text: str = Field(
        ...,
        min_length=1,
        description="Message text content"
    )
    id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=60,
        description="Message identifier (generated when omitted)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"text": "Hello!"}
            ]
        }
    }


# =============================================================================
# Pydantic Response Models
# =============================================================================

class MessageResponse(BaseModel):
    """Response model for a single stored message."""
    id: str = Field(..., description="Unique message identifier")
    text: str = Field(..., description="Message text content")

    model_config = {
        "from_attributes": True,  # Allow creating from ORM objects
    }


class ErrorResponse(BaseModel):
    """Response model for error responses."""
    detail: str = Field(..., description="Error description")


class HealthResponse(BaseModel):
    """Response model for health check endpoints."""
    status: str = Field(..., description="Health status")
    reason: Optional[str] = Field(None, description="Reason if not ready")
