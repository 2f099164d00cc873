"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class GenerateRequest(BaseModel):
    """Blueprint document in the persisted project-file shape (camelCase keys)"""

    blueprint: dict[str, Any] = Field(
        default_factory=dict, description="Quest or NPC blueprint document"
    )


# === Response Schemas ===


class GenerateResponse(BaseModel):
    """Generated source"""

    success: bool
    class_name: str
    source: str
    warnings: list[str] = []


class ValidateResponse(BaseModel):
    """Advisory validation result"""

    is_valid: bool
    errors: list[str] = []
    warnings: list[str] = []


class ErrorResponse(BaseModel):
    """Error response"""

    success: bool = False
    error: str
    detail: Optional[str] = None
