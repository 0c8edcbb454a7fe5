"""Error envelope shared by all endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    status: int
    message: str
    timestamp: str
    errors: dict[str, str] = Field(default_factory=dict)
    details: dict[str, Any] = Field(default_factory=dict)
