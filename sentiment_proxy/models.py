"""Pydantic models shared across application layers."""

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Incoming analysis payload."""

    text: str | None = Field(default=None, description="Text to classify.")


class ErrorResponse(BaseModel):
    """Error body returned to API callers."""

    error: str
