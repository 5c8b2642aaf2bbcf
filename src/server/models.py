"""Pydantic response models for the gateway API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response returned by the export and upload endpoints.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.
    status_code : int | None
        Status reported by the renderer, for render failures.

    """

    error: str = Field(..., description="Error message")
    status_code: int | None = Field(default=None, description="Renderer status code")
