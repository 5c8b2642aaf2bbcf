"""Outcome models returned by collaborators and flows."""

from __future__ import annotations

from pydantic import BaseModel


class RenderResult(BaseModel):
    """Response of the PDF renderer.

    Attributes:
        success: Whether the renderer answered with a success status.
        content: Rendered bytes, only meaningful on success.
        status_code: HTTP status the renderer answered with.
        body_text: Response body text, only meaningful on failure.
    """

    success: bool
    content: bytes = b""
    status_code: int | None = None
    body_text: str = ""

    @classmethod
    def ok(cls, content: bytes, status_code: int = 200) -> RenderResult:
        return cls(success=True, content=content, status_code=status_code)

    @classmethod
    def failed(cls, status_code: int, body_text: str) -> RenderResult:
        return cls(success=False, status_code=status_code, body_text=body_text)


class UploadResult(BaseModel):
    """Outcome of uploading a branch."""

    success: bool
    reason: str | None = None
    branch_replaced: bool = False
    index_refreshed: bool = False

    @classmethod
    def ok(cls, *, branch_replaced: bool, index_refreshed: bool) -> UploadResult:
        return cls(
            success=True,
            branch_replaced=branch_replaced,
            index_refreshed=index_refreshed,
        )

    @classmethod
    def failed(cls, reason: str, *, branch_replaced: bool = False) -> UploadResult:
        return cls(success=False, reason=reason, branch_replaced=branch_replaced)
