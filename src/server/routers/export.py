"""Export endpoints."""

import re
from urllib.parse import quote

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from docgateway.exceptions import DocGatewayError, ProjectNotFoundError, RenderError
from docgateway.export import ExportOrchestrator
from docgateway.utils.logging_config import get_logger
from server.dependencies import get_exporter
from server.models import ErrorResponse

logger = get_logger(__name__)

router = APIRouter()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")

COMMON_EXPORT_RESPONSES: dict[int | str, dict] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Project not found"},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse, "description": "A collaborating service failed"},
}


def content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-ASCII and quote characters.

    ``filename`` carries an ASCII fallback; ``filename*`` carries the exact
    name encoded as in RFC 5987.
    """
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def _error_response(exc: DocGatewayError) -> JSONResponse:
    if isinstance(exc, ProjectNotFoundError):
        body = ErrorResponse(error=str(exc))
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())

    status_code = exc.status_code if isinstance(exc, RenderError) else None
    logger.error(
        "Export failed",
        extra={"error": str(exc), "error_type": type(exc).__name__},
    )
    body = ErrorResponse(error=str(exc), status_code=status_code)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=body.model_dump())


@router.get(
    "/api/projects/{project_id}/branches/{branch_name}/export/pdf",
    responses=COMMON_EXPORT_RESPONSES,
    response_model=None,
)
async def export_pdf(
    project_id: str,
    branch_name: str,
    exporter: ExportOrchestrator = Depends(get_exporter),
) -> Response:
    """Export a project branch as a downloadable PDF.

    **Path Parameters**
    - **project_id** (`str`): Project identifier
    - **branch_name** (`str`): Branch (version) to export

    **Returns**
    - **Response**: ``application/pdf`` attachment named ``{project_id}-{branch_name}.pdf``
    """
    try:
        content = await exporter.export(project_id, branch_name)
    except DocGatewayError as exc:
        return _error_response(exc)

    filename = f"{project_id}-{branch_name}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.get(
    "/api/projects/{project_id}/branches/{branch_name}/export/markdown",
    responses=COMMON_EXPORT_RESPONSES,
    response_model=None,
)
async def export_markdown(
    project_id: str,
    branch_name: str,
    exporter: ExportOrchestrator = Depends(get_exporter),
) -> Response:
    """Return the markup that would be sent to the PDF renderer."""
    try:
        markdown = await exporter.assemble(project_id, branch_name)
    except DocGatewayError as exc:
        return _error_response(exc)
    return Response(content=markdown, media_type="text/markdown; charset=utf-8")
