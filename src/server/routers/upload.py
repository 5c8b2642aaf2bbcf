"""Branch upload endpoint."""

from pathlib import PurePath

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from docgateway.file_utils import stage_upload_async
from docgateway.upload import BranchUploader
from server.dependencies import get_uploader

router = APIRouter()


@router.post("/api/projects/{project_id}/branches/{branch_name}/upload")
async def upload_branch(
    project_id: str,
    branch_name: str,
    file: UploadFile = File(...),
    uploader: BranchUploader = Depends(get_uploader),
) -> JSONResponse:
    """Replace a branch with an uploaded documentation package.

    The package is staged to a temporary file that the upload flow deletes
    once it finishes. Responds 200 with the UploadResult on success and 502
    when any step failed.
    """
    payload = await file.read()
    suffix = PurePath(file.filename or "").suffix or ".zip"
    artifact = await stage_upload_async(payload, suffix=suffix)

    result = await uploader.upload_branch(project_id, branch_name, artifact)
    status_code = status.HTTP_200_OK if result.success else status.HTTP_502_BAD_GATEWAY
    return JSONResponse(status_code=status_code, content=result.model_dump())
