"""docgateway: export and upload flows for a documentation-site gateway."""

from docgateway.exceptions import (
    DocGatewayError,
    DocumentFetchError,
    ExportError,
    NotFoundError,
    ProjectNotFoundError,
    RenderError,
    ServiceError,
    TocFetchError,
)
from docgateway.export import ExportOrchestrator, ExportState
from docgateway.markdown import (
    MarkdownDocument,
    build_body,
    build_table_of_contents,
    build_title_page,
    page_break,
    storage_key_for,
)
from docgateway.schemas import (
    Branch,
    ChapterNode,
    ExportRequest,
    Project,
    RenderResult,
    UploadResult,
)
from docgateway.upload import BranchUploader

__all__ = [
    "Branch",
    "BranchUploader",
    "ChapterNode",
    "DocGatewayError",
    "DocumentFetchError",
    "ExportError",
    "ExportOrchestrator",
    "ExportRequest",
    "ExportState",
    "MarkdownDocument",
    "NotFoundError",
    "Project",
    "ProjectNotFoundError",
    "RenderError",
    "RenderResult",
    "ServiceError",
    "TocFetchError",
    "UploadResult",
    "build_body",
    "build_table_of_contents",
    "build_title_page",
    "page_break",
    "storage_key_for",
]
