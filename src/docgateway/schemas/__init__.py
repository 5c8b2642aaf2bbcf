"""Shared schemas for docgateway."""

from docgateway.schemas.chapters import ChapterNode
from docgateway.schemas.projects import Branch, ExportRequest, Project
from docgateway.schemas.results import RenderResult, UploadResult

__all__ = [
    "Branch",
    "ChapterNode",
    "ExportRequest",
    "Project",
    "RenderResult",
    "UploadResult",
]
