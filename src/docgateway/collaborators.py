"""Contracts of the external services the gateway depends on."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from docgateway.schemas import Branch, ChapterNode, Project, RenderResult


class ProjectDirectory(Protocol):
    async def get(self, project_id: str) -> Project | None:
        """Return the project, or None when it does not exist."""


class TableOfContentsProvider(Protocol):
    async def get_tree(self, project_id: str, branch_name: str) -> list[ChapterNode]:
        """Return the ordered top-level chapters of a branch."""


class DocumentStore(Protocol):
    async def get(self, project_id: str, branch_name: str, key: str) -> bytes:
        """Return the raw bytes stored under ``key``."""

    async def upload(self, project_id: str, branch_name: str, artifact: Path) -> None:
        """Upload a packaged branch."""


class PdfRenderClient(Protocol):
    async def render(self, text: str) -> RenderResult:
        """Convert assembled markup into PDF bytes."""


class BranchRegistry(Protocol):
    async def list(self, project_id: str) -> list[Branch]: ...

    async def delete(self, project_id: str, branch_name: str) -> None: ...


class SearchIndex(Protocol):
    async def refresh(self, project_id: str, branch_name: str) -> None: ...
