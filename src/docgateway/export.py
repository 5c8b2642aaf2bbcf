"""Export pipeline: project + table of contents + documents -> PDF bytes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from docgateway.collaborators import (
    DocumentStore,
    PdfRenderClient,
    ProjectDirectory,
    TableOfContentsProvider,
)
from docgateway.exceptions import (
    DocumentFetchError,
    ProjectNotFoundError,
    RenderError,
    TocFetchError,
)
from docgateway.markdown import (
    MarkdownDocument,
    append_body,
    build_table_of_contents,
    build_title_page,
    page_break,
)
from docgateway.schemas import ChapterNode, ExportRequest, Project

logger = logging.getLogger(__name__)


class ExportState(str, Enum):
    """Stages of a single export call."""

    IDLE = "idle"
    FETCHING_PROJECT = "fetching_project"
    FETCHING_TOC = "fetching_toc"
    ASSEMBLING = "assembling"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


_ORDER = [
    ExportState.IDLE,
    ExportState.FETCHING_PROJECT,
    ExportState.FETCHING_TOC,
    ExportState.ASSEMBLING,
    ExportState.RENDERING,
    ExportState.DONE,
]


@dataclass
class ExportRun:
    """Progress of one export call. Never shared between calls."""

    request: ExportRequest
    state: ExportState = ExportState.IDLE
    history: list[ExportState] = field(default_factory=lambda: [ExportState.IDLE])

    def advance(self, new_state: ExportState) -> None:
        """Move forward to ``new_state``.

        Raises:
            RuntimeError: If the run is finished or ``new_state`` is not ahead
                of the current state.
        """
        if self.state in (ExportState.DONE, ExportState.FAILED):
            raise RuntimeError(f"Export already finished in state {self.state.value}")
        if new_state is not ExportState.FAILED and _ORDER.index(new_state) <= _ORDER.index(self.state):
            raise RuntimeError(f"Cannot move export from {self.state.value} to {new_state.value}")
        logger.debug(
            "Export %s/%s: %s -> %s",
            self.request.project_id,
            self.request.branch_name,
            self.state.value,
            new_state.value,
        )
        self.state = new_state
        self.history.append(new_state)


class ExportOrchestrator:
    """Sequences the collaborators that turn a branch into a PDF.

    The orchestrator holds only its collaborators; every call to ``export``
    owns its own run record and markup buffer.
    """

    def __init__(
        self,
        projects: ProjectDirectory,
        toc: TableOfContentsProvider,
        documents: DocumentStore,
        renderer: PdfRenderClient,
    ) -> None:
        self.projects = projects
        self.toc = toc
        self.documents = documents
        self.renderer = renderer

    async def export(self, project_id: str, branch_name: str) -> bytes:
        """Render a project branch as a PDF.

        Args:
            project_id: Project identifier.
            branch_name: Branch (version) to export.

        Returns:
            The renderer's bytes, unmodified.

        Raises:
            ProjectNotFoundError: If the project does not exist.
            TocFetchError: If the table of contents cannot be fetched.
            DocumentFetchError: If any referenced document cannot be fetched.
            RenderError: If the renderer answers with a non-success status.
            ServiceError: If the project directory or renderer is unreachable.
        """
        run = ExportRun(ExportRequest(project_id=project_id, branch_name=branch_name))
        logger.info("Exporting %s/%s to PDF", project_id, branch_name)
        try:
            markdown = await self._assemble(run)

            run.advance(ExportState.RENDERING)
            result = await self.renderer.render(markdown.text)
            if not result.success:
                raise RenderError(result.status_code or 0, result.body_text)
        except Exception as exc:
            run.advance(ExportState.FAILED)
            logger.warning("Export of %s/%s failed: %s", project_id, branch_name, exc)
            raise

        run.advance(ExportState.DONE)
        logger.info("Exported %s/%s (%d bytes)", project_id, branch_name, len(result.content))
        return result.content

    async def assemble(self, project_id: str, branch_name: str) -> str:
        """Build the markup that ``export`` would submit, without rendering it."""
        run = ExportRun(ExportRequest(project_id=project_id, branch_name=branch_name))
        try:
            markdown = await self._assemble(run)
        except Exception:
            run.advance(ExportState.FAILED)
            raise
        return markdown.text

    async def _assemble(self, run: ExportRun) -> MarkdownDocument:
        request = run.request

        run.advance(ExportState.FETCHING_PROJECT)
        project = await self._fetch_project(request)

        run.advance(ExportState.FETCHING_TOC)
        chapters = await self._fetch_toc(request)

        run.advance(ExportState.ASSEMBLING)
        markdown = MarkdownDocument()
        markdown.append(build_title_page(project, request.branch_name))
        markdown.append(page_break())
        markdown.append(build_table_of_contents(chapters))
        markdown.append(page_break())
        await append_body(
            request.project_id,
            request.branch_name,
            chapters,
            lambda key: self._fetch_document(request, key),
            markdown,
        )
        return markdown

    async def _fetch_project(self, request: ExportRequest) -> Project:
        project = await self.projects.get(request.project_id)
        if project is None:
            raise ProjectNotFoundError(request.project_id)
        return project

    async def _fetch_toc(self, request: ExportRequest) -> list[ChapterNode]:
        try:
            return await self.toc.get_tree(request.project_id, request.branch_name)
        except Exception as exc:
            raise TocFetchError(
                f"Table of contents for {request.project_id}/{request.branch_name}: {exc}"
            ) from exc

    async def _fetch_document(self, request: ExportRequest, key: str) -> bytes:
        try:
            return await self.documents.get(request.project_id, request.branch_name, key)
        except Exception as exc:
            raise DocumentFetchError(key, str(exc)) from exc
