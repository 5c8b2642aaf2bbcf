"""httpx clients for the services the gateway aggregates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import httpx

from docgateway.config import (
    DOCGATEWAY_BRANCHES_URL,
    DOCGATEWAY_DOCUMENTS_URL,
    DOCGATEWAY_FETCH_TIMEOUT_S,
    DOCGATEWAY_PDF_EXPORT_URL,
    DOCGATEWAY_PROJECTS_URL,
    DOCGATEWAY_RENDER_TIMEOUT_S,
    DOCGATEWAY_SEARCH_URL,
    DOCGATEWAY_TOC_URL,
)
from docgateway.exceptions import NotFoundError, ServiceError
from docgateway.file_utils import read_bytes_async
from docgateway.http_utils import default_headers, send_request
from docgateway.schemas import Branch, ChapterNode, Project, RenderResult

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="")


def _branch_path(project_id: str, branch_name: str) -> str:
    return f"/api/projects/{_segment(project_id)}/branches/{_segment(branch_name)}"


class ServiceClient:
    """Base for clients that talk to one service over a shared httpx client."""

    def __init__(self, base_url: str, *, client: httpx.AsyncClient) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"


class HttpProjectDirectory(ServiceClient):
    async def get(self, project_id: str) -> Project | None:
        try:
            response = await send_request(
                self.client, "GET", self.url(f"/api/projects/{_segment(project_id)}")
            )
        except NotFoundError:
            return None
        try:
            return Project.model_validate(response.json())
        except ValueError as exc:
            raise ServiceError(f"Invalid project payload for '{project_id}': {exc}") from exc


class HttpTableOfContentsProvider(ServiceClient):
    async def get_tree(self, project_id: str, branch_name: str) -> list[ChapterNode]:
        response = await send_request(
            self.client, "GET", self.url(f"{_branch_path(project_id, branch_name)}/toc")
        )
        try:
            return [ChapterNode.model_validate(item) for item in response.json()]
        except (TypeError, ValueError) as exc:
            raise ServiceError(
                f"Invalid table of contents for {project_id}/{branch_name}: {exc}"
            ) from exc


class HttpDocumentStore(ServiceClient):
    async def get(self, project_id: str, branch_name: str, key: str) -> bytes:
        response = await send_request(
            self.client,
            "GET",
            self.url(f"{_branch_path(project_id, branch_name)}/documents/{_segment(key)}"),
            on_404_message=f"Document '{key}' not found in {project_id}/{branch_name}",
        )
        return response.content

    async def upload(self, project_id: str, branch_name: str, artifact: Path) -> None:
        payload = await read_bytes_async(artifact)
        logger.debug("Uploading %d bytes to %s/%s", len(payload), project_id, branch_name)
        await send_request(
            self.client,
            "POST",
            self.url(_branch_path(project_id, branch_name)),
            files={"file": (artifact.name, payload, "application/zip")},
        )


class HttpBranchRegistry(ServiceClient):
    async def list(self, project_id: str) -> list[Branch]:
        response = await send_request(
            self.client, "GET", self.url(f"/api/projects/{_segment(project_id)}/branches")
        )
        try:
            return [Branch.model_validate(item) for item in response.json()]
        except (TypeError, ValueError) as exc:
            raise ServiceError(f"Invalid branch list for '{project_id}': {exc}") from exc

    async def delete(self, project_id: str, branch_name: str) -> None:
        await send_request(self.client, "DELETE", self.url(_branch_path(project_id, branch_name)))


class HttpSearchIndex(ServiceClient):
    async def refresh(self, project_id: str, branch_name: str) -> None:
        await send_request(
            self.client, "POST", self.url(f"{_branch_path(project_id, branch_name)}/refresh")
        )


class HttpPdfRenderClient(ServiceClient):
    """Posts markup to the PDF export service.

    A non-success status is returned as a failed RenderResult rather than
    raised, so the caller sees the renderer's status code and body verbatim.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient,
        timeout_s: float = DOCGATEWAY_RENDER_TIMEOUT_S,
    ) -> None:
        super().__init__(base_url, client=client)
        self.timeout = httpx.Timeout(timeout_s)

    async def render(self, text: str) -> RenderResult:
        url = self.url("/api/pdf")
        try:
            response = await self.client.post(url, json={"content": text}, timeout=self.timeout)
        except httpx.RequestError as exc:
            raise ServiceError(f"POST {url} failed: {exc}") from exc

        if response.is_success:
            return RenderResult.ok(response.content, status_code=response.status_code)
        return RenderResult.failed(response.status_code, response.text)


@dataclass
class ServiceClients:
    """All collaborator clients, sharing one pooled httpx client."""

    http: httpx.AsyncClient
    projects: HttpProjectDirectory
    toc: HttpTableOfContentsProvider
    documents: HttpDocumentStore
    branches: HttpBranchRegistry
    search: HttpSearchIndex
    renderer: HttpPdfRenderClient

    async def aclose(self) -> None:
        await self.http.aclose()


def build_clients(
    http: httpx.AsyncClient | None = None,
    *,
    secure_token: str | None = None,
) -> ServiceClients:
    """Create clients for every collaborator from the configured URLs.

    Args:
        http: Optional client to share. A new one is created when omitted.
        secure_token: Overrides the configured service token. Only valid
            when ``http`` is omitted; a shared client keeps its own headers.

    Raises:
        ValueError: If both ``http`` and ``secure_token`` are given.
    """
    if http is not None and secure_token is not None:
        raise ValueError("secure_token cannot be applied to a caller-supplied http client")
    if http is None:
        http = httpx.AsyncClient(
            timeout=httpx.Timeout(DOCGATEWAY_FETCH_TIMEOUT_S),
            headers=default_headers(secure_token),
            follow_redirects=True,
        )
    return ServiceClients(
        http=http,
        projects=HttpProjectDirectory(DOCGATEWAY_PROJECTS_URL, client=http),
        toc=HttpTableOfContentsProvider(DOCGATEWAY_TOC_URL, client=http),
        documents=HttpDocumentStore(DOCGATEWAY_DOCUMENTS_URL, client=http),
        branches=HttpBranchRegistry(DOCGATEWAY_BRANCHES_URL, client=http),
        search=HttpSearchIndex(DOCGATEWAY_SEARCH_URL, client=http),
        renderer=HttpPdfRenderClient(DOCGATEWAY_PDF_EXPORT_URL, client=http),
    )
