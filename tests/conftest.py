"""Test setup for docgateway."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from docgateway.exceptions import NotFoundError, ServiceError  # noqa: E402
from docgateway.schemas import Branch, ChapterNode, Project, RenderResult  # noqa: E402

PDF_BYTES = b"%PDF-1.7\n%fake\n"


class FakeProjectDirectory:
    def __init__(self, projects: dict[str, Project] | None = None) -> None:
        self.projects = projects or {}
        self.calls: list[str] = []

    async def get(self, project_id: str) -> Project | None:
        self.calls.append(project_id)
        return self.projects.get(project_id)


class FakeTableOfContents:
    def __init__(self, chapters: list[ChapterNode] | None = None, error: Exception | None = None) -> None:
        self.chapters = chapters or []
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def get_tree(self, project_id: str, branch_name: str) -> list[ChapterNode]:
        self.calls.append((project_id, branch_name))
        if self.error:
            raise self.error
        return self.chapters


class FakeDocumentStore:
    def __init__(self, documents: dict[str, bytes] | None = None, upload_error: Exception | None = None) -> None:
        self.documents = documents or {}
        self.upload_error = upload_error
        self.calls: list[tuple[str, str, str]] = []
        self.uploads: list[tuple[str, str, bytes]] = []

    async def get(self, project_id: str, branch_name: str, key: str) -> bytes:
        self.calls.append((project_id, branch_name, key))
        if key not in self.documents:
            raise NotFoundError(f"Document '{key}' not found")
        return self.documents[key]

    async def upload(self, project_id: str, branch_name: str, artifact: Path) -> None:
        if self.upload_error:
            raise self.upload_error
        self.uploads.append((project_id, branch_name, artifact.read_bytes()))


class FakeRenderer:
    def __init__(self, result: RenderResult | None = None) -> None:
        self.result = result or RenderResult.ok(PDF_BYTES)
        self.calls: list[str] = []

    async def render(self, text: str) -> RenderResult:
        self.calls.append(text)
        return self.result


class FakeBranchRegistry:
    def __init__(self, names: list[str] | None = None, error: Exception | None = None) -> None:
        self.names = list(names or [])
        self.error = error
        self.deleted: list[tuple[str, str]] = []

    async def list(self, project_id: str) -> list[Branch]:
        if self.error:
            raise self.error
        return [Branch(name=name) for name in self.names]

    async def delete(self, project_id: str, branch_name: str) -> None:
        self.deleted.append((project_id, branch_name))
        self.names.remove(branch_name)


class FakeSearchIndex:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.refreshed: list[tuple[str, str]] = []

    async def refresh(self, project_id: str, branch_name: str) -> None:
        if self.error:
            raise self.error
        self.refreshed.append((project_id, branch_name))


@pytest.fixture
def project() -> Project:
    return Project(id="docs", name="Docs", description="desc")


@pytest.fixture
def chapters() -> list[ChapterNode]:
    return [
        ChapterNode(title="Intro", url="intro"),
        ChapterNode(title="Guide", children=[ChapterNode(title="Setup", url="guide/setup")]),
    ]


@pytest.fixture
def documents() -> dict[str, bytes]:
    return {
        "intro": "# Intro\n\nWelcome.".encode("utf-8"),
        "guide:setup": "# Setup\n\nInstall it.".encode("utf-8"),
    }


@pytest.fixture
def service_error() -> ServiceError:
    return ServiceError("HTTP 503 from GET http://toc/api")
