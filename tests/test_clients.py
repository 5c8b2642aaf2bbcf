"""Tests for the service clients and the shared request helper."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from docgateway.clients import (
    HttpBranchRegistry,
    HttpDocumentStore,
    HttpPdfRenderClient,
    HttpProjectDirectory,
    HttpSearchIndex,
    HttpTableOfContentsProvider,
    build_clients,
)
from docgateway.exceptions import NotFoundError, ServiceError
from docgateway.http_utils import default_headers, send_request


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestDefaultHeaders:
    def test_adds_secure_token(self) -> None:
        headers = default_headers("s3cret")
        assert headers["Authorization"] == "SecureToken s3cret"
        assert "User-Agent" in headers

    def test_empty_token_sends_no_authorization(self) -> None:
        assert "Authorization" not in default_headers("")


class TestSendRequest:
    """Tests for send_request function."""

    @pytest.mark.asyncio
    async def test_returns_successful_response(self) -> None:
        async with _client(lambda request: httpx.Response(200, text="ok")) as client:
            response = await send_request(client, "GET", "http://svc/x")
        assert response.text == "ok"

    @pytest.mark.asyncio
    async def test_raises_not_found_on_404(self) -> None:
        async with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(NotFoundError, match="Resource not found"):
                await send_request(client, "GET", "http://svc/x")

    @pytest.mark.asyncio
    async def test_raises_custom_exception_on_404(self) -> None:
        class CustomError(Exception):
            pass

        async with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(CustomError, match="gone"):
                await send_request(client, "GET", "http://svc/x", on_404=CustomError, on_404_message="gone")

    @pytest.mark.asyncio
    async def test_does_not_retry_server_errors(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="busy")

        async with _client(handler) as client:
            with pytest.raises(ServiceError, match="HTTP 503"):
                await send_request(client, "GET", "http://svc/x")

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_wraps_transport_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ServiceError, match="refused"):
                await send_request(client, "GET", "http://svc/x")


class TestProjectDirectory:
    @pytest.mark.asyncio
    async def test_parses_project(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/projects/docs"
            return httpx.Response(
                200,
                json={"id": "docs", "name": "Docs", "description": "desc", "isAccessLimited": True},
            )

        async with _client(handler) as client:
            project = await HttpProjectDirectory("http://projects/", client=client).get("docs")

        assert project is not None
        assert project.name == "Docs"
        assert project.access_limited is True

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self) -> None:
        async with _client(lambda request: httpx.Response(404)) as client:
            assert await HttpProjectDirectory("http://projects", client=client).get("nope") is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self) -> None:
        async with _client(lambda request: httpx.Response(500)) as client:
            with pytest.raises(ServiceError):
                await HttpProjectDirectory("http://projects", client=client).get("docs")


class TestTableOfContentsProvider:
    @pytest.mark.asyncio
    async def test_parses_nested_tree(self) -> None:
        payload = [
            {"name": "Intro", "url": "intro", "children": []},
            {"name": "Guide", "url": None, "children": [{"name": "Setup", "url": "guide/setup", "children": None}]},
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/projects/docs/branches/v1/toc"
            return httpx.Response(200, json=payload)

        async with _client(handler) as client:
            tree = await HttpTableOfContentsProvider("http://toc", client=client).get_tree("docs", "v1")

        assert [node.title for node in tree] == ["Intro", "Guide"]
        assert tree[1].children[0].url == "guide/setup"
        assert tree[1].children[0].children == []

    @pytest.mark.asyncio
    async def test_invalid_payload_raises_service_error(self) -> None:
        async with _client(lambda request: httpx.Response(200, json={"not": "a list"})) as client:
            with pytest.raises(ServiceError):
                await HttpTableOfContentsProvider("http://toc", client=client).get_tree("docs", "v1")


class TestDocumentStore:
    @pytest.mark.asyncio
    async def test_fetches_raw_bytes_by_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/projects/docs/branches/v1/documents/guide:setup"
            return httpx.Response(200, content=b"# Setup")

        async with _client(handler) as client:
            content = await HttpDocumentStore("http://documents", client=client).get("docs", "v1", "guide:setup")

        assert content == b"# Setup"

    @pytest.mark.asyncio
    async def test_missing_document_raises_not_found(self) -> None:
        async with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(NotFoundError, match="guide:setup"):
                await HttpDocumentStore("http://documents", client=client).get("docs", "v1", "guide:setup")

    @pytest.mark.asyncio
    async def test_upload_posts_multipart(self, tmp_path: Path) -> None:
        artifact = tmp_path / "branch.zip"
        artifact.write_bytes(b"PK\x03\x04data")
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = request.read()
            return httpx.Response(201)

        async with _client(handler) as client:
            await HttpDocumentStore("http://documents", client=client).upload("docs", "v1", artifact)

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/projects/docs/branches/v1"
        assert b"PK\x03\x04data" in seen["body"]
        assert b'filename="branch.zip"' in seen["body"]


class TestBranchRegistryAndSearch:
    @pytest.mark.asyncio
    async def test_lists_and_deletes_branches(self) -> None:
        requests: list[tuple[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append((request.method, request.url.path))
            if request.method == "GET":
                return httpx.Response(200, json=[{"name": "v1"}, {"name": "v2"}])
            return httpx.Response(204)

        async with _client(handler) as client:
            registry = HttpBranchRegistry("http://branches", client=client)
            branches = await registry.list("docs")
            await registry.delete("docs", "v1")

        assert [branch.name for branch in branches] == ["v1", "v2"]
        assert requests == [
            ("GET", "/api/projects/docs/branches"),
            ("DELETE", "/api/projects/docs/branches/v1"),
        ]

    @pytest.mark.asyncio
    async def test_refresh_posts_to_search(self) -> None:
        requests: list[tuple[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append((request.method, request.url.path))
            return httpx.Response(202)

        async with _client(handler) as client:
            await HttpSearchIndex("http://search", client=client).refresh("docs", "v1")

        assert requests == [("POST", "/api/projects/docs/branches/v1/refresh")]


class TestPdfRenderClient:
    @pytest.mark.asyncio
    async def test_success_returns_bytes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/pdf"
            assert json.loads(request.read()) == {"content": "# Hello"}
            return httpx.Response(200, content=b"%PDF-1.7")

        async with _client(handler) as client:
            result = await HttpPdfRenderClient("http://pdf", client=client).render("# Hello")

        assert result.success
        assert result.content == b"%PDF-1.7"

    @pytest.mark.asyncio
    async def test_failure_returns_status_and_body(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, text="bad markup")

        async with _client(handler) as client:
            result = await HttpPdfRenderClient("http://pdf", client=client).render("# Hello")

        assert not result.success
        assert result.status_code == 500
        assert result.body_text == "bad markup"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_non_ascii_markup_is_sent_as_utf8(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.read().decode("utf-8")) == {"content": "Zażółć"}
            return httpx.Response(200, content=b"%PDF-1.7")

        async with _client(handler) as client:
            result = await HttpPdfRenderClient("http://pdf", client=client).render("Zażółć")

        assert result.success


class TestBuildClients:
    @pytest.mark.asyncio
    async def test_shares_one_http_client(self) -> None:
        clients = build_clients(secure_token="token")
        try:
            assert clients.http.headers["Authorization"] == "SecureToken token"
            assert clients.projects.client is clients.http
            assert clients.renderer.client is clients.http
        finally:
            await clients.aclose()

    @pytest.mark.asyncio
    async def test_token_with_shared_client_is_rejected(self) -> None:
        async with httpx.AsyncClient() as http:
            with pytest.raises(ValueError):
                build_clients(http, secure_token="token")

    @pytest.mark.asyncio
    async def test_shared_client_is_used_as_is(self) -> None:
        async with httpx.AsyncClient(headers={"X-Test": "1"}) as http:
            clients = build_clients(http)
            assert clients.http is http
            assert clients.documents.client is http
