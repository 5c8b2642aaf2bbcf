"""HTTP utilities shared by the service clients."""

from __future__ import annotations

from typing import Any, Final

import httpx

from docgateway.config import DOCGATEWAY_SECURE_TOKEN, DOCGATEWAY_USER_AGENT
from docgateway.exceptions import NotFoundError, ServiceError

_ERROR_BODY_LIMIT: Final[int] = 500


def default_headers(secure_token: str | None = None) -> dict[str, str]:
    """Build the headers sent with every service request.

    Args:
        secure_token: Service-to-service token. Falls back to the configured
            token; no Authorization header is sent when both are empty.
    """
    headers = {"User-Agent": DOCGATEWAY_USER_AGENT}
    token = secure_token if secure_token is not None else DOCGATEWAY_SECURE_TOKEN
    if token:
        headers["Authorization"] = f"SecureToken {token}"
    return headers


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send a single request and fail on any non-success status.

    Requests are never retried; timeouts are whatever ``client`` enforces.

    Args:
        client: Shared client used for connection pooling.
        method: HTTP method.
        url: Absolute URL, or a path relative to the client's base URL.
        on_404: Exception class to raise on 404. Defaults to NotFoundError.
        on_404_message: Custom message for 404 responses.
        **kwargs: Passed through to ``client.request``.

    Returns:
        The successful response.

    Raises:
        NotFoundError (or the ``on_404`` exception): On a 404 response.
        ServiceError: On transport errors or any other non-success status.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.RequestError as exc:
        raise ServiceError(f"{method} {url} failed: {exc}") from exc

    if response.status_code == 404:
        not_found_exc_class = on_404 or NotFoundError
        raise not_found_exc_class(on_404_message or f"Resource not found at {url}")

    if not response.is_success:
        body = response.text[:_ERROR_BODY_LIMIT]
        raise ServiceError(f"HTTP {response.status_code} from {method} {url}: {body}")

    return response
