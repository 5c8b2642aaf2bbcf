"""Local configuration for docgateway."""

from __future__ import annotations

import os


DEFAULT_PROJECTS_URL = "http://localhost:5001"
DEFAULT_TOC_URL = "http://localhost:5002"
DEFAULT_DOCUMENTS_URL = "http://localhost:5003"
DEFAULT_BRANCHES_URL = DEFAULT_DOCUMENTS_URL
DEFAULT_SEARCH_URL = "http://localhost:5004"
DEFAULT_PDF_EXPORT_URL = "http://localhost:5005"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_RENDER_TIMEOUT_S = 120.0
DEFAULT_USER_AGENT = "docgateway/0.1"
DEFAULT_LOG_LEVEL = "INFO"

# Base URLs of the services the gateway aggregates.
DOCGATEWAY_PROJECTS_URL = os.getenv("DOCGATEWAY_PROJECTS_URL", DEFAULT_PROJECTS_URL)
DOCGATEWAY_TOC_URL = os.getenv("DOCGATEWAY_TOC_URL", DEFAULT_TOC_URL)
DOCGATEWAY_DOCUMENTS_URL = os.getenv("DOCGATEWAY_DOCUMENTS_URL", DEFAULT_DOCUMENTS_URL)
DOCGATEWAY_BRANCHES_URL = os.getenv("DOCGATEWAY_BRANCHES_URL", DEFAULT_BRANCHES_URL)
DOCGATEWAY_SEARCH_URL = os.getenv("DOCGATEWAY_SEARCH_URL", DEFAULT_SEARCH_URL)
DOCGATEWAY_PDF_EXPORT_URL = os.getenv("DOCGATEWAY_PDF_EXPORT_URL", DEFAULT_PDF_EXPORT_URL)

# Service-to-service token, sent as "Authorization: SecureToken <token>".
DOCGATEWAY_SECURE_TOKEN = os.getenv("DOCGATEWAY_SECURE_TOKEN", "")

DOCGATEWAY_FETCH_TIMEOUT_S = float(os.getenv("DOCGATEWAY_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
DOCGATEWAY_RENDER_TIMEOUT_S = float(os.getenv("DOCGATEWAY_RENDER_TIMEOUT_S", str(DEFAULT_RENDER_TIMEOUT_S)))
DOCGATEWAY_USER_AGENT = os.getenv("DOCGATEWAY_USER_AGENT", DEFAULT_USER_AGENT)
DOCGATEWAY_LOG_LEVEL = os.getenv("DOCGATEWAY_LOG_LEVEL", DEFAULT_LOG_LEVEL)
