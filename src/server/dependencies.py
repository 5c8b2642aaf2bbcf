"""FastAPI dependencies wiring the flows to the service clients."""

from __future__ import annotations

from fastapi import Request

from docgateway.clients import ServiceClients
from docgateway.export import ExportOrchestrator
from docgateway.upload import BranchUploader


def get_clients(request: Request) -> ServiceClients:
    return request.app.state.clients


def get_exporter(request: Request) -> ExportOrchestrator:
    clients = get_clients(request)
    return ExportOrchestrator(
        projects=clients.projects,
        toc=clients.toc,
        documents=clients.documents,
        renderer=clients.renderer,
    )


def get_uploader(request: Request) -> BranchUploader:
    clients = get_clients(request)
    return BranchUploader(
        branches=clients.branches,
        documents=clients.documents,
        projects=clients.projects,
        search=clients.search,
    )
