"""FastAPI application for the documentation gateway."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from docgateway.clients import build_clients
from docgateway.utils.logging_config import get_logger
from server.routers import export, upload

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.clients = build_clients()
    logger.info("Service clients ready")
    try:
        yield
    finally:
        await app.state.clients.aclose()


app = FastAPI(title="docgateway", lifespan=lifespan)
app.include_router(export.router)
app.include_router(upload.router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
