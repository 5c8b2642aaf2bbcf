"""Async helpers for staged upload artifacts."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path


async def read_bytes_async(path: Path) -> bytes:
    """Read a file's bytes asynchronously using a thread pool."""
    return await asyncio.to_thread(path.read_bytes)


def _write_staged(data: bytes, suffix: str) -> Path:
    with tempfile.NamedTemporaryFile(prefix="docgateway-", suffix=suffix, delete=False) as handle:
        handle.write(data)
        return Path(handle.name)


async def stage_upload_async(data: bytes, suffix: str = ".zip") -> Path:
    """Write uploaded bytes to a new temporary file and return its path.

    The caller owns the file and must remove it (see ``remove_file_async``).
    """
    return await asyncio.to_thread(_write_staged, data, suffix)


async def remove_file_async(path: Path) -> bool:
    """Delete a file asynchronously using a thread pool.

    Args:
        path: File to delete.

    Returns:
        True if the file was deleted, False if it did not exist.
    """
    try:
        await asyncio.to_thread(path.unlink)
    except FileNotFoundError:
        return False
    return True
