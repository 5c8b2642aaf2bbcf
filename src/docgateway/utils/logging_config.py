"""Logging setup shared by the gateway server and library."""

from __future__ import annotations

import logging
import sys

from docgateway.config import DOCGATEWAY_LOG_LEVEL

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ExtraFormatter(logging.Formatter):
    """Append ``extra=`` fields to the formatted message as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if extras:
            message += " " + " ".join(f"{k}={v!r}" for k, v in sorted(extras.items()))
        return message


def configure_logging(level: str | int = DOCGATEWAY_LOG_LEVEL) -> None:
    """Install a single stderr handler on the root logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ExtraFormatter(_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level if isinstance(level, int) else level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
