"""Logging setup shared by the CLI and the API app."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=_FORMAT)
    # httpx logs every request at INFO; keep it to warnings.
    logging.getLogger("httpx").setLevel(logging.WARNING)
