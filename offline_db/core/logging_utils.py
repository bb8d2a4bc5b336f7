"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install a basic console handler unless the host already configured one."""

    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(resolved)
        return
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
