from __future__ import annotations

import logging
import os
from typing import Optional


PACKAGE_LOGGER = "mediatools"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured_level: Optional[int] = None

# Library modules stay silent until an entry point calls setup_logging().
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for a CLI run.

    Args:
        level: Optional log level name (e.g., "INFO", "DEBUG"). If omitted,
               falls back to the LOG_LEVEL setting, then INFO.

    The handler is installed once; later calls only adjust the level.
    """
    global _configured_level
    log_level = _resolve_level(level)
    if _configured_level is None:
        logging.basicConfig(level=log_level, format=LOG_FORMAT)
    else:
        logging.getLogger().setLevel(log_level)
    _configured_level = log_level


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package namespace."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
