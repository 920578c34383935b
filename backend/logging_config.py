"""Logging setup for the HTTP backend."""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_LEVEL_ENV = "EVOSIM_LOG_LEVEL"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root logging and align the simulation and uvicorn loggers.

    Args:
        level: Explicit log level. Falls back to ``EVOSIM_LOG_LEVEL`` or INFO.

    Returns:
        The backend logger (``evosim.backend``)
    """
    resolved = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)

    for name in ("evosim", "backend", "uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(resolved)

    logger = logging.getLogger("evosim.backend")
    logger.debug("Logging configured at %s", resolved)
    return logger
