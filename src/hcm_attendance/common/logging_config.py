from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger (idempotent)."""
    logger = logging.getLogger("hcm_attendance")
    logger.setLevel(str(level or "INFO").upper())
    if not any(getattr(h, "_hcm_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hcm_handler = True
        logger.addHandler(handler)
