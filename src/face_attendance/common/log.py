from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Console logging for the package logger.

    Safe to call more than once (the app factory runs per test).
    """

    logger = logging.getLogger("face_attendance")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
