from __future__ import annotations

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Attach a console handler to the root logger, once.

    The level defaults to PLANPILOT_LOG_LEVEL (INFO when unset).
    """

    logger = logging.getLogger()
    if logger.handlers:
        # Already configured (repeated create_app calls in tests, or uvicorn's own setup).
        return

    level = level or os.getenv("PLANPILOT_LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level.strip().upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
