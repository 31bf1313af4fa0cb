from __future__ import annotations

import logging
import os

from planpilot.api.app.db.database import get_engine
from planpilot.api.app.db.models import Base

logger = logging.getLogger(__name__)


def auto_create_enabled() -> bool:
    return os.getenv("PLANPILOT_DB_AUTO_CREATE", "true").strip().lower() in {"1", "true", "yes", "y"}


def init_db() -> None:
    """Create missing planpilot tables. Existing tables are left as they are."""

    if not auto_create_enabled():
        logger.info("PLANPILOT_DB_AUTO_CREATE is off; not creating tables")
        return

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.debug("Tables ready on %s", engine.url.render_as_string(hide_password=True))
