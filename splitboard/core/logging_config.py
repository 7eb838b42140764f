"""
Logging setup for the service.

Two channels:
    * module loggers from ``logging.getLogger(__name__)``, formatted once
      by ``configure_logging`` at startup.
    * the ``splitboard.db_changes`` logger, one JSON object per mutating
      action, optionally appended to ``DB_CHANGE_LOG_PATH``.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

DB_CHANGES_LOGGER = "splitboard.db_changes"

_configured = False

logger = logging.getLogger(__name__)
db_changes = logging.getLogger(DB_CHANGES_LOGGER)


def configure_logging(level: str = "INFO", change_log_path: Optional[str] = None) -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.addHandler(handler)

    if change_log_path:
        file_handler = logging.FileHandler(change_log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        db_changes.addHandler(file_handler)

    _configured = True


def log_db_change(action: str, **details) -> None:
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action,
        **details,
    }

    try:
        db_changes.info(json.dumps(entry, default=str))
    except (TypeError, ValueError) as e:
        logger.error("Failed to write DB change log: %s", e)
