"""Logging setup: one stdout handler, configured at startup."""

import logging
import sys

from dossierhub.core.config import get_settings


def setup_logging() -> None:
    """Configure root logging from settings.

    DEBUG when settings.debug, otherwise INFO. SQL statement logging follows
    settings.database_echo so the workflow logs stay readable.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
