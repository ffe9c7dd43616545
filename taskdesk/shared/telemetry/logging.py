"""Process-wide logging for the API, the access log and the CLI scripts."""

import logging
import sys

from taskdesk.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure the root logger once per process.

    Level is DEBUG when settings.debug is true, otherwise INFO; output goes to
    stdout. SQLAlchemy's engine logger stays at WARNING unless DATABASE_ECHO
    is set.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
