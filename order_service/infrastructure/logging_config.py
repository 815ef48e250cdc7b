"""Logging setup shared by the CLI and any embedding application."""
import logging
from typing import Optional

from order_service.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None) -> int:
    """
    Configure root logging.

    Args:
        level: Level name (DEBUG, INFO, ...). Defaults to settings.log_level;
            unknown names fall back to INFO.

    Returns:
        The numeric level applied
    """
    level_name = (level or settings.log_level).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric_level)

    # SQL echo is too chatty below WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return numeric_level
