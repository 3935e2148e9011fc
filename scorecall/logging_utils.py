import logging
from typing import Optional

from scorecall.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, level: Optional[str] = None) -> None:
    """Configure root logging for scripts. Library modules only create loggers."""

    if level is None:
        level = LOG_LEVEL
    level = level.upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root_logger.setLevel(level)
