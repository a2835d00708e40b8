# /app/core/logging_config.py

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Configures the root logger once for the whole process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Third-party libraries are noisy at DEBUG.
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
