"""
Logging setup.

Configures the console handler and format shared by every storefront logger.
"""

import logging
import logging.config
from typing import Optional

from storefront.config import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure global log format

    Standardize log output for the storefront loggers. SQL echo is
    controlled separately by the engine (``app_debug``).
    """
    settings = get_settings()
    log_level = level or ("DEBUG" if settings.app_debug else settings.log_level)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "root": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": True,
            },
            "storefront": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
