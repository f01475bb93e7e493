import logging
import logging.config
from typing import Optional

from kvcache.config import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None):
    """
    Configure log format for the cache and its storage driver.

    Intended to be called once by the host process; kvcache modules only
    create module-level loggers and never configure handlers themselves.
    """
    settings = settings or get_settings()
    log_level = "DEBUG" if settings.DEBUG else "INFO"

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
            "sqlalchemy.engine": {
                "handlers": ["console"],
                "level": "INFO" if settings.DEBUG else "WARNING",
                "propagate": False,
            },
            "apscheduler": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "kvcache": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
