import logging
from logging.config import dictConfig

from app.config import settings

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging; level defaults to LOG_LEVEL from settings."""
    resolved = (level or settings.log_level).upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": DEFAULT_LOG_FORMAT,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["default"],
                "level": resolved,
            },
        }
    )

    # SQL echo is noisy at DEBUG; keep it opt-in
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
