"""Structured logging configuration.

JSON (or console) logs on stdout via structlog with stdlib integration.
Request-scoped context (request_id) is bound by the middleware and merged
into every event through structlog.contextvars. LOG_LEVEL and LOG_FORMAT
are read from the environment.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any, Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Stamp the event with an ISO 8601 UTC time."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class LoggingSettings(BaseSettings):
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # "console" renders colored key=value lines for local development
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def configure_logging(settings: LoggingSettings) -> None:
    """Route structlog and stdlib loggers through one formatter.

    Called once when this module is imported; later get_logger() calls
    share the configuration.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": renderer,
                    "foreign_pre_chain": shared_processors,
                },
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "stream": sys.stdout,
                },
            },
            "loggers": {
                "": {"handlers": ["stdout"], "level": settings.log_level, "propagate": True},
                # uvicorn's access log duplicates request_completed
                "uvicorn.access": {"level": "WARNING"},
                # one INFO line per geocoder call otherwise
                "httpx": {"level": "WARNING"},
            },
        }
    )


configure_logging(LoggingSettings())


def get_logger(name: str) -> BoundLogger:
    """Return a structured logger bound to ``name``.

    Example:
        logger = get_logger(__name__)
        logger.info("bootcamp_created", bootcamp_id="5d713995b721c3bb38c1f5d0")
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
