# ABOUTME: Structured logging setup using structlog on top of stdlib logging.
# ABOUTME: Call configure_logging once at process start; modules use structlog.get_logger.

import logging

import structlog

from business_network.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for structured logging (JSON or console).

    Args:
        settings: Settings providing log_level and log_format. Defaults to
            the cached application settings.
    """
    settings = settings if settings is not None else get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        final_processor: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [final_processor],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    root_logger.setLevel(settings.log_level.upper())

    # SQL echo stays off unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
