"""
Configures structured logging for the application using structlog.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Any, Dict, List

import structlog

if TYPE_CHECKING:
    from articlelens.config.config import MonitoringConfig

REDACTED = "***"
SECRET_KEYS = frozenset({"credential", "api_key", "apikey", "key", "geminiapikey"})

_KEY_QUERY_PARAM = re.compile(r"([?&]key=)[^&\s]+", re.IGNORECASE)

# --- Custom Processors ---


def redact_secrets(logger: logging.Logger, method_name: str, event_dict: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Masks API keys before a record is rendered: values under credential-like
    keys, and ``key=`` query parameters inside any string value (request URLs
    and error messages can carry them).
    """
    for name, value in list(event_dict.items()):
        if isinstance(name, str) and name.lower() in SECRET_KEYS and value:
            event_dict[name] = REDACTED
        elif isinstance(value, str) and "key=" in value.lower():
            event_dict[name] = _KEY_QUERY_PARAM.sub(rf"\g<1>{REDACTED}", value)
    return event_dict


# --- Configuration ---


def configure_logging(config: MonitoringConfig) -> None:
    """
    Sets up structlog to handle all logging for the application.
    """
    shared_processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        redact_secrets,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    log_renderer: Any
    if config.log_file:
        # Structured JSON logging for file output
        log_renderer = structlog.processors.JSONRenderer()
        handler: logging.Handler = logging.FileHandler(config.log_file)
    else:
        log_renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                log_renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(config.log_level.upper())

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("articlelens.logging")
    logger.debug("Logging configured", level=config.log_level, output=config.log_file or "console")
