"""structlog setup for the ``cspbuilder`` logger namespace.

Only loggers under ``cspbuilder`` get the handler, so installing the
middleware never replaces the host application's root logging config.
"""

from __future__ import annotations

import logging
import sys

import structlog

from cspbuilder.config.loader import get_settings

LOGGER_NAMESPACE = "cspbuilder"

_handler: logging.Handler | None = None


def _rename_logger_to_module(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    if "logger" in event_dict:
        event_dict["module"] = event_dict.pop("logger")
    return event_dict


def setup_logging(log_level: str | None = None, json_format: bool | None = None) -> logging.Logger:
    """Configure structlog and attach one stdout handler to the ``cspbuilder`` logger.

    Unset arguments come from ``CSP_LOG_LEVEL`` / ``CSP_LOG_JSON``. Calling
    again swaps the handler instead of stacking a second one.
    """
    global _handler
    settings = get_settings()
    if log_level is None:
        log_level = settings.log_level
    if json_format is None:
        json_format = settings.log_json

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _rename_logger_to_module,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    ))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    package_logger.propagate = False
    _handler = handler
    return package_logger


def reset_logging() -> None:
    """Detach the handler and restore structlog defaults (for testing)."""
    global _handler
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    structlog.reset_defaults()
