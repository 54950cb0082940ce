"""
Shared logging configuration for the token issuer.
"""

import sys
import structlog
import logging
import time
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Context variable for correlating log lines with the application a token is issued for
application_id_var: ContextVar[Optional[str]] = ContextVar('application_id', default=None)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structured logging for a service.

    Called once at start-up by the application embedding the issuer, e.g.
    ``configure_logging("tokens", get_config().log_level)``. Library code only
    calls :func:`get_logger`.
    """

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            add_correlation_context,
            add_timestamp,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    logging.getLogger(service_name).setLevel(getattr(logging, log_level.upper()))


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add service context to log events."""
    # Extract service name from logger name
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        service_name = logger_name.split(".")[0]
        event_dict["service"] = service_name

    return event_dict


def add_correlation_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add correlation context to log events."""
    application_id = application_id_var.get()
    if application_id:
        event_dict.setdefault("application_id", application_id)

    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


def bind_application_context(application_id: Optional[str]):
    """Set the application context for subsequent log lines.

    Returns the token needed to restore the previous value.
    """
    return application_id_var.set(application_id)


def clear_context(token=None):
    """Clear (or restore) the application context."""
    if token is not None:
        application_id_var.reset(token)
    else:
        application_id_var.set(None)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
