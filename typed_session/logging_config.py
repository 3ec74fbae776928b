"""
Logging configuration for the typed-session API.

Application logs go to one stdout handler. The session stores get their
own level so decode/encode failures (logged at DEBUG) can be switched on
without turning up everything else. Health check probes are kept out of
the uvicorn access log.
"""

import logging
from typing import Any, Dict, Optional

SESSION_STORE_LOGGER = "typed_session.modules.session"


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("GET" in message and "/health" in message)


def get_logging_config(
    log_level: str = "INFO", session_log_level: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the dictConfig for the API.

    Args:
        log_level: Level for the typed_session loggers
        session_log_level: Level for the session stores, defaults to ``log_level``
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"health_check": {"()": HealthCheckFilter}},
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check"],
            },
        },
        "loggers": {
            "typed_session": {"handlers": ["default"], "level": log_level, "propagate": False},
            # Propagates to the typed_session handler
            SESSION_STORE_LOGGER: {"level": session_log_level or log_level},
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        },
        "root": {"level": "INFO", "handlers": ["default"]},
    }
