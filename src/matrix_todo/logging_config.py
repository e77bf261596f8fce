"""Structured JSON logging configuration.

Emits one JSON object per record on stdout with GCP-compatible field names
(``severity``, ``timestamp``, ``logger``). Webhook handling logs the event
key in its messages, so a single reaction can be traced across the
synchronous gates and the background job.

Usage:
    from matrix_todo.logging_config import configure_logging
    configure_logging(settings.log_level)
"""

import logging
import logging.config

# Client libraries that log every HTTP round trip at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "hpack", "slack_sdk", "google_genai")

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "matrix-todo",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {name: {"level": "WARNING"} for name in _CHATTY_LOGGERS},
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply the JSON logging configuration with ``level`` on the root logger.

    Called once from the FastAPI lifespan with ``Settings.log_level``.
    """
    config = {**LOGGING_CONFIG, "root": {**LOGGING_CONFIG["root"], "level": level.upper()}}
    logging.config.dictConfig(config)
