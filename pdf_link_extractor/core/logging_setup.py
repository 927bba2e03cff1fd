"""Shared structlog/stdlib logging bootstrap for the Streamlit process."""

import logging
import logging.config
import sys
from pathlib import Path

import structlog
from structlog.dev import ConsoleRenderer

_CONFIGURED = False


def _is_local_environment(environment: str) -> bool:
    """Check if running in local development environment."""
    return environment.lower() in ("", "local", "development", "dev")


def configure_logging(log_level: str, environment: str = "local", log_file: str | None = None) -> None:
    """Configure structured logging with environment-appropriate format.

    - Local/development: Human-readable console output with colors
    - Production: JSON output for log aggregation

    Streamlit re-executes the app script on every interaction, so repeated
    calls are no-ops after the first.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    # Avoid Windows console encoding crashes when URLs or titles contain non-ASCII text.
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="backslashreplace")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8", errors="backslashreplace")

    is_local = _is_local_environment(environment)
    use_file = bool(log_file) and is_local

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if is_local:
        renderer = ConsoleRenderer(colors=True, pad_event=40)
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter_config = {
        "()": structlog.stdlib.ProcessorFormatter,
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        "foreign_pre_chain": shared_processors,
    }

    handlers: dict = {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "structured",
            "stream": "ext://sys.stdout",
        },
    }
    if use_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "structured",
            "encoding": "utf-8",
            "errors": "backslashreplace",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": formatter_config,
            },
            "handlers": handlers,
            "root": {
                "handlers": ["default", *(["file"] if use_file else [])],
                "level": log_level,
            },
            # One line per request at INFO is too chatty with many lookups in flight
            "loggers": {
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
                "pypdf": {"level": "WARNING"},
            },
        }
    )

    _CONFIGURED = True
