"""
Logging for the Life Tracker API.

All application loggers live under the ``life_tracker`` namespace. The
namespace gets its own handlers and does not propagate, so uvicorn's root
configuration never doubles our lines. Request lines are written by the app's
middleware through ``log_request`` which is why uvicorn's own access log is
quieted along with the database and migration chatter.
"""
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional


APP_LOGGER_NAME = "life_tracker"
REQUEST_LOGGER_NAME = f"{APP_LOGGER_NAME}.requests"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second create_app() replaces them instead of stacking
_HANDLER_TAG = "_life_tracker_handler"

QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "uvicorn.access",
    "httpx",
)

# Requests slower than this are logged at WARNING
SLOW_REQUEST_MS = float(os.getenv("SLOW_REQUEST_MS", "500"))


def _level(name: Optional[str], default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.upper(), default)


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def _build_handlers(log_file: Optional[str], level: int) -> list:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    handlers = [console]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        _tagged(handler)
    return handlers


def setup_logging(
    app_log_level: Optional[str] = None,
    third_party_log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the ``life_tracker`` logger tree.

    Arguments fall back to APP_LOG_LEVEL (INFO), THIRD_PARTY_LOG_LEVEL
    (WARNING) and LOG_FILE (console only when unset). Safe to call once per
    app instance; handlers from an earlier call are swapped out, and any
    handler someone else attached is left alone.
    """
    app_level = _level(app_log_level or os.getenv("APP_LOG_LEVEL"), logging.INFO)
    quiet_level = _level(third_party_log_level or os.getenv("THIRD_PARTY_LOG_LEVEL"), logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(app_level)
    for handler in [h for h in app_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        app_logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_file or os.getenv("LOG_FILE"), app_level):
        app_logger.addHandler(handler)
    app_logger.propagate = False

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(quiet_level)

    return app_logger


def get_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    """
    Module names inside the package already start with ``life_tracker.`` and
    are used as-is; anything else is nested under the app logger.
    """
    if name == APP_LOGGER_NAME or name.startswith(f"{APP_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def log_request(method: str, path: str, status_code: int, elapsed_ms: float) -> None:
    """One line per handled request; server errors and slow calls stand out."""
    if status_code >= 500:
        level = logging.ERROR
    elif elapsed_ms >= SLOW_REQUEST_MS:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.getLogger(REQUEST_LOGGER_NAME).log(
        level, f"{method} {path} -> {status_code} ({elapsed_ms:.1f} ms)"
    )
