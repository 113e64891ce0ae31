"""
Structured Logging Utilities

Provides utilities for adding structured context to log messages,
improving observability and debugging.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps

from exceptions import ApplicationError


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})


def configure_logging(log_dir: Path, level: str = 'INFO') -> Path:
    """
    Configure the root logger with a console handler and a rotating file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_dir: Directory for storefront.log (created if missing)
        level: Root logger level name

    Returns:
        Path of the log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / 'storefront.log'

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setFormatter(formatter)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, '_storefront', False):
            root.removeHandler(handler)
            handler.close()
    for handler in (file_handler, console_handler):
        handler._storefront = True
        root.addHandler(handler)
    root.setLevel(level)
    return log_file


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Cart linked", extra={
            "resource": "shopping-carts",
            "entity_id": cart.id,
        })
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Add context from ContextVar to extra dict.

        Args:
            extra: Additional context dict

        Returns:
            Merged context dict
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    This context will be automatically included in all log records
    within the current context (typically a request).

    Args:
        **kwargs: Key-value pairs to add to context

    Example:
        set_logging_context(method="PATCH", path="/api/shopping-carts/3")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def get_logging_context() -> Dict[str, Any]:
    """Copy of the current logging context."""
    return _logging_context.get().copy()


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def log_operation(operation_name: str):
    """
    Decorator to log start/end/failure of a service operation.

    The entity id is taken from an ``id`` keyword or the first positional
    argument after ``self`` when it is an int; the resource name from
    ``self.resource.name`` when present.
    Application errors are logged at WARNING; anything else at ERROR with
    its traceback.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("delete")
        def delete(self, id: int):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            resource = getattr(getattr(args[0], "resource", None), "name", None) if args else None
            if resource:
                context["resource"] = resource
            if "id" in kwargs:
                context["entity_id"] = kwargs["id"]
            elif len(args) > 1 and isinstance(args[1], int):
                context["entity_id"] = args[1]

            label = " ".join(str(context[k]) for k in ("resource", "entity_id") if k in context)
            logger.debug(f"Starting {operation_name} {label}".rstrip(), extra=context)

            try:
                result = func(*args, **kwargs)
            except ApplicationError as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.warning(f"Failed {operation_name} {label}: {type(e).__name__}: {e}", extra=context)
                raise
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name} {label}: {type(e).__name__}: {e}", extra=context, exc_info=True)
                raise
            logger.info(f"Completed {operation_name} {label}".rstrip(), extra=context)
            return result

        return wrapper

    return decorator
