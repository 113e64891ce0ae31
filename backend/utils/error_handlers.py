"""
Error handling decorators and utilities for API endpoints.

Centralizes the mapping from the application exception hierarchy to HTTP
responses so every router reports errors the same way.
"""

from functools import wraps
from typing import Callable
from fastapi import HTTPException
import logging

from constants import HTTPStatus
from exceptions import (
    ValidationError,
    NotFoundError,
    ConflictError,
    MergeTypeError,
    ApplicationError,
)

logger = logging.getLogger(__name__)


def error_detail(error: ApplicationError) -> dict:
    """Body of the ``detail`` member for an application error."""
    return {"message": error.message, **error.details}


def handle_api_errors(operation_name: str, not_found_status: int = HTTPStatus.NOT_FOUND):
    """
    Decorator to handle common API errors consistently across endpoints.

    This decorator catches application exceptions and converts them to
    HTTPException responses whose detail is {"message", "entity", "field",
    "reason", ...}.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Update shopping cart")
        not_found_status: Status reported for NotFoundError (PUT reports 400)

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.get("/{id}")
        @handle_api_errors("Get product")
        def get_product(...):
            return service.find_one(id)
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ValidationError as e:
                # Checked before ConflictError: IdentifierExistsError is both
                logger.warning(f"{operation_name} - Validation error: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.BAD_REQUEST,
                    detail=error_detail(e)
                )
            except NotFoundError as e:
                logger.warning(f"{operation_name} - Not found: {e.message}")
                raise HTTPException(
                    status_code=not_found_status,
                    detail=error_detail(e)
                )
            except ConflictError as e:
                logger.warning(f"{operation_name} - Conflict: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.CONFLICT,
                    detail=error_detail(e)
                )
            except MergeTypeError as e:
                logger.error(f"{operation_name} - Merge type error: {e.message}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"{operation_name} failed: {e.message}"
                )
            except ApplicationError as e:
                logger.error(f"{operation_name} - Application error: {e.message}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"{operation_name} failed: {e.message}"
                )
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"{operation_name} failed. Please check server logs or contact support."
                )

        return wrapper

    return decorator
