"""
Translation of store failures into HTTP errors.

The store's own message is always passed through verbatim so the client can
show it to the user.
"""

from fastapi import HTTPException, status
from postgrest.exceptions import APIError
import logging

logger = logging.getLogger(__name__)

RLS_VIOLATION = "42501"
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: Exception) -> bool:
    return isinstance(exc, APIError) and exc.code == UNIQUE_VIOLATION


def store_error(exc: Exception, action: str) -> HTTPException:
    """Map an exception raised by a store call to an HTTPException"""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, APIError):
        message = exc.message or str(exc)
        logger.warning(f"Store rejected {action}: [{exc.code}] {message}")
        if exc.code == RLS_VIOLATION:
            return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)
        if exc.code == UNIQUE_VIOLATION:
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    logger.error(f"Unexpected error during {action}: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
