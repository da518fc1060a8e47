import logging
from typing import Any, Optional, Dict
from fastapi.responses import JSONResponse

from app.utils.exceptions import ContestError

logger = logging.getLogger(__name__)


def success_response(
    message: str = "Success",
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """
    Standard success response

    Args:
        message: Success message
        data: Response data (optional)
        status_code: HTTP status code (default: 200)

    Returns:
        JSONResponse with success format
    """
    response = {
        "success": True,
        "message": message
    }

    if data is not None:
        response["data"] = data

    return JSONResponse(content=response, status_code=status_code)


def error_response(
    message: str = "Error",
    status_code: int = 400
) -> JSONResponse:
    """
    Standard error response

    Args:
        message: Error message
        status_code: HTTP status code (default: 400)

    Returns:
        JSONResponse with error format
    """
    return JSONResponse(
        content={
            "success": False,
            "message": message
        },
        status_code=status_code
    )


def validation_error_response(
    message: str = "Validation error",
    errors: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    """
    Standard validation error response

    Args:
        message: Validation error message
        errors: Dictionary of validation errors (optional)

    Returns:
        JSONResponse with validation error format (422)
    """
    response = {
        "success": False,
        "message": message
    }

    if errors:
        response["errors"] = errors

    return JSONResponse(content=response, status_code=422)


def contest_error_response(error: ContestError) -> JSONResponse:
    """Convert a raised ContestError into the error envelope"""
    return error_response(message=error.message, status_code=error.status_code)


def internal_error_response(
    message: str,
    error: Exception
) -> JSONResponse:
    """
    Log an unexpected failure with its traceback and return a generic 500.

    The client only ever sees ``message``; the exception text stays in the log.
    """
    logger.error(f"[ERROR] {message}: {type(error).__name__}: {error}", exc_info=error)
    return error_response(message=message, status_code=500)
