"""
Global exception handlers and custom exception classes.
"""
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class StorageException(AppException):
    """Raised when the underlying database rejects or fails an operation."""
    def __init__(self, detail: str = "Storage unavailable"):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, detail)


class RequestTimeoutException(AppException):
    """Raised when an operation runs past its caller-supplied deadline."""
    def __init__(self, detail: str = "Operation timed out"):
        super().__init__(status.HTTP_504_GATEWAY_TIMEOUT, detail)


class HashingFailure(AppException):
    """Raised when a secret cannot be hashed (e.g. it exceeds the algorithm's limit)."""
    def __init__(self, detail: str = "Password could not be processed"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)


class ResourceNotFoundException(HTTPException):
    """Raised when a requested record does not exist."""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ResourceConflictException(HTTPException):
    """Raised when a write collides with a uniqueness rule."""
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.error(f"Application error on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    # Submitted input is dropped: passwords must never reach the logs
    errors = [{"loc": err.get("loc"), "msg": err.get("msg"), "type": err.get("type")} for err in exc.errors()]
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": errors
        }
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
