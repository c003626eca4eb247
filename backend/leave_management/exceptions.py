import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
    status_code: int


class AppError(Exception):
    """Base application exception."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing required input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """A referenced employee, leave type, manager or leave request does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class DuplicateError(AppError):
    """A uniqueness constraint would be violated."""

    status_code = status.HTTP_409_CONFLICT


class DateRangeError(AppError):
    """End date precedes start date."""

    status_code = status.HTTP_400_BAD_REQUEST


class PolicyViolation(AppError):
    """Requested days exceed the leave type's maximum."""

    status_code = status.HTTP_400_BAD_REQUEST


class InsufficientBalance(AppError):
    """Requested days exceed the employee's remaining balance."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """The target is not in a state that allows the operation."""

    status_code = status.HTTP_409_CONFLICT


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning("%s %s rejected: %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
        ).model_dump(),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
