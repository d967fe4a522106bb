"""Service error taxonomy and its HTTP mapping."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for business-rule failures raised by services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Entity (or a referenced entity) does not exist among non-deleted rows."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Duplicate name, association or membership."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(ServiceError):
    """Actor lacks the ownership relation required for the mutation."""

    status_code = status.HTTP_403_FORBIDDEN


class BadRequestError(ServiceError):
    """Request is well-formed but violates a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ServiceUnavailableError(ServiceError):
    """An external collaborator could not fulfil the request."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ValidationFailedError(BadRequestError):
    """Request body failed schema validation; carries every issue found."""

    def __init__(self, issues: list[dict[str, str]], message: str = "Validation failed"):
        super().__init__(message)
        self.issues = issues


# =============================================================================
# Handlers
# =============================================================================


def format_issue_path(loc: tuple[Any, ...] | list[Any]) -> str:
    return ".".join(str(part) for part in loc)


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body: dict[str, Any] = {"detail": exc.message}
    if isinstance(exc, ValidationFailedError):
        body["issues"] = exc.issues
    if exc.status_code >= 500:
        logger.warning(
            "Service error on %s %s: %s", request.method, request.url.path, exc.message
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    issues = [
        {"path": format_issue_path(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "issues": issues},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors and request validation errors to HTTP responses."""
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
