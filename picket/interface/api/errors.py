"""Mapping of domain and adapter errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from picket.adapter.error import UpstreamError
from picket.domain.error import (
    DuplicateAccountError,
    FieldViolation,
    ForbiddenError,
    InvalidInvitationError,
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)


def _error(status_code: int, detail: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, **extra})


def _violations_response(violations: list[FieldViolation]) -> JSONResponse:
    return _error(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        errors=[v.model_dump() for v in violations],
    )


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logfire.info(
        "Request rejected", path=request.url.path, fields=exc.fields
    )
    return _violations_response(exc.violations)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies in the same shape as form errors."""
    violations = []
    for error in exc.errors():
        # loc is ("body", field, ...) or ("query", name)
        loc = [str(part) for part in error["loc"][1:]] or ["__root__"]
        violations.append(FieldViolation(field=".".join(loc), message=error["msg"]))
    return _violations_response(violations)


async def handle_invalid_invitation(
    request: Request, exc: InvalidInvitationError
) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def handle_duplicate_account(
    request: Request, exc: DuplicateAccountError
) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(exc))


async def handle_not_authenticated(
    request: Request, exc: NotAuthenticatedError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def handle_forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return _error(status.HTTP_403_FORBIDDEN, str(exc))


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, f"{exc.resource} not found")


async def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    logfire.error(
        "Upstream delivery failed", path=request.url.path, error=str(exc)
    )
    return _error(status.HTTP_502_BAD_GATEWAY, "Delivery failed")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logfire.error(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        _exc_info=exc,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(InvalidInvitationError, handle_invalid_invitation)
    app.add_exception_handler(DuplicateAccountError, handle_duplicate_account)
    app.add_exception_handler(NotAuthenticatedError, handle_not_authenticated)
    app.add_exception_handler(ForbiddenError, handle_forbidden)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(UpstreamError, handle_upstream_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
