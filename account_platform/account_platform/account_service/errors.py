"""
Error taxonomy for the account service.

Every error carries the HTTP status and the client-facing detail it maps to.
The detail is always generic; internal causes are chained with ``from`` and
logged server-side only.
"""
from typing import Optional
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# Validation

class MissingFieldError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Missing required field"


# Authentication

class TokenError(ServiceError):
    """Base for failures of the bearer token check."""


class MissingTokenError(TokenError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Access token is required"


class InvalidTokenError(TokenError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Invalid token"


class InvalidCredentialsError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"


# Lookup / conflicts

class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class DuplicateEmailError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Email already registered"


# Internal

class InternalError(ServiceError):
    pass


class CredentialFormatError(InternalError):
    """A stored password hash could not be parsed."""


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, MissingTokenError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed or mistyped bodies are reported like missing fields
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": ServiceError.detail},
    )
