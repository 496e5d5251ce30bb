"""
HTTP error mapping for the Library System API.

- Malformed or ill-typed request parameters become 400 instead of FastAPI's
  default 422, so every input problem shares one status code.
- A ``RepositoryException`` that escapes a handler becomes a generic 500.
- Handlers raise ``bad_request``/``not_found`` and return ``server_error``
  for the outcomes they decide themselves.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..database import RepositoryException

logger = logging.getLogger(__name__)

INVALID_INPUT = "Input is invalid"
UNEXPECTED_ERROR = "An unexpected error occurred while processing the request."

# Keys of a pydantic error that echo the rejected input
REDACTED_ERROR_KEYS = frozenset({"input", "ctx"})


def bad_request(detail: str = INVALID_INPUT) -> HTTPException:
    logger.warning("Rejected request: %s", detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def server_error(message: str) -> JSONResponse:
    """500 response carrying an operation-specific message."""
    logger.exception(message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": message}
    )


def redacted_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the submitted values, which may hold passwords."""
    return [
        {key: value for key, value in error.items() if key not in REDACTED_ERROR_KEYS}
        for error in exc.errors()
    ]


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = jsonable_encoder(redacted_errors(exc))
    logger.warning("Invalid request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": errors},
    )


async def repository_error_handler(request: Request, exc: RepositoryException) -> JSONResponse:
    logger.error("Unhandled store error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": UNEXPECTED_ERROR},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RepositoryException, repository_error_handler)
