from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from attention_editor.core.errors import AccessDeniedError, InvalidPathError, NotFoundError

logger = logging.getLogger(__name__)


class BadRequestError(Exception):
    """Raised by routes when required input is missing or no folder is selected."""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(BadRequestError)
    async def _bad_request(_request: Request, exc: BadRequestError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(InvalidPathError)
    async def _invalid_path(_request: Request, exc: InvalidPathError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(AccessDeniedError)
    async def _access_denied(request: Request, exc: AccessDeniedError) -> JSONResponse:
        logger.warning("Access denied for %s %s: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_403_FORBIDDEN, "Access denied")

    @app.exception_handler(OSError)
    async def _os_error(request: Request, exc: OSError) -> JSONResponse:
        logger.error("Filesystem error for %s %s: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Filesystem error: {exc.strerror or exc}")
