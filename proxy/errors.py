"""
Client-facing error taxonomy and the flat {"error": ...} envelope.
"""
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """An error whose message is safe to show to the client"""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(ServiceError):
    """Client-correctable failure (bad input, rejected exchange)"""
    status_code = 400


class ServerError(ServiceError):
    """Failure on our side or in the profile backend"""
    status_code = 500


class NotFoundError(ServiceError):
    status_code = 404


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return error_response(exc.message, exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors in the same envelope

    Unknown paths and unsupported methods both come back as 404.
    """
    if exc.status_code in (404, 405):
        return error_response("Not found", 404)
    return error_response(str(exc.detail), exc.status_code)


def register_error_handlers(app: FastAPI):
    """Attach the envelope handlers to an application"""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
