"""
Error Handlers - Presentation Layer

Render every error response as the ``{"status": ..., "error": ...}`` envelope.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gost_predict.application.dtos.prediction_dto import ErrorResponseDTO
from gost_predict.shared import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponseDTO(status=status_code, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTPException raised by controllers and routing."""
    logger.debug(
        "http.error",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail,
    )
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle query validation failures raised by FastAPI itself."""
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("http.unhandled_error", path=request.url.path, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
