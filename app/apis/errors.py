from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import FlashcardsError, UnparsableGenerationOutput
from app.core.logging import get_logger


logger = get_logger(__name__)


async def flashcards_error_handler(request: Request, exc: FlashcardsError) -> JSONResponse:
    if isinstance(exc, UnparsableGenerationOutput):
        logger.error(f"Unparsable generation output on {request.url.path}: {exc.raw!r}")
    elif exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Malformed request on {request.url.path}: {exc.errors()}")
    message = "Username required" if request.url.path == "/user" else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FlashcardsError, flashcards_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
