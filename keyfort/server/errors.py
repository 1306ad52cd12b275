import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from .config import settings
from .logging_config import sanitize

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    "UNAUTHORIZED": "You must be logged in to perform this action",
    "NOT_FOUND": "The requested resource was not found",
    "VALIDATION_ERROR": "Invalid input provided",
    "SERVER_ERROR": "Something went wrong on our end. Please try again later",
    "DATABASE_ERROR": "Unable to process your request. Please try again",
    "UNAVAILABLE": "Service temporarily unavailable. Please try again",
    "CONFLICT": "This item already exists",
}


def _context(request: Request) -> dict:
    endpoint = request.scope.get("endpoint")
    return {
        "operation": getattr(endpoint, "__name__", request.url.path),
        "user_id": getattr(request.state, "user_id", None),
    }


def log_error(request: Request, exc: Exception) -> None:
    ctx = _context(request)
    if settings.DEBUG:
        logger.error("API error in %s (user %s)", ctx["operation"], ctx["user_id"], exc_info=exc)
    else:
        logger.error(
            "API error in %s (user %s): %s: %s",
            ctx["operation"], ctx["user_id"], type(exc).__name__, sanitize(str(exc)),
        )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    content = {"detail": ERROR_MESSAGES["VALIDATION_ERROR"]}
    if settings.DEBUG:
        content["errors"] = [
            {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log_error(request, exc)
    if isinstance(exc, IntegrityError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": ERROR_MESSAGES["CONFLICT"]})
    if isinstance(exc, OperationalError):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": ERROR_MESSAGES["UNAVAILABLE"]}
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": ERROR_MESSAGES["DATABASE_ERROR"]}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log_error(request, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": ERROR_MESSAGES["SERVER_ERROR"]}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
