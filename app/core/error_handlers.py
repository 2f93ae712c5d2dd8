from typing import Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import AppError
from app.core.messages import resolve_message
from app.dependencies.locale import parse_accept_language
from app.schemas.api_response import ApiResponse

logger = structlog.get_logger(__name__)


def _locale(request: Request) -> str:
    return parse_accept_language(request.headers.get("accept-language"))


def _error_response(status_code: int, code: str, message: str, data=None) -> JSONResponse:
    body = ApiResponse.error(code=code, message=message, data=data)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    message = resolve_message(exc.message_key, exc.message_args, _locale(request))
    logger.warning(
        "request_rejected",
        path=request.url.path,
        code=exc.code,
        key=exc.message_key,
        detail=message,
    )
    return _error_response(exc.status_code, exc.code, message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors[".".join(location) or "request"] = error.get("msg", "invalid")
    logger.warning("validation_failed", path=request.url.path, errors=errors)
    message = resolve_message("validation.failed", (), _locale(request))
    return _error_response(400, "VALIDATION_ERROR", message, data=errors)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # unique constraints racing past the service-level duplicate checks
    logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
    message = resolve_message("resource.duplicate", (), _locale(request))
    return _error_response(409, "DUPLICATE_RESOURCE", message)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unexpected_error", path=request.url.path, exc_info=exc)
    message = resolve_message("error.unexpected", (), _locale(request))
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
