import logging
from http import HTTPStatus
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from app.player.exceptions import ERR_VALIDATION_FAILED, PlayerError, PlayerValidationFailed
from app.player.schemas import ErrorResponse

logger = logging.getLogger(__name__)

ERR_UNEXPECTED = "An unexpected error occurred"


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    errors: Optional[List[str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def format_validation_errors(errors) -> List[str]:
    """Pasa los errores de pydantic al formato "<campo>: <mensaje>"."""
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        message = err.get("msg", "")
        if err.get("type") == "value_error" and (err.get("ctx") or {}).get("error") is not None:
            message = str(err["ctx"]["error"])
        formatted.append(f"{field}: {message}" if field else message)
    return formatted


async def player_error_handler(request: Request, exc: PlayerError) -> JSONResponse:
    logger.warning("%s: %s", exc.error, exc.message)
    errors = exc.errors if isinstance(exc, PlayerValidationFailed) else None
    return _error_response(request, exc.status_code, exc.error, exc.message, errors)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.warning("Validation error on %s: %s", request.url.path, errors)
    return _error_response(
        request, HTTP_400_BAD_REQUEST, PlayerValidationFailed.error, ERR_VALIDATION_FAILED, errors
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        reason = HTTPStatus(exc.status_code).phrase
    except ValueError:
        reason = "Error"
    response = _error_response(request, exc.status_code, reason, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return _error_response(
        request, HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", ERR_UNEXPECTED
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlayerError, player_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
