from litestar import Request, Response
from litestar.exceptions import HTTPException
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from mcjars import logger


def error_response(status_code: int, errors: list[str]) -> Response:
    return Response({"success": False, "errors": errors}, status_code=status_code)


def _format_extra(error) -> str:
    # Litestar's own parameter validation reports {"key": ..., "message": ...} dicts
    if isinstance(error, dict):
        key, message = error.get("key"), error.get("message", "")
        return f"{key}: {message}" if key else str(message)
    return str(error)


def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    if isinstance(exc.extra, list) and exc.extra:
        errors = [_format_extra(error) for error in exc.extra]
    else:
        errors = [exc.detail]
    return error_response(exc.status_code, errors)


def internal_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(HTTP_500_INTERNAL_SERVER_ERROR, ["Internal server error"])
