import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.domain.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Bad Request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first['msg']}" if location else first["msg"]


def register_exception_handlers(app: FastAPI) -> None:
    """Traduce los errores del dominio a respuestas JSON {"message": ...}."""

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _describe(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_error(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(PersistenceError)
    async def persistence_error(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        logger.error(
            f"❌ Error de persistencia en {request.method} {request.url.path}",
            exc_info=exc,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)
