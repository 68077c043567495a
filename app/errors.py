from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger


class AppError(Exception):
    """Base class for every error the services surface to a caller.

    Each kind carries the HTTP status it maps to and a default message.
    Messages never contain credentials.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"
    headers = None

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# =========================
# Bad input
# =========================
class MissingField(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Missing required fields"


class CategoryNotFound(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Category does not exist"


class DuplicateUsername(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Username already exists"


class DuplicateCategory(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Category already exists"


# =========================
# Identity
# =========================
class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid username or password"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not allowed to access this resource"


# =========================
# Lookup / storage
# =========================
class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class StoreFailure(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Storage operation failed"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Unhandled database error on {request.url.path}: {exc.__class__.__name__}")
        failure = StoreFailure()
        return JSONResponse(
            status_code=failure.status_code,
            content={"detail": failure.detail},
        )
