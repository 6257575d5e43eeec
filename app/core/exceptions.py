from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class DomainError(Exception):
    def __init__(self, message: str, statusCode: int = 400):
        self.message = message
        self.statusCode = statusCode
        super().__init__(message)


class ValidationError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class InvalidOperationError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UnauthorizedError(DomainError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class NotFoundError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ConflictError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_409_CONFLICT)


async def domainErrorHandler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.statusCode}: {exc.message}")
    return JSONResponse(status_code=exc.statusCode, content={"detail": exc.message})


async def internalErrorHandler(request: Request, exc: Exception) -> JSONResponse:
    # Storage and transport failures never leak details to the client
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def registerExceptionHandlers(app: FastAPI):
    app.add_exception_handler(DomainError, domainErrorHandler)
    app.add_exception_handler(Exception, internalErrorHandler)
