"""Map domain exceptions to HTTP responses"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from credit_ledger.api.dependencies import get_request_id
from credit_ledger.domain.exceptions import (
    NotFoundError,
    RepositoryFailureError,
    UnauthenticatedError,
    ValidationError,
)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        # Same body whether the row is missing or belongs to another shopkeeper
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated(request: Request, exc: UnauthenticatedError):
        return JSONResponse(status_code=401, content={"detail": "Missing shopkeeper identity"})

    @app.exception_handler(ValidationError)
    async def invalid(request: Request, exc: ValidationError):
        logging.warning(f"Validation failed: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RepositoryFailureError)
    async def storage_unavailable(request: Request, exc: RepositoryFailureError):
        logging.error(f"Repository failure: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=503, content={"detail": "Ledger storage unavailable"})

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logging.error(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
