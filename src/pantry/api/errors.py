"""HTTP mapping for pantry domain failures.

Protean's stock handlers cover validation failures (400). Missing resources
answer 404 and authorization failures answer 403 with the same body shape.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from pantry.exceptions import Unauthorized


def _error_response(status_code: int, exc) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": exc.messages})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error_response(404, exc)


async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, exc)


async def _unauthorized(request: Request, exc: Unauthorized) -> JSONResponse:
    return _error_response(403, exc)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _invalid)
    app.add_exception_handler(Unauthorized, _unauthorized)
