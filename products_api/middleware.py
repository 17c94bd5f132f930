# products_api/middleware.py

"""
Request gate and error shaping for the Products API.

`validate(rules)` builds the FastAPI dependency that every product route
runs before its handler: it reads the path parameters and JSON body,
evaluates the route's rule set and stops the request with a 400 when any
rule fails. The exception handlers below give every failure a JSON body,
so no request is left without a response.
"""
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .exceptions import InputValidationError, ProductNotFoundError, StoreError
from .schemas import FieldError
from .validation import Rule, evaluate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No se ha encontrado el producto"
SERVER_ERROR_MESSAGE = "Error interno del servidor"
INVALID_BODY_MESSAGE = "Cuerpo de la petición no válido"
CORS_ERROR_MESSAGE = "Error de CORS"


class ValidatedRequest:
    """Path parameters and body of a request whose rules all passed."""

    def __init__(self, params: Dict[str, Any], body: Dict[str, Any]):
        self.params = params
        self.body = body

    @property
    def product_id(self) -> int:
        return int(self.params["id"])


def is_json(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(request: Request) -> Tuple[Dict[str, Any], List[FieldError]]:
    """JSON object sent with the request; other content types read as empty."""
    if not is_json(request) or not (await request.body()).strip():
        return {}, []
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return {}, [FieldError(type="body", msg=INVALID_BODY_MESSAGE, location="body")]
    return body, []


def handle_input_errors(errors: List[FieldError]) -> None:
    """Halt the request when any constraint failed."""
    if errors:
        raise InputValidationError(errors)


def validate(rules: Sequence[Rule]):
    """Build the dependency that checks `rules` before the handler runs."""

    async def run_rules(request: Request) -> ValidatedRequest:
        params = dict(request.path_params)
        body, body_errors = await read_json_body(request)
        handle_input_errors(body_errors)
        handle_input_errors(evaluate(rules, params, body))
        return ValidatedRequest(params, body)

    return run_rules


# -----------------------------
# Exception handlers
# -----------------------------


async def input_validation_exception_handler(
    request: Request, exc: InputValidationError
) -> JSONResponse:
    logger.info(
        f"Rejected {request.method} {request.url.path}: "
        f"{[error.msg for error in exc.errors]}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [error.to_dict() for error in exc.errors]},
    )


async def schema_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Values that passed the rules but still do not fit the schema."""
    errors = [
        FieldError(
            msg=error["msg"],
            path=".".join(str(part) for part in error["loc"]),
            location="body",
        )
        for error in exc.errors()
    ]
    return await input_validation_exception_handler(request, InputValidationError(errors))


async def not_found_exception_handler(
    request: Request, exc: ProductNotFoundError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": NOT_FOUND_MESSAGE},
    )


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": SERVER_ERROR_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InputValidationError, input_validation_exception_handler)
    app.add_exception_handler(ValidationError, schema_exception_handler)
    app.add_exception_handler(ProductNotFoundError, not_found_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)


async def log_requests(request: Request, call_next):
    """Log one line per request: method, path, status and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.3f} ms"
    )
    return response


def reject_foreign_origins(allowed_origin: Optional[str]):
    """
    Build the HTTP middleware that refuses browser requests from any origin
    but `allowed_origin`. Requests without an Origin header pass through.
    """

    async def check_origin(request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and origin != allowed_origin:
            logger.warning(f"Refused {request.method} {request.url.path} from origin {origin}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": CORS_ERROR_MESSAGE},
            )
        return await call_next(request)

    return check_origin
