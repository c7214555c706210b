"""Error Handlers — global FastAPI exception handlers built on ErrorResponder.

Invariants:
    - Every handled error leaves as {"error": {code, message[, stack]}}
    - HTTPException keeps its status code and headers; detail becomes the message
      (structured details as JSON text); 204/304 are sent without a body
    - RequestValidationError → VALIDATION_ERROR, 400 unless the code is mapped
    - 5xx logged at ERROR with traceback, everything else at WARNING

Design Decisions:
    - Three-layer handler: HTTPException (framework), validation (Pydantic),
      catch-all (Exception) — all funnel into ErrorResponder.send
    - config=None reads the current config per request, so ErrorResponder.configure
      at startup (e.g. in a lifespan) applies without re-registering
"""

import json
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from error_responder.core.errors import ResponderError
from error_responder.core.responder_config import (
    ResponderConfig, get_current_config,
)
from error_responder.infrastructure.fastapi_sink import JSONResponseSink
from error_responder.services.error_responder import ErrorResponder

logger = logging.getLogger(__name__)

VALIDATION_ERROR_CODE = "VALIDATION_ERROR"
BODILESS_STATUSES = frozenset({204, 304})


def register_error_handlers(
    app: FastAPI, config: ResponderConfig | None = None,
) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_http_error_handler(app, config)
    _register_validation_error_handler(app, config)
    _register_generic_error_handler(app, config)


def _respond(
    request: Request, responder: ErrorResponder, exc: Exception,
    headers: dict[str, str] | None = None,
):
    sink = JSONResponseSink(headers=headers)
    responder.send(sink)
    extra = {
        "error_code": responder.error_code,
        "status": responder.status,
        "path": request.url.path,
    }
    if isinstance(responder.status, int) and responder.status >= 500:
        logger.error(
            f"Unhandled error on {request.url.path}: {exc}",
            extra=extra, exc_info=exc,
        )
    else:
        logger.warning(
            f"Error response on {request.url.path}: {responder.error_code}",
            extra=extra,
        )
    return sink.response


def _detail_message(detail) -> str:
    """String details as is; structured ones (dict/list) as JSON text."""
    if isinstance(detail, str):
        return detail
    return json.dumps(detail, ensure_ascii=False, default=str)


def _register_http_error_handler(
    app: FastAPI, config: ResponderConfig | None,
) -> None:

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        """Framework HTTP errors keep their status; detail becomes the message."""
        if exc.status_code in BODILESS_STATUSES:
            logger.info(
                f"Bodiless response on {request.url.path}",
                extra={"status": exc.status_code, "path": request.url.path},
            )
            return Response(status_code=exc.status_code, headers=exc.headers)
        error = ResponderError(_detail_message(exc.detail))
        error.__cause__ = exc
        responder = ErrorResponder(error, config=config)
        responder.set_status(exc.status_code)
        return _respond(request, responder, exc, headers=exc.headers)


def _register_validation_error_handler(
    app: FastAPI, config: ResponderConfig | None,
) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        error = ResponderError("Invalid request data")
        error.__cause__ = exc
        responder = ErrorResponder(error, config=config)
        responder.set_error_code(VALIDATION_ERROR_CODE)
        cfg = config if config is not None else get_current_config()
        if VALIDATION_ERROR_CODE not in cfg.code_status_map:
            responder.set_status(status.HTTP_400_BAD_REQUEST)
        return _respond(request, responder, exc)


def _register_generic_error_handler(
    app: FastAPI, config: ResponderConfig | None,
) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — code and status come from the error and the code map."""
        responder = ErrorResponder(exc, config=config)
        return _respond(request, responder, exc)
