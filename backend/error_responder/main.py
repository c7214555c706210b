"""Error Responder API — FastAPI composition root.

Invariants:
    - Logging configured once, on startup, via the lifespan context manager
    - Global error handlers map every exception → ErrorResponder payload
    - Startup overrides go through ErrorResponder.configure, so they reach
      every request regardless of which task serves it

Design Decisions:
    - create_app factory over a module-level app: tests build isolated apps
      with their own ResponderConfig
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from error_responder.api.error_handlers import register_error_handlers
from error_responder.config import get_settings
from error_responder.core.responder_config import ResponderConfig
from error_responder.infrastructure.observability import setup_logging
from error_responder.services.error_responder import ErrorResponder

logger = logging.getLogger(__name__)


def create_app(
    config: ResponderConfig | None = None,
    configure_logging: bool = True,
    overrides: Mapping[str, Any] | None = None,
) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        if configure_logging:
            settings = get_settings()
            setup_logging(settings.log_level, settings.log_format)
        if overrides:
            ErrorResponder.configure(overrides)
        logger.info("Error Responder API started")
        yield
        logger.info("Error Responder API shutting down")

    app = FastAPI(title="Error Responder API", version="1.0.0", lifespan=lifespan)
    register_error_handlers(app, config)
    return app
