"""ErrorResponder — maps one error occurrence to (error code, status, payload).

Invariants:
    - Construction never raises: missing error → "Unknown error", missing code →
      fallback_error_code, unmapped code → fallback_status
    - payload is rebuilt whenever error_code changes, so it always matches it
    - status follows error_code (code → status), never the reverse: set_status
      leaves error_code and payload untouched
    - Config is resolved at each derivation unless one was injected; payloads
      already built are not recomputed when the current config changes
    - send() does not catch sink failures

Design Decisions:
    - Mutators return self for chaining: ErrorResponder.build(e).set_error_code("X").send(sink)
    - Environment read through an injectable callable, fresh on every rebuild
"""

from collections.abc import Callable, Mapping
from typing import Any

from error_responder.config import read_environment_name
from error_responder.core.error_payload import build_payload, resolve_error_code
from error_responder.core.errors import unknown_error
from error_responder.core.responder_config import (
    ResponderConfig, configure, get_current_config,
)
from error_responder.core.response_sink import ResponseSink


class ErrorResponder:
    """Creates a responder primed with an error.

    The error code and status are derived from the error's code attribute
    (named by error_code_key) and the code → status map. When the error has
    no code, fallbacks are used; both can be overridden afterwards with
    set_error_code() and set_status().
    """

    def __init__(
        self,
        error: Any = None,
        *,
        config: ResponderConfig | None = None,
        environment: Callable[[], str | None] | None = None,
    ):
        self._config = config
        self._environment = environment or read_environment_name
        self.error = error if error is not None else unknown_error()
        cfg = self._resolve_config()
        self._error_code = resolve_error_code(
            self.error, cfg.error_code_key, cfg.fallback_error_code,
        )
        self._status = cfg.status_for(self._error_code)
        self._build_payload(cfg)

    @classmethod
    def build(cls, error: Any = None, **kwargs: Any) -> "ErrorResponder":
        """Factory, equivalent to the constructor."""
        return cls(error, **kwargs)

    @staticmethod
    def configure(
        overrides: Mapping[str, Any] | None = None, **kwargs: Any,
    ) -> ResponderConfig:
        """Override keys of the process-wide config for responders built after."""
        return configure(overrides, **kwargs)

    # ─── Derivation ──────────────────────────────────────────────

    def _resolve_config(self) -> ResponderConfig:
        return self._config if self._config is not None else get_current_config()

    def _build_payload(self, cfg: ResponderConfig) -> None:
        include_stack = cfg.includes_stack(self._environment())
        self._payload = build_payload(self.error, self._error_code, include_stack)

    # ─── Mutators ────────────────────────────────────────────────

    def set_error_code(self, error_code: Any) -> "ErrorResponder":
        """Set the error code. The status is re-inferred from the new code."""
        cfg = self._resolve_config()
        self._error_code = error_code
        self._status = cfg.status_for(error_code)
        self._build_payload(cfg)
        return self

    def set_status(self, status: int) -> "ErrorResponder":
        """Set the status code. The error code is unchanged."""
        self._status = status
        return self

    # ─── Accessors ───────────────────────────────────────────────

    def get_error_code(self) -> Any:
        return self._error_code

    def get_status(self) -> int:
        return self._status

    def get_payload(self) -> dict:
        return self._payload

    error_code = property(get_error_code)
    status = property(get_status)
    payload = property(get_payload)

    # ─── Output ──────────────────────────────────────────────────

    def send(self, sink: ResponseSink) -> "ErrorResponder":
        """Write status and payload to the sink."""
        sink.set_status(self._status).emit_json(self._payload)
        return self

    def __repr__(self) -> str:
        return (
            f"ErrorResponder(error_code={self._error_code!r}, "
            f"status={self._status!r})"
        )
