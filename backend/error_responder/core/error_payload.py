"""Error Payload — pure extraction of code/message/stack and payload assembly.

Invariants:
    - Errors may be exceptions, plain objects or mappings; reads never raise
    - Only JSON scalars are taken as codes; methods (e.g. RpcError.code()) and
      other objects count as absent
    - build_payload omits "message" and "stack" when the error has none to
      give, and "stack" whenever it is excluded
    - Payload never carries the HTTP status (delivered by the sink)
"""

import traceback
from collections.abc import Mapping
from typing import Any


def read_error_field(error: Any, key: str) -> Any:
    """Read `key` off an error as a mapping item or attribute, None if absent."""
    if isinstance(error, Mapping):
        return error.get(key)
    try:
        return getattr(error, key, None)
    except Exception:  # property raising on access
        return None


def _json_scalar(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return value


def error_message(error: Any) -> str | None:
    message = read_error_field(error, "message")
    if isinstance(message, str):
        return message
    if isinstance(error, BaseException):
        return str(error)
    return None


def error_stack(error: Any) -> str | None:
    """Explicit `stack` field if present, else the formatted exception."""
    stack = read_error_field(error, "stack")
    if isinstance(stack, str):
        return stack
    if isinstance(error, BaseException):
        return "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
    return None


def resolve_error_code(error: Any, error_code_key: str, fallback: Any) -> Any:
    return _json_scalar(read_error_field(error, error_code_key)) or fallback


def build_payload(error: Any, error_code: Any, include_stack: bool) -> dict:
    body: dict[str, Any] = {"code": error_code}
    message = error_message(error)
    if message is not None:
        body["message"] = message
    if include_stack:
        stack = error_stack(error)
        if stack is not None:
            body["stack"] = stack
    return {"error": body}
