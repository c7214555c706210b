"""Responder Configuration — code → status map, fallbacks, stack environments.

Invariants:
    - ResponderConfig is never mutated in place; merge_config returns a new value
    - Overrides replace top-level keys one by one (code_status_map is replaced
      as a unit, not deep-merged)
    - Unknown keys are accepted silently and kept in `extras`
    - Stack environments are tested by presence (`env in stack_environments`),
      so {"development": False} still enables stacks for "development"

Design Decisions:
    - One process-wide config replaced under a lock by configure(); a ContextVar
      holds only use_config() overlays, so startup wiring in another task or
      thread (e.g. a lifespan hook) reaches every request
    - Keys accepted in snake_case or their camelCase wire names, so JSON-sourced
      overrides can be passed through unchanged
"""

import dataclasses
import threading
from collections.abc import Collection, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResponderConfig:
    """Settings shared by every ErrorResponder built in the same scope."""
    code_status_map: Mapping[str, int] = field(
        default_factory=lambda: {"UNKNOWN_ERROR": 500},
    )
    error_code_key: str = "code"
    fallback_error_code: str = "UNKNOWN_ERROR"
    fallback_status: int = 500
    stack_environments: Collection[str] = field(
        default_factory=lambda: {"development": True},
    )
    extras: Mapping[str, Any] = field(default_factory=dict)

    def status_for(self, error_code: Any) -> int:
        """Status mapped to error_code, or fallback_status when unmapped/falsy."""
        try:
            status = self.code_status_map.get(error_code)
        except TypeError:  # unhashable code
            status = None
        return status or self.fallback_status

    def includes_stack(self, environment: str | None) -> bool:
        if environment is None:
            return False
        try:
            return environment in self.stack_environments
        except TypeError:
            return False


_ALIASES: dict[str, str] = {
    "codeStatusMap": "code_status_map",
    "errorCodeKey": "error_code_key",
    "fallbackErrorCode": "fallback_error_code",
    "fallbackStatus": "fallback_status",
    "stackEnvironments": "stack_environments",
}

_FIELDS = frozenset(
    f.name for f in dataclasses.fields(ResponderConfig) if f.name != "extras"
)


def merge_config(
    current: ResponderConfig, overrides: Mapping[str, Any] | None,
) -> ResponderConfig:
    """Return `current` with every key present in `overrides` replaced."""
    if not overrides:
        return current
    known: dict[str, Any] = {}
    extras = dict(current.extras)
    for key, value in overrides.items():
        name = _ALIASES.get(key, key)
        if name in _FIELDS:
            known[name] = value
        else:
            extras[key] = value
    return dataclasses.replace(current, extras=extras, **known)


DEFAULT_CONFIG = ResponderConfig()

_base_config: ResponderConfig = DEFAULT_CONFIG
_base_lock = threading.Lock()

_scoped_config: ContextVar[ResponderConfig | None] = ContextVar(
    "responder_config", default=None,
)


def get_current_config() -> ResponderConfig:
    """The use_config() overlay in scope, else the process-wide config."""
    scoped = _scoped_config.get()
    return scoped if scoped is not None else _base_config


def configure(
    overrides: Mapping[str, Any] | None = None, **kwargs: Any,
) -> ResponderConfig:
    """Merge overrides into the process-wide config. Last write wins per key."""
    global _base_config
    with _base_lock:
        _base_config = merge_config(_base_config, {**(overrides or {}), **kwargs})
        return _base_config


def reset_config() -> None:
    global _base_config
    with _base_lock:
        _base_config = DEFAULT_CONFIG


@contextmanager
def use_config(
    config: ResponderConfig | Mapping[str, Any],
) -> Iterator[ResponderConfig]:
    """Scope a config (or overrides on top of the current one) to a block.

    The overlay is visible only to the current context (task or thread) and
    hides the process-wide config until the block exits.
    """
    if not isinstance(config, ResponderConfig):
        config = merge_config(get_current_config(), config)
    token = _scoped_config.set(config)
    try:
        yield config
    finally:
        _scoped_config.reset(token)
