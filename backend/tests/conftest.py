"""Root conftest — shared test configuration.

Invariants:
    - Every test starts from the default ResponderConfig
    - APP_ENV is unset unless a test sets it (stacks hidden by default)
"""

import pytest

from error_responder.core.responder_config import reset_config


@pytest.fixture(autouse=True)
def default_responder_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)


@pytest.fixture
def set_env(monkeypatch):
    """Set the runtime environment name read on each payload rebuild."""
    def _set(name: str) -> None:
        monkeypatch.setenv("APP_ENV", name)
    return _set
