"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process, used for wiring
    - read_environment_name() is never cached — every payload rebuild sees the
      current APP_ENV

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - app_env defaults to None: stacks are hidden unless an environment is named
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Runtime environment name, matched against stack_environments
    app_env: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def read_environment_name() -> str | None:
    return Settings().app_env
