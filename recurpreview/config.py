from __future__ import annotations

import os
from dataclasses import dataclass


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    default_preview_count: int
    max_preview_count: int


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default).strip()
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{name} must be >= 0, got {value}")
    return value


def get_settings() -> Settings:
    settings = Settings(
        default_preview_count=_int_env("DEFAULT_PREVIEW_COUNT", "5"),
        max_preview_count=_int_env("MAX_PREVIEW_COUNT", "366"),
    )
    if settings.default_preview_count > settings.max_preview_count:
        raise ConfigError("DEFAULT_PREVIEW_COUNT must not exceed MAX_PREVIEW_COUNT")
    return settings
