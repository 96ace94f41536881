from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    app_env: str
    max_input_bytes: int
    log_level: str


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_log_level(value: str | None, default: str = "INFO") -> str:
    if value is None:
        return default
    level = value.strip().upper()
    if level not in logging.getLevelNamesMapping():
        return default
    return level


def load_settings() -> Settings:
    max_input_bytes = _parse_int(os.getenv("RENDER_MAX_INPUT_BYTES"), default=512_000)
    if max_input_bytes <= 0:
        max_input_bytes = 512_000
    return Settings(
        app_env=os.getenv("APP_ENV", "dev"),
        max_input_bytes=max_input_bytes,
        log_level=_parse_log_level(os.getenv("LOG_LEVEL")),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
