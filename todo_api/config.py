"""Settings loaded from environment variables (+ optional .env)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _first_env(*names: str, default: str = "") -> str:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(*names: str, default: int) -> int:
    raw = _first_env(*names)
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    service_name: str = "sticker-todo-api"
    db_path: Path = Path("todos.db")
    host: str = "127.0.0.1"
    port: int = 4000
    log_level: str = "INFO"
    cors_origins: tuple = ("*",)
    max_body_bytes: int = 1024 * 1024


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(override=False)

    defaults = Settings()
    db_path = _first_env(_k("DB_PATH"), "SQLITE_PATH")
    return Settings(
        service_name=_first_env(_k("SERVICE_NAME"), default=defaults.service_name),
        db_path=Path(db_path).expanduser() if db_path else defaults.db_path,
        host=_first_env(_k("HOST"), default=defaults.host),
        port=_env_int(_k("PORT"), "PORT", default=defaults.port),
        log_level=_first_env(_k("LOG_LEVEL"), default=defaults.log_level).upper(),
        cors_origins=tuple(_env_list(_k("CORS_ORIGINS"), list(defaults.cors_origins))),
        max_body_bytes=_env_int(_k("MAX_BODY_BYTES"), default=defaults.max_body_bytes),
    )
