from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

_DEFAULT_TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'mongo' (default) or 'memory'
    - MONGO_URI: MongoDB connection string. Default 'mongodb://localhost:27017'
    - MONGO_DB_NAME: database name. Default 'demo_todo'
    - MONGO_COLLECTION: collection name. Default 'todo'
    - MONGO_TIMEOUT_MS: server selection timeout in milliseconds. Default 5000
    - HOST / PORT: bind address for the server. Default 0.0.0.0:9000
    - SERVER_TIMEOUT: keep-alive timeout in seconds. Default 60
    - TEMPLATE_DIR: directory holding home.tpl. Default: the package 'static' dir
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level. Default 'INFO'
    - LOG_FORMAT: 'text' (default) or 'json'
    """

    persistence_backend: str
    mongo_uri: str
    mongo_db_name: str
    mongo_collection: str
    mongo_timeout_ms: int
    host: str
    port: int
    server_timeout: int
    template_dir: str
    cors_allow_origins: List[str]
    log_level: str
    log_format: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "mongo").strip().lower()
    if backend not in {"mongo", "memory"}:
        # Fallback to mongo if unsupported
        backend = "mongo"

    log_format = _get_env("LOG_FORMAT", "text").strip().lower()
    if log_format not in {"text", "json"}:
        log_format = "text"

    return Settings(
        persistence_backend=backend,
        mongo_uri=_get_env("MONGO_URI", "mongodb://localhost:27017").strip(),
        mongo_db_name=_get_env("MONGO_DB_NAME", "demo_todo").strip(),
        mongo_collection=_get_env("MONGO_COLLECTION", "todo").strip(),
        mongo_timeout_ms=_parse_int(_get_env("MONGO_TIMEOUT_MS", "5000"), 5000),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "9000"), 9000),
        server_timeout=_parse_int(_get_env("SERVER_TIMEOUT", "60"), 60),
        template_dir=_get_env("TEMPLATE_DIR", _DEFAULT_TEMPLATE_DIR).strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        log_format=log_format,
    )
