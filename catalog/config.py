from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


def build_database_uri(environ: Mapping[str, str]) -> str:
    url = environ.get("DATABASE_URL")
    if url:
        return url

    port = environ.get("DB_PORT")
    return URL.create(
        drivername=environ.get("DB_DRIVER", "postgresql+psycopg2"),
        username=environ.get("DB_USER") or None,
        password=environ.get("DB_PASSWORD") or None,
        host=environ.get("DB_HOST", "localhost"),
        port=int(port) if port else None,
        database=environ.get("DB_NAME", "catalog"),
    ).render_as_string(hide_password=False)


def engine_options(environ: Mapping[str, str]) -> dict[str, object]:
    return {
        "pool_size": int(environ.get("DB_POOL_SIZE", "10")),
        "max_overflow": 0,
        "pool_timeout": float(environ.get("DB_POOL_TIMEOUT", "30")),
        "pool_pre_ping": True,
    }


def env_flag(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SQLALCHEMY_DATABASE_URI = build_database_uri(os.environ)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = engine_options(os.environ)

    # None means <instance path>/uploads, resolved by the app factory.
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER") or None
    UPLOAD_URL_PREFIX = "/uploads"
    ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
    MAX_IMAGE_BYTES = 2 * 1024 * 1024
    MAX_CONTENT_LENGTH = 8 * 1024 * 1024

    PRODUCTS_MISSING_AS_NOT_FOUND = env_flag(os.environ, "PRODUCTS_MISSING_AS_NOT_FOUND")

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT = int(os.getenv("PORT", "5000"))
