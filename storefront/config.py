from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")

STORAGE_BACKENDS = ("memory", "file", "sql")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    api_timeout: float
    storage_backend: str
    storage_dir: str
    database_url: str
    cart_key: str


def load_settings() -> Settings:
    settings = Settings(
        api_base_url=_get_env("STOREFRONT_API_URL", "NEXT_PUBLIC_API_URL", default="http://localhost:3000")
        or "http://localhost:3000",
        api_timeout=_get_float("STOREFRONT_API_TIMEOUT", default=10.0),
        storage_backend=(_get_env("STOREFRONT_STORAGE", default="file") or "file").lower(),
        storage_dir=_get_env("STOREFRONT_STORAGE_DIR", default=str(ROOT_DIR / "data")) or str(ROOT_DIR / "data"),
        database_url=_get_env("DATABASE_URL", default=f"sqlite+pysqlite:///{ROOT_DIR / 'storefront.db'}")
        or f"sqlite+pysqlite:///{ROOT_DIR / 'storefront.db'}",
        cart_key=_get_env("STOREFRONT_CART_KEY", default="cart") or "cart",
    )
    if settings.storage_backend not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"STOREFRONT_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {settings.storage_backend!r}"
        )
    return settings
