# app/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")


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
    stock_api_url: str
    cart_storage_path: str
    http_timeout: float
    log_level: str


def load_settings() -> Settings:
    return Settings(
        stock_api_url=_get_env("STOCK_API_URL", "API_URL", default="http://localhost:3333") or "",
        cart_storage_path=_get_env(
            "CART_STORAGE_PATH", default=str(ROOT_DIR / "data" / "storage.json")
        ) or "",
        http_timeout=_get_float("HTTP_TIMEOUT", default=10.0),
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )


settings = load_settings()
