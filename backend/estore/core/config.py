"""
Store configuration: database location, lock bounds and optional invariants.
All values are overridable via env or a .env file next to the backend.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Prefer backend/.env so scripts work regardless of CWD (run from backend/ or repo root)
_BACKEND_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_PATH = _BACKEND_DIR / ".env"


def _normalize_database_url(url: str) -> str:
    """Rewrite the legacy postgres:// scheme so SQLAlchemy picks psycopg2."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


class Settings(BaseSettings):
    """Store settings; override via env or .env for deployment."""

    # sqlite:// (no path) keeps everything in memory; postgresql://... needs psycopg2
    database_url: str = "sqlite:///./ecommerce_store.db"

    # Pool settings (ignored for SQLite)
    pool_size: int = 5
    max_overflow: int = 10

    # Upper bound for every lock wait: store lock, SQLite busy handler, Postgres lock_timeout
    lock_timeout_seconds: float = Field(5.0, gt=0)

    # Store-wide transaction lock; must stay on for SQLite
    serialize_transactions: bool = True

    # Rows fetched per round trip by lazy list() sequences
    list_page_size: int = Field(100, ge=1)

    # Optional invariants beyond the table-level checks
    enforce_inventory_reservation: bool = True
    single_payment_per_order: bool = False

    log_level: str = "INFO"
    echo_sql: bool = False

    model_config = SettingsConfigDict(
        env_file=str(_ENV_PATH) if _ENV_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.database_url = _normalize_database_url(self.database_url)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and (
            self.database_url in ("sqlite://", "sqlite:///:memory:")
            or ":memory:" in self.database_url
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
