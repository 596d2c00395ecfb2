"""Application settings using Pydantic.

DB selection (deterministic, ONE place):
  - DATABASE_URL set and non-empty → that URL (PostgreSQL, MySQL, ...).
  - DATABASE_URL absent/empty → ALWAYS SQLite (DB_SQLITE_PATH, default data/changelog.db).
.env is loaded from the project root deterministically (not cwd-dependent).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _project_root() -> Path:
    """Project root. settings.py is in src/content_changelog/config/."""
    return Path(__file__).resolve().parent.parent.parent.parent


def _ensure_env_loaded() -> None:
    """Load .env from the project root before any settings. Idempotent."""
    candidate = _project_root() / ".env"
    if candidate.exists():
        load_dotenv(candidate, override=False)


# Load .env as soon as config is imported
_ensure_env_loaded()


class DatabaseSettings(BaseSettings):
    """Database connection settings. Source of truth: DATABASE_URL or DB_SQLITE_PATH."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=(str(_project_root() / ".env"), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: Optional[str] = Field(
        default=None,
        description="Explicit DSN; when absent, SQLite is used.",
        validation_alias="DATABASE_URL",
    )

    # SQLite: path relative to project root.
    sqlite_path: Optional[str] = Field(
        default="data/changelog.db",
        description="SQLite path (relative to project root); used when DATABASE_URL is not set",
    )

    pool_size: int = Field(default=5, description="Connection pool size")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Connection recycle time in seconds")

    table_prefix: str = Field(default="bolt_", description="Prefix of the change-log and content tables")

    def _use_server_db(self) -> bool:
        """True iff DATABASE_URL is explicitly set."""
        return bool((self.database_url or "").strip())

    def _resolved_sqlite_path(self) -> Path:
        """Absolute path to SQLite file. Always relative to project root."""
        raw = (self.sqlite_path or "data/changelog.db").strip()
        path = Path(raw)
        if not path.is_absolute():
            path = (_project_root() / path).resolve()
        return path

    def _redacted_dsn(self) -> str:
        """DSN with password redacted."""
        import re
        url = (self.database_url or "").strip()
        return re.sub(r":([^:@/]+)@", r":***@", url) if url else ""

    @property
    def change_log_table(self) -> str:
        return f"{self.table_prefix}log_change"

    @property
    def url(self) -> str:
        """Build database URL. Single source of truth for engine creation."""
        if self._use_server_db():
            return (self.database_url or "").strip()
        path = self._resolved_sqlite_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{path.as_posix()}"

    def db_info_for_logging(self) -> str:
        """Single line for startup log: backend type + absolute path or redacted DSN."""
        if self._use_server_db():
            return f"Database @ {self._redacted_dsn()}"
        return f"SQLite @ {self._resolved_sqlite_path().as_posix()}"


class ContentTypeSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CONTENT_TYPES_",
        env_file=(str(_project_root() / ".env"), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    slugs: str = Field(
        default="pages,entries,showcases",
        description="Comma-separated content type slugs",
    )
    tables: dict[str, str] = Field(
        default_factory=dict,
        description="JSON object of slug → table name overrides",
    )

    @field_validator("tables", mode="before")
    @classmethod
    def _parse_tables(cls, v):
        if isinstance(v, str):
            return json.loads(v) if v.strip() else {}
        return v

    @property
    def slug_list(self) -> list[str]:
        return [s.strip() for s in self.slugs.split(",") if s.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHANGELOG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode (echo SQL)")
    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    content_types: ContentTypeSettings = Field(default_factory=ContentTypeSettings)


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
