"""
Application configuration read from the environment.

Variables:
    DB_PATH             SQLite file (default: data/bookshelf.db)
    DB_TIMEOUT_SECONDS  Wait for a competing write lock (default: 5.0)
    LOG_LEVEL           Root logging level (default: INFO)
    DEFAULT_PAGE_SIZE   Page size when a listing request sets none (default: 10)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    db_path: Path = Path("data/bookshelf.db")
    db_timeout_seconds: float = 5.0
    log_level: str = "INFO"
    default_page_size: int = 10

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.db_timeout_seconds < 0:
            raise ValueError(
                f"DB_TIMEOUT_SECONDS must be >= 0, got {self.db_timeout_seconds}"
            )

        if not (1 <= self.default_page_size <= 100):
            raise ValueError(
                f"DEFAULT_PAGE_SIZE must be between 1 and 100, got {self.default_page_size}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            db_path=Path(env.get("DB_PATH", "data/bookshelf.db")),
            db_timeout_seconds=float(env.get("DB_TIMEOUT_SECONDS", "5.0")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            default_page_size=int(env.get("DEFAULT_PAGE_SIZE", "10")),
        )
