"""Application settings and validation."""

import logging
import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DB_URL = f"sqlite:///{BASE / 'campus.db'}"


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL)
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self._validate()

    def _validate(self):
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise RuntimeError(f"LOG_LEVEL must be a standard logging level, got {self.LOG_LEVEL!r}")
        if self.ENV != "dev" and os.getenv("DATABASE_URL") is None:
            raise RuntimeError("DATABASE_URL must be set explicitly in non-dev environments")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
