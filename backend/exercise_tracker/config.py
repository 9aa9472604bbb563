"""Application settings and validation."""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DATABASE_URL = f"sqlite:///{BASE / 'exercise_tracker.db'}"


class Settings:
    DATABASE_URL: str
    HOST: str
    PORT: int
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    DB_ECHO: bool

    def __init__(self):
        load_dotenv()
        self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = int(os.getenv("PORT", "3000"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
        self._validate()

    def _validate(self):
        if not 0 < self.PORT < 65536:
            raise RuntimeError(f"PORT must be between 1 and 65535, got {self.PORT}")
