"""Configuration loading for uicatalog.

Config sources (in priority order):
1. Explicit arguments passed to functions
2. Environment variables (UICATALOG_DB_PATH, etc.)
3. .env file in current directory
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DB_PATH = Path("data") / "db.json"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ORIGINS = ["*"]

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_port(raw: str | None) -> tuple[int, str | None]:
    if not raw:
        return DEFAULT_PORT, None
    try:
        return int(raw), None
    except ValueError:
        return DEFAULT_PORT, raw


def _parse_origins(raw: str | None) -> list[str]:
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Config:
    db_path: Path = DEFAULT_DB_PATH
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    invalid_port: str | None = None  # raw UICATALOG_PORT value that failed to parse

    @classmethod
    def load(cls) -> Config:
        port, invalid_port = _parse_port(os.getenv("UICATALOG_PORT"))
        return cls(
            db_path=Path(os.getenv("UICATALOG_DB_PATH", str(DEFAULT_DB_PATH))),
            host=os.getenv("UICATALOG_HOST", DEFAULT_HOST),
            port=port,
            log_level=os.getenv("UICATALOG_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            cors_origins=_parse_origins(os.getenv("UICATALOG_CORS_ORIGINS")),
            invalid_port=invalid_port,
        )

    def validate(self) -> list[str]:
        """Return a list of config issues."""
        issues = []
        if self.invalid_port is not None:
            issues.append(f"UICATALOG_PORT is not an integer: {self.invalid_port!r}")
        if not 1 <= self.port <= 65535:
            issues.append(f"Port out of range (1-65535): {self.port}")
        if self.log_level not in LOG_LEVELS:
            issues.append(f"Unknown log level (UICATALOG_LOG_LEVEL): {self.log_level}")
        return issues

    def configure_logging(self) -> None:
        """Send log records to stderr; stdout belongs to the MCP stdio transport."""
        level = self.log_level if self.log_level in LOG_LEVELS else DEFAULT_LOG_LEVEL
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
