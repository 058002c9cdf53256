# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os
from pathlib import Path

_DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "roster_seed.json"


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "swimteam-scheduler")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8000"))

    LEADER_WINDOW_DAYS: int = int(os.getenv("LEADER_WINDOW_DAYS", "3"))
    LEADER_HORIZON_MONTHS: int = int(os.getenv("LEADER_HORIZON_MONTHS", "12"))
    RECURRENCE_DEFAULT_MAX: int = int(os.getenv("RECURRENCE_DEFAULT_MAX", "50"))

    DEFAULT_HISTORY_LIMIT: int = int(os.getenv("DEFAULT_HISTORY_LIMIT", "100"))
    MAX_HISTORY_SIZE: int = int(os.getenv("MAX_HISTORY_SIZE", "10000"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    SEED_DEFAULT_DATA: bool = (
        os.getenv("SEED_DEFAULT_DATA", "true").lower() == "true"
    )
    SEED_ROSTER_PATH: str = os.getenv("SEED_ROSTER_PATH", str(_DEFAULT_SEED_PATH))


settings = Settings()
