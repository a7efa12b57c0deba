# tasktracker/config/settings.py
# Application settings, read once at startup and passed around explicitly

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "dev-secret-change-me"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",    # Local development frontend
    "http://127.0.0.1:3000",    # Alternative localhost
]


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Runtime configuration for the API and its services"""

    database_url: str = "sqlite:///./task_tracker.db"
    db_sslmode: Optional[str] = None
    secret_key: str = DEV_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_hours: int = 24
    bcrypt_rounds: int = 12
    max_page_limit: int = 100
    default_page_limit: int = 10
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from the process environment (and a .env file if present)"""
        load_dotenv(env_file)

        secret_key = os.getenv("SECRET_KEY")
        if not secret_key:
            logger.warning("SECRET_KEY is not set, falling back to the development key")
            secret_key = DEV_SECRET_KEY

        origins = os.getenv("CORS_ORIGINS")
        cors_origins = (
            [origin.strip() for origin in origins.split(",") if origin.strip()]
            if origins
            else list(DEFAULT_CORS_ORIGINS)
        )

        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            db_sslmode=os.getenv("DB_SSLMODE") or None,
            secret_key=secret_key,
            algorithm=os.getenv("ALGORITHM", cls.algorithm),
            access_token_expire_hours=int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", cls.access_token_expire_hours)),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", cls.bcrypt_rounds)),
            max_page_limit=int(os.getenv("MAX_PAGE_LIMIT", cls.max_page_limit)),
            cors_origins=cors_origins,
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            reload=_env_bool("RELOAD", "false"),
        )
