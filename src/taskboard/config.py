"""Runtime configuration for Taskboard."""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_DEV_SESSION_SECRET = "taskboard-dev-secret-change-me"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Taskboard settings.

    Attributes:
        database_url: SQLAlchemy URL of the task database
        sql_echo: Echo emitted SQL to the log
        session_secret: Key used to sign session tokens
        session_algorithm: JWT signing algorithm
        session_expire_minutes: Lifetime of an issued session token
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root log level name
        provisioning_key: Shared key the sign-in callback presents; sign-in
            is refused while unset
    """
    database_url: str = "sqlite:///./taskboard.db"
    sql_echo: bool = False
    session_secret: str = _DEV_SESSION_SECRET
    session_algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24 * 30
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    provisioning_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        secret = os.getenv("SESSION_SECRET")
        if not secret:
            logger.warning("SESSION_SECRET is not set; using an insecure development secret")
            secret = _DEV_SESSION_SECRET

        if not os.getenv("PROVISIONING_KEY"):
            logger.warning("PROVISIONING_KEY is not set; sign-in is disabled")

        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./taskboard.db"),
            sql_echo=_env_bool("SQL_ECHO"),
            session_secret=secret,
            session_algorithm=os.getenv("SESSION_ALGORITHM", "HS256"),
            session_expire_minutes=int(os.getenv("SESSION_EXPIRE_MINUTES", str(60 * 24 * 30))),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            provisioning_key=os.getenv("PROVISIONING_KEY") or None,
        )
