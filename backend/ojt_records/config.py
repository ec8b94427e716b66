import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "your-secret-key-should-be-very-long-and-secure"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once from the environment."""

    database_url: str = "sqlite:///./ojt.db"
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    session_ttl_days: int = 7
    bcrypt_rounds: int = 10
    admin_email: str = "admin@ojt.com"
    admin_password: str = "admin123"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"])
    port: int = 3000


@lru_cache()
def get_settings() -> Settings:
    secret_key = os.getenv("SECRET_KEY")
    if not secret_key:
        logger.warning("SECRET_KEY not set, falling back to the development key")
        secret_key = DEFAULT_SECRET_KEY

    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./ojt.db"),
        secret_key=secret_key,
        algorithm=os.getenv("ALGORITHM", "HS256"),
        session_ttl_days=int(os.getenv("SESSION_TTL_DAYS", "7")),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
        admin_email=os.getenv("ADMIN_EMAIL", "admin@ojt.com"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")),
        port=int(os.getenv("PORT", "3000")),
    )
