# jobportal/config.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()


def _bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./jobportal.db")

SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not SECRET_KEY:
    raise ValueError("JWT_SECRET_KEY environment variable must be set")

ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "7"))
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

# Selecting another company overwrites the current membership when enabled
ALLOW_COMPANY_SWITCH = _bool("ALLOW_COMPANY_SWITCH", "true")

DASHBOARD_MAX_WORKERS = int(os.getenv("DASHBOARD_MAX_WORKERS", "4"))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Configure root logging once for the process"""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
