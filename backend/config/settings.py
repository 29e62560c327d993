# backend/config/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else default


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./inventory.db")

SESSION_SECRET = os.getenv("SESSION_SECRET")
APP_ENV = os.getenv("APP_ENV", "development").lower()
IS_PRODUCTION = APP_ENV == "production"
SESSION_MAX_AGE = _int_env("SESSION_MAX_AGE", 24 * 60 * 60)  # 1 day

ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]

DB_CONNECT_RETRIES = _int_env("DB_CONNECT_RETRIES", 5)
DB_CONNECT_BACKOFF = _float_env("DB_CONNECT_BACKOFF", 1.0)

CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
MAX_IMAGE_BYTES = _int_env("MAX_IMAGE_BYTES", 2 * 1024 * 1024)  # 2MB

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = _int_env("DEFAULT_PAGE_SIZE", 8)
MAX_PAGE_SIZE = _int_env("MAX_PAGE_SIZE", 100)

DEBUG = os.getenv("DEBUG", "False").lower() == "true"
