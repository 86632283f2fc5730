# =========================
# 📁 FILE: backend/config.py
# =========================
import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DATA_DIR = os.path.join(BASE_DIR, "data")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# AI provider (any OpenAI-compatible chat completions endpoint)
AI_API_KEY = os.getenv("AI_API_KEY") or os.getenv("OPENAI_API_KEY", "")
AI_BASE_URL = os.getenv("AI_BASE_URL") or None      # None = api.openai.com
AI_MODEL = os.getenv("AI_MODEL", "gpt-4o-mini")
AI_TIMEOUT = _env_float("AI_TIMEOUT", 10.0)
AI_TEMPERATURE = _env_float("AI_TEMPERATURE", 0.7)
AI_MAX_TOKENS = _env_int("AI_MAX_TOKENS", 200)

# IP geolocation (best effort)
GEO_ENABLED = _env_bool("GEO_ENABLED", True)
GEO_LOOKUP_URL = os.getenv("GEO_LOOKUP_URL", "https://ipapi.co/{ip}/json/")
GEO_TIMEOUT = _env_float("GEO_TIMEOUT", 3.0)

# Storage: PostgreSQL when DATABASE_URL is set, SQLite otherwise
DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("POSTGRES_URL", "")
DATABASE_PATH = os.getenv("DATABASE_PATH", os.path.join(DATA_DIR, "cosmic_garden.db"))

# HTTP surface
SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
DEFAULT_RATE_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "60 per minute")
PLANT_RATE_LIMIT = os.getenv("PLANT_RATE_LIMIT", "10 per minute")
RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", True)
# Reverse proxies whose X-Forwarded-For is trusted; 0 = use the socket address
PROXY_FIX_X_FOR = _env_int("PROXY_FIX_X_FOR", 0)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 5000)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "")                   # empty = console only


def as_flask_config() -> dict:
    """Settings copied into app.config by create_app()"""
    return {
        "SECRET_KEY": SECRET_KEY,
        "AI_API_KEY": AI_API_KEY,
        "AI_BASE_URL": AI_BASE_URL,
        "AI_MODEL": AI_MODEL,
        "AI_TIMEOUT": AI_TIMEOUT,
        "AI_TEMPERATURE": AI_TEMPERATURE,
        "AI_MAX_TOKENS": AI_MAX_TOKENS,
        "GEO_ENABLED": GEO_ENABLED,
        "GEO_LOOKUP_URL": GEO_LOOKUP_URL,
        "GEO_TIMEOUT": GEO_TIMEOUT,
        "DATABASE_URL": DATABASE_URL,
        "DATABASE_PATH": DATABASE_PATH,
        "CORS_ORIGINS": CORS_ORIGINS,
        "DEFAULT_RATE_LIMIT": DEFAULT_RATE_LIMIT,
        "PLANT_RATE_LIMIT": PLANT_RATE_LIMIT,
        "RATELIMIT_ENABLED": RATELIMIT_ENABLED,
        "PROXY_FIX_X_FOR": PROXY_FIX_X_FOR,
        "LOG_LEVEL": LOG_LEVEL,
        "LOG_DIR": LOG_DIR,
    }
