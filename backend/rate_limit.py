"""
Cosmic Garden - Rate Limiting
One Flask-Limiter instance keyed by client address; limits come from app.config
"""
from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)


def plant_rate_limit() -> str:
    """Limit shared by planting and classification"""
    return current_app.config.get("PLANT_RATE_LIMIT", "10 per minute")


def init_limiter(app):
    app.config.setdefault("RATELIMIT_DEFAULT", app.config.get("DEFAULT_RATE_LIMIT", "60 per minute"))
    app.config.setdefault("RATELIMIT_STORAGE_URI", "memory://")
    app.config.setdefault("RATELIMIT_HEADERS_ENABLED", True)
    limiter.init_app(app)
    return limiter
