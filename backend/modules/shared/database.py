"""
Cosmic Garden - Database Connection Module
Binds one Database instance to the Flask app
"""
import logging

from flask import current_app

from ...database import Database

logger = logging.getLogger(__name__)


def init_database_system(app):
    """Initialize database system for the application"""
    try:
        db = Database(
            database_url=app.config.get("DATABASE_URL"),
            db_path=app.config.get("DATABASE_PATH"),
        )
        app.database = db
        logger.info("✅ Database system initialized")
        return db
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise


def get_database():
    """Database bound to the current Flask app, or None outside an app context"""
    try:
        return getattr(current_app, "database", None)
    except RuntimeError:
        logger.error("No application context - database unavailable")
        return None
