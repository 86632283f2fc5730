"""
Cosmic Garden - Application Factory
Flask app with the garden API, health probes and the live flower feed

Development server: python -m backend.app (the package uses relative imports)
WSGI servers: backend.wsgi:app
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from . import config
from .health import health_bp
from .logging_setup import init_logging
from .modules.garden import garden_bp, init_garden_system
from .modules.i18n import resolve_locale
from .modules.shared import error_response, init_database_system
from .rate_limit import init_limiter

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Unable to process your request. Please try again later."


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.update(config.as_flask_config())
    if overrides:
        app.config.update(overrides)

    init_logging(level=app.config.get("LOG_LEVEL", config.LOG_LEVEL),
                 log_dir=app.config.get("LOG_DIR", config.LOG_DIR) or None)

    # remote_addr keys the rate limit and geolocation; only configured proxy hops may rewrite it
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=int(app.config.get("PROXY_FIX_X_FOR", 0)), x_proto=1, x_host=1)

    origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": origins.split(",") if origins != "*" else "*"}})

    init_limiter(app)
    init_database_system(app)

    socketio = SocketIO(app, cors_allowed_origins=origins if origins == "*" else origins.split(","),
                        async_mode="threading")
    app.socketio = socketio

    init_garden_system(app, socketio)

    app.register_blueprint(health_bp)
    app.register_blueprint(garden_bp)
    register_error_handlers(app)

    logger.info("🌌 Cosmic Garden app created")
    return app


def register_error_handlers(app: Flask):
    """JSON bodies for framework-level errors"""

    @app.errorhandler(404)
    def not_found_error(error):
        logger.warning(f"404 Error: {request.path}")
        return jsonify(error_response("Not found").to_dict()), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        logger.warning(f"405 Error: {request.method} {request.path}")
        return jsonify(error_response("Method not allowed").to_dict()), 405

    @app.errorhandler(429)
    def rate_limited(error):
        locale = resolve_locale(request.args.get("lang"), request.headers.get("Accept-Language"))
        logger.warning(f"429 Error: {request.path} from {request.remote_addr}")
        return jsonify(error_response(locale.text("rate_limited")).to_dict()), 429

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"500 Error: {request.path} - {error}")
        return jsonify(error_response(GENERIC_ERROR).to_dict()), 500


if __name__ == "__main__":
    app = create_app()
    logger.info(f"🌟 Starting Cosmic Garden on {config.HOST}:{config.PORT}")
    app.socketio.run(app, host=config.HOST, port=config.PORT, allow_unsafe_werkzeug=True)
