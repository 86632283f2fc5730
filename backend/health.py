# health.py
"""
Cosmic Garden - Health Checks
Liveness and readiness probes (no authentication required)
"""
from flask import Blueprint, current_app, jsonify

from .version import get_version_info

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health():
    """Default health probe"""
    return jsonify(status="ok", healthy=True, version=get_version_info()["full_version"]), 200


@health_bp.get("/healthz")
def healthz():
    """Kubernetes-style liveness check"""
    return jsonify(status="ok"), 200


@health_bp.get("/readyz")
def readyz():
    """Readiness probe - the flowers store must answer"""
    database = getattr(current_app, "database", None)
    if database is None or not database.ping():
        return jsonify(ready=False, database="unavailable"), 503

    service = getattr(current_app, "garden_service", None)
    classifier_ready = bool(service and service.classifier.is_available())
    return jsonify(ready=True, database="ok", ai_available=classifier_ready), 200
