"""
Cosmic Garden - Garden Routes
Classification, planting, listing and statistics endpoints
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from ...rate_limit import limiter, plant_rate_limit
from ..i18n import LocaleContext, resolve_locale
from ..shared.api_response import error_response, success_response
from .errors import GardenError
from .taxonomy import list_species

logger = logging.getLogger(__name__)

garden_bp = Blueprint('garden', __name__)

GENERIC_ERROR = "Unable to process your request. Please try again later."


def _request_locale() -> LocaleContext:
    return resolve_locale(request.args.get('lang'), request.headers.get('Accept-Language'))


def _garden_service():
    return current_app.garden_service


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _garden_error(e: GardenError, locale: LocaleContext):
    """Client-facing body for an expected failure; provider detail stays in the logs"""
    if e.translation_key:
        text = locale.text(e.translation_key)
    else:
        text = e.message or locale.text('generic_error')
    return jsonify(error_response(text).to_dict()), e.status_code


def _unexpected_error(context: str):
    logger.exception(f"Unexpected error {context}")
    return jsonify(error_response(GENERIC_ERROR).to_dict()), 500


@garden_bp.route('/api/generate-flower', methods=['POST'])
@limiter.limit(plant_rate_limit)
def generate_flower():
    """Classify a mood message without planting it"""
    locale = _request_locale()
    data = _json_body()
    try:
        classification = _garden_service().classify(data.get('message'), data.get('author'), locale)
        return jsonify(classification.to_dict()), 200
    except GardenError as e:
        return _garden_error(e, locale)
    except Exception:
        return _unexpected_error("classifying flower")


@garden_bp.route('/api/flowers', methods=['POST'])
@limiter.limit(plant_rate_limit)
def plant_flower():
    """Run the full planting pipeline and return the stored flower"""
    locale = _request_locale()
    data = _json_body()
    try:
        record = _garden_service().plant(
            data.get('message'),
            data.get('author'),
            client_ip=request.remote_addr,
            locale=locale,
        )
        body = success_response(data=record, message=locale.text('thank_you_planting'))
        return jsonify(body.to_dict()), 201
    except GardenError as e:
        return _garden_error(e, locale)
    except Exception:
        return _unexpected_error("planting flower")


@garden_bp.route('/api/flowers', methods=['GET'])
def list_flowers():
    """Every flower, oldest first"""
    try:
        records = _garden_service().garden_snapshot()
        return jsonify(success_response(data={'flowers': records, 'count': len(records)}).to_dict()), 200
    except Exception:
        return _unexpected_error("loading flowers")


@garden_bp.route('/api/garden/stats', methods=['GET'])
def garden_stats():
    locale = _request_locale()
    try:
        return jsonify(success_response(data=_garden_service().stats(locale)).to_dict()), 200
    except Exception:
        return _unexpected_error("building garden stats")


@garden_bp.route('/api/species', methods=['GET'])
def species_catalog():
    locale = _request_locale()
    species = list_species(locale.language)
    return jsonify(success_response(data={'species': species, 'count': len(species)}).to_dict()), 200


@garden_bp.route('/api/garden/status', methods=['GET'])
def garden_status():
    """Dependency status for operators"""
    return jsonify(success_response(data=_garden_service().get_status()).to_dict()), 200


def init_garden_system(app, socketio=None):
    """Build the garden services from app.config and attach them to the app"""
    from ..shared.database import get_database
    from .flower_classifier import FlowerClassifier
    from .flower_repository import FlowerRepository
    from .garden_service import GardenService
    from .geolocation import GeoLocator
    from .live_feed import FlowerFeed

    with app.app_context():
        database = get_database()

    repository = FlowerRepository(database)
    repository.ensure_schema()

    classifier = FlowerClassifier(
        api_key=app.config.get("AI_API_KEY") or "",
        base_url=app.config.get("AI_BASE_URL"),
        model=app.config.get("AI_MODEL"),
        timeout=app.config.get("AI_TIMEOUT"),
        temperature=app.config.get("AI_TEMPERATURE"),
        max_tokens=app.config.get("AI_MAX_TOKENS"),
    )
    geolocator = GeoLocator(
        url_template=app.config.get("GEO_LOOKUP_URL"),
        timeout=app.config.get("GEO_TIMEOUT"),
        enabled=app.config.get("GEO_ENABLED"),
    )
    feed = FlowerFeed(socketio)

    app.garden_service = GardenService(repository, classifier, geolocator, feed)
    logger.info(f"🌷 Garden system initialized ({repository.count()} flowers planted so far)")
    return app.garden_service
