# Cosmic Garden - Garden Module
from .errors import GardenError, FlowerInputError, AIRateLimitError, AIQuotaError, PersistenceError
from .flower_classifier import FlowerClassifier
from .flower_repository import FlowerRepository
from .garden_client import GardenClient
from .garden_service import GardenService
from .geolocation import GeoLocator
from .live_feed import FlowerFeed
from .models import FlowerClassification, FlowerRecord, GeoLocation, Position
from .routes import garden_bp, init_garden_system
from .taxonomy import map_to_visual_type

__all__ = [
    'GardenError',
    'FlowerInputError',
    'AIRateLimitError',
    'AIQuotaError',
    'PersistenceError',
    'FlowerClassifier',
    'FlowerRepository',
    'GardenClient',
    'GardenService',
    'GeoLocator',
    'FlowerFeed',
    'FlowerClassification',
    'FlowerRecord',
    'GeoLocation',
    'Position',
    'garden_bp',
    'init_garden_system',
    'map_to_visual_type',
]
