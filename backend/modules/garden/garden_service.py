"""
Cosmic Garden - Garden Service
Planting pipeline: classify -> place -> geolocate -> store -> broadcast
"""
import logging
import random
from typing import Any, Dict, List, Optional

from ..i18n import LocaleContext
from .flower_classifier import FlowerClassifier
from .flower_repository import FlowerRepository
from .garden_stats import build_garden_stats
from .geolocation import GeoLocator
from .live_feed import FlowerFeed
from .models import FlowerClassification, FlowerRecord
from .placement import generate_position
from .validation import sanitize_message

logger = logging.getLogger(__name__)


class GardenService:
    """Runs one planting request end to end; strictly sequential"""

    def __init__(self, repository: FlowerRepository, classifier: FlowerClassifier,
                 geolocator: Optional[GeoLocator] = None, feed: Optional[FlowerFeed] = None,
                 rng: Optional[random.Random] = None):
        self.repository = repository
        self.classifier = classifier
        self.geolocator = geolocator
        self.feed = feed
        self.rng = rng or random.Random()

    def classify(self, message: Any, author: Any = None,
                 locale: Optional[LocaleContext] = None) -> FlowerClassification:
        return self.classifier.classify(message, author, locale)

    def plant(self, message: Any, author: Any = None, client_ip: Optional[str] = None,
              locale: Optional[LocaleContext] = None) -> FlowerRecord:
        """
        Plant a flower for a mood message and return the stored record.

        Input, rate-limit and quota errors propagate before anything is
        written. Geolocation and broadcast failures never fail the plant.
        """
        classification = self.classifier.classify(message, author, locale)

        existing = [record.position for record in self.repository.load_all()]
        position = generate_position(existing, rng=self.rng)

        record = FlowerRecord(
            species=classification.species,
            type=classification.visual_type,
            message=classification.caption,
            author=classification.author,
            mood=sanitize_message(message),
            x=position.x,
            y=position.y,
        )

        if self.geolocator is not None and client_ip:
            record.with_location(self.geolocator.lookup(client_ip))

        stored = self.repository.insert(record)

        if self.feed is not None:
            self.feed.publish(stored)

        logger.info(
            f"🌱 {stored.author} planted a {stored.species} at ({stored.x:.1f}, {stored.y:.1f})"
            f"{' via fallback' if classification.is_fallback else ''}"
        )
        return stored

    def garden_snapshot(self) -> List[FlowerRecord]:
        """Every flower, oldest first"""
        return self.repository.load_all()

    def stats(self, locale: Optional[LocaleContext] = None) -> Dict[str, Any]:
        return build_garden_stats(self.repository.load_all(), locale)

    def get_status(self) -> Dict[str, Any]:
        return {
            "classifier": self.classifier.get_client_status(),
            "geolocation_enabled": bool(self.geolocator and self.geolocator.enabled),
            "live_feed": self.feed is not None,
        }
