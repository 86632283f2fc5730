"""
Cosmic Garden - Flower Taxonomy
Open species vocabulary returned by the AI, folded down to the six visual
types the garden can draw.
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DATA_FILE = os.path.join(os.path.dirname(__file__), "data", "flower_species.json")

with open(DATA_FILE, "r", encoding="utf-8") as f:
    SPECIES_CATALOG: List[Dict[str, Any]] = json.load(f)

logger.debug(f"Loaded {len(SPECIES_CATALOG)} flower species from {DATA_FILE}")

SPECIES_IDS = tuple(entry["id"] for entry in SPECIES_CATALOG)
_SPECIES_BY_ID = {entry["id"]: entry for entry in SPECIES_CATALOG}

VISUAL_TYPES = ("iris", "poppy", "rose", "wildflower", "lavender", "daisy")
DEFAULT_VISUAL_TYPE = "wildflower"

# Grouped by how the bloom looks, not by botanical family
VISUAL_TYPE_MAP: Dict[str, str] = {
    # Rose-like
    "peony": "rose", "cherry_blossom": "rose", "plum_blossom": "rose", "apple_blossom": "rose",
    "camellia": "rose", "carnation": "rose", "dianthus": "rose", "ranunculus": "rose",
    "tulip": "rose", "magnolia": "rose", "yulan": "rose", "begonia": "rose", "gardenia": "rose",

    # Daisy-like (composite)
    "sunflower": "daisy", "chrysanthemum": "daisy", "gerbera": "daisy", "aster": "daisy",
    "dahlia": "daisy", "zinnia": "daisy", "marigold": "daisy", "cosmos": "daisy",
    "echinacea": "daisy", "thistle": "daisy", "cornflower": "daisy",

    # Iris-like (tall, elegant)
    "orchid": "iris", "phalaenopsis": "iris", "cymbidium": "iris", "dendrobium": "iris",
    "cattleya": "iris", "lily": "iris", "gladiolus": "iris", "freesia": "iris",
    "amaryllis": "iris", "agapanthus": "iris", "bird_of_paradise": "iris", "lotus": "iris",
    "water_lily": "iris", "hyacinth": "iris", "fritillaria": "iris", "daylily": "iris",

    # Poppy-like (bold cup, simple petals)
    "hibiscus": "poppy", "hollyhock": "poppy", "anemone": "poppy", "california_poppy": "poppy",
    "passion_flower": "poppy", "protea": "poppy", "cotton_rose": "poppy", "bloodroot": "poppy",

    # Lavender-like (spiky, clustered)
    "salvia": "lavender", "rosemary": "lavender", "delphinium": "lavender", "foxglove": "lavender",
    "snapdragon": "lavender", "lilac": "lavender", "wisteria": "lavender", "lupine": "lavender",
    "hydrangea": "lavender", "verbena": "lavender", "heather": "lavender", "statice": "lavender",
    "bellflower": "lavender", "lobelia": "lavender", "astilbe": "lavender", "penstemon": "lavender",

    # Wildflower-like (varied, casual)
    "primrose": "wildflower", "cyclamen": "wildflower", "violet": "wildflower", "pansy": "wildflower",
    "impatiens": "wildflower", "petunia": "wildflower", "morning_glory": "wildflower",
    "honeysuckle": "wildflower", "jasmine": "wildflower", "osmanthus": "wildflower",
    "geranium": "wildflower", "lantana": "wildflower", "bougainvillea": "wildflower",
    "sweet_pea": "wildflower", "clover": "wildflower", "buttercup": "wildflower",
    "forget_me_not": "wildflower", "bluebell": "wildflower", "crocus": "wildflower",
    "narcissus": "wildflower", "daffodil": "wildflower", "snowdrop": "wildflower",
    "baby_breath": "wildflower", "stock": "wildflower", "sweet_alyssum": "wildflower",
    "acacia": "wildflower", "hawthorn": "wildflower", "nicotiana": "wildflower",
    "moonflower": "wildflower", "scabiosa": "wildflower", "heuchera": "wildflower",
    "ixora": "wildflower", "banksia": "wildflower", "ginger_lily": "wildflower",
    "turmeric_flower": "wildflower", "azalea": "wildflower", "rhododendron": "wildflower",
    "columbine": "wildflower", "hellebore": "wildflower", "clematis": "wildflower",
}

FLOWER_EMOJI: Dict[str, str] = {
    "rose": "🌹", "cherry_blossom": "🌸", "tulip": "🌷", "sunflower": "🌻",
    "hibiscus": "🌺", "lotus": "🪷", "daisy": "🌼", "iris": "🪻",
    "lavender": "💜", "poppy": "🌺", "wildflower": "🌸", "orchid": "🪻",
    "lily": "🪷", "carnation": "🌸", "chrysanthemum": "🌼", "peony": "🌸",
}
DEFAULT_EMOJI = "🌸"


def map_to_visual_type(species: Any) -> str:
    """
    Map any species id to one of VISUAL_TYPES.

    Total: unknown ids, non-strings and None all become "wildflower".
    """
    if not isinstance(species, str):
        return DEFAULT_VISUAL_TYPE
    if species in VISUAL_TYPES:
        return species
    return VISUAL_TYPE_MAP.get(species, DEFAULT_VISUAL_TYPE)


def is_known_species(species: Any) -> bool:
    return isinstance(species, str) and species in _SPECIES_BY_ID


def get_species_info(species: str) -> Optional[Dict[str, Any]]:
    """Catalog entry for a species id, or None"""
    entry = _SPECIES_BY_ID.get(species)
    return dict(entry) if entry else None


def get_flower_emoji(species: str) -> str:
    return FLOWER_EMOJI.get(species, DEFAULT_EMOJI)


def list_species(language: str = "en") -> List[Dict[str, Any]]:
    """Catalog with derived visual type, emoji and a display name for the language"""
    species_list = []
    for entry in SPECIES_CATALOG:
        item = dict(entry)
        item["visual_type"] = map_to_visual_type(entry["id"])
        item["emoji"] = get_flower_emoji(entry["id"])
        item["display_name"] = entry["name_zh"] if language == "zh" else entry["name"]
        species_list.append(item)
    return species_list
