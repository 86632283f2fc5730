"""
Cosmic Garden - Garden Models
"""
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, NamedTuple, Optional

from .taxonomy import map_to_visual_type


class Position(NamedTuple):
    """Layout coordinates in percent of the garden area (not geographic)"""
    x: float
    y: float


@dataclass
class GeoLocation:
    latitude: float
    longitude: float
    country: Optional[str] = None
    city: Optional[str] = None


@dataclass
class FlowerClassification:
    """Outcome of one classification; source is "ai" or "fallback" """
    species: str
    visual_type: str
    caption: str
    author: str
    source: str = "ai"

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flowerType": self.species,
            "visualType": self.visual_type,
            "message": self.caption,
            "author": self.author,
        }


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept datetime, ISO-8601 string or epoch milliseconds"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass
class FlowerRecord:
    """One planted flower. Create-only: never updated once persisted."""
    species: str
    message: str
    author: str
    x: float
    y: float
    type: Optional[str] = None
    mood: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    country: Optional[str] = None
    city: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        # Visual type is always one of the six renderable categories
        self.type = map_to_visual_type(self.type or self.species)
        self.x = float(self.x)
        self.y = float(self.y)

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def with_location(self, geo: Optional[GeoLocation]) -> "FlowerRecord":
        if geo is not None:
            self.latitude = geo.latitude
            self.longitude = geo.longitude
            self.country = geo.country
            self.city = geo.city
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FlowerRecord":
        return cls(
            id=payload.get("id"),
            species=payload.get("species") or payload.get("type") or "wildflower",
            type=payload.get("type"),
            message=payload.get("message") or "",
            author=payload.get("author") or "Anonymous",
            mood=payload.get("mood"),
            x=payload.get("x", 0),
            y=payload.get("y", 0),
            latitude=_optional_float(payload.get("latitude")),
            longitude=_optional_float(payload.get("longitude")),
            country=payload.get("country"),
            city=payload.get("city"),
            created_at=parse_timestamp(payload.get("created_at")),
        )
