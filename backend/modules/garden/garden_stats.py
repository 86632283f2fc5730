"""
Cosmic Garden - Garden Statistics
Garden level, per-type counts and world-map clustering for the stats panel.
"""
import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..i18n import LocaleContext
from .models import FlowerRecord
from .taxonomy import VISUAL_TYPES

# (upper bound exclusive, key, emoji); the last band is open-ended
GARDEN_LEVELS: List[Tuple[Optional[int], str, str]] = [
    (1, "barren", "🌑"),
    (5, "sprouting", "🌱"),
    (15, "early_spring", "🌷"),
    (30, "blooming", "🌸"),
    (50, "wonderland", "🌺"),
    (None, "paradise", "🏵️"),
]

LOCATION_WINDOW = 8.0


def garden_level(count: int, locale: Optional[LocaleContext] = None) -> Dict[str, Any]:
    """Level reached by a garden of `count` flowers and progress towards the next"""
    locale = locale or LocaleContext()
    count = max(0, int(count))

    lower = 0
    for upper, key, emoji in GARDEN_LEVELS:
        if upper is None or count < upper:
            if key == "barren":
                progress = 0.0
            elif upper is None:
                progress = 1.0
            else:
                progress = (count - lower) / (upper - lower)
            return {
                "key": key,
                "name": locale.text(f"level_{key}"),
                "emoji": emoji,
                "progress": round(progress, 4),
                "next_at": upper,
            }
        # the barren band is only the empty garden; sprouting counts from 0
        lower = upper if key != "barren" else 0

    raise AssertionError("unreachable: last garden level is open-ended")


def project_to_map(lat: float, lng: float) -> Dict[str, float]:
    """Mercator projection onto percentage map coordinates"""
    x = ((lng + 180.0) / 360.0) * 100.0
    lat = max(-85.0, min(85.0, lat))
    lat_rad = math.radians(lat)
    mercator_y = math.log(math.tan(math.pi / 4 + lat_rad / 2))
    y = 50.0 - (mercator_y / math.pi) * 50.0
    return {
        "x": max(0.0, min(100.0, x)),
        "y": max(5.0, min(95.0, y)),
    }


def group_by_location(records: Iterable[FlowerRecord], window: float = LOCATION_WINDOW) -> List[Dict[str, Any]]:
    """
    Cluster located flowers. A flower joins the first group whose anchor is
    within `window` degrees in both latitude and longitude.
    """
    groups: List[Dict[str, Any]] = []
    for record in records:
        if not record.has_location:
            continue
        for group in groups:
            if (abs(group["lat"] - record.latitude) < window
                    and abs(group["lng"] - record.longitude) < window):
                group["count"] += 1
                break
        else:
            groups.append({"lat": record.latitude, "lng": record.longitude, "count": 1})

    for group in groups:
        group.update(project_to_map(group["lat"], group["lng"]))
    return groups


def count_by_type(records: Iterable[FlowerRecord]) -> Dict[str, int]:
    counts = {visual_type: 0 for visual_type in VISUAL_TYPES}
    for record in records:
        counts[record.type] = counts.get(record.type, 0) + 1
    return counts


def top_countries(records: Iterable[FlowerRecord], limit: int = 5) -> List[Dict[str, Any]]:
    counter = Counter(r.country for r in records if r.country)
    return [{"country": country, "count": count} for country, count in counter.most_common(limit)]


def build_garden_stats(records: List[FlowerRecord], locale: Optional[LocaleContext] = None) -> Dict[str, Any]:
    locale = locale or LocaleContext()
    located = [r for r in records if r.has_location]
    species_counter = Counter(r.species for r in records)
    return {
        "total": len(records),
        "level": garden_level(len(records), locale),
        "by_type": count_by_type(records),
        "top_species": [{"species": s, "count": c} for s, c in species_counter.most_common(5)],
        "located": len(located),
        "locations": group_by_location(located),
        "countries": top_countries(records),
        "language": locale.language,
    }
