"""
Cosmic Garden - IP Geolocation
Best-effort lookup so flowers can show up on the world map. Never raises.
"""
import ipaddress
import logging
from typing import Optional

import requests

from ... import config
from .models import GeoLocation
from .validation import optional_text

logger = logging.getLogger(__name__)


def is_public_ip(ip: Optional[str]) -> bool:
    if not ip:
        return False
    try:
        addr = ipaddress.ip_address(ip.strip())
    except ValueError:
        return False
    return addr.is_global


class GeoLocator:
    """ipapi.co-style lookup: {latitude, longitude, country_name, city}"""

    def __init__(self, url_template: Optional[str] = None, timeout: Optional[float] = None,
                 enabled: Optional[bool] = None, session: Optional[requests.Session] = None):
        self.url_template = url_template or config.GEO_LOOKUP_URL
        self.timeout = timeout or config.GEO_TIMEOUT
        self.enabled = config.GEO_ENABLED if enabled is None else enabled
        self.session = session or requests.Session()

    def lookup(self, ip: Optional[str]) -> Optional[GeoLocation]:
        if not self.enabled or not is_public_ip(ip):
            return None

        url = self.url_template.format(ip=ip.strip())
        try:
            resp = self.session.get(url, timeout=self.timeout)
            if resp.status_code != 200:
                logger.warning(f"Geolocation lookup returned {resp.status_code}")
                return None
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Geolocation lookup failed: {e}")
            return None

        if not isinstance(data, dict) or data.get("error"):
            logger.debug(f"Geolocation lookup had no result for {ip}")
            return None

        try:
            latitude = float(data["latitude"])
            longitude = float(data["longitude"])
        except (KeyError, TypeError, ValueError):
            return None

        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            return None

        return GeoLocation(
            latitude=latitude,
            longitude=longitude,
            country=optional_text(data.get("country_name"), 100),
            city=optional_text(data.get("city"), 100),
        )
