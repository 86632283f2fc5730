"""
Cosmic Garden - Garden Client
Python client for a running garden: loads the garden once, plants flowers
and follows the live feed.

Usage:
    client = GardenClient("http://localhost:5000")
    client.load_all()
    client.subscribe_inserts(lambda flower: print(flower.species, flower.message))
    client.plant("I'm so grateful today")
"""
import logging
from typing import Any, Callable, Dict, List, Optional

import requests
import socketio

from .errors import AIQuotaError, AIRateLimitError, FlowerInputError, GardenError
from .garden_state import GardenState
from .live_feed import FLOWER_PLANTED_EVENT, GARDEN_NAMESPACE
from .models import FlowerClassification, FlowerRecord
from .validation import sanitize_message

logger = logging.getLogger(__name__)

_STATUS_ERRORS = {
    400: FlowerInputError,
    402: AIQuotaError,
    429: AIRateLimitError,
}


class GardenClient:

    def __init__(self, base_url: str, language: Optional[str] = None, timeout: float = 15.0,
                 session: Optional[requests.Session] = None, sio: Optional[socketio.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if language:
            self.session.headers["Accept-Language"] = language
        self.sio = sio or socketio.Client(reconnection=True)
        self.state = GardenState()
        self._listeners: List[Callable[[FlowerRecord], None]] = []

        self.sio.on(FLOWER_PLANTED_EVENT, self._handle_flower_planted, namespace=GARDEN_NAMESPACE)

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            resp = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise GardenError(f"Garden unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.status_code >= 400:
            error_cls = _STATUS_ERRORS.get(resp.status_code, GardenError)
            raise error_cls(data.get("error") or f"HTTP {resp.status_code}")
        return data

    def load_all(self) -> List[FlowerRecord]:
        """Fetch every flower (oldest first) and reset local state to it"""
        data = self._request("GET", "/api/flowers")
        records = [FlowerRecord.from_dict(item) for item in data.get("data", {}).get("flowers", [])]
        self.state.hydrate(records)
        logger.info(f"Loaded {len(records)} flowers from {self.base_url}")
        return records

    def classify(self, message: str, author: Optional[str] = None) -> FlowerClassification:
        data = self._request("POST", "/api/generate-flower", json={"message": message, "author": author})
        return FlowerClassification(
            species=data["flowerType"],
            visual_type=data["visualType"],
            caption=data["message"],
            author=data["author"],
        )

    def plant(self, message: str, author: Optional[str] = None) -> FlowerRecord:
        """Plant a flower, showing it locally until the garden confirms it"""
        clean = sanitize_message(message)
        pending = FlowerRecord(species="wildflower", message=clean, author=author or "",
                               x=50.0, y=80.0, mood=clean)
        local_id = self.state.add_provisional(pending)

        try:
            data = self._request("POST", "/api/flowers", json={"message": message, "author": author})
        except GardenError:
            self.state.discard_provisional(local_id)
            raise

        record = FlowerRecord.from_dict(data["data"])
        if self.state.confirm(local_id, record):
            self._notify(record)
        return record

    def stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/garden/stats").get("data", {})

    def subscribe_inserts(self, on_insert: Callable[[FlowerRecord], None]) -> Callable[[], None]:
        """
        Call on_insert once for every flower new to this client, whether it
        arrives through the feed or from this client's own plant().
        """
        self._listeners.append(on_insert)
        if not self.sio.connected:
            self.sio.connect(self.base_url, namespaces=[GARDEN_NAMESPACE])

        def unsubscribe():
            if on_insert in self._listeners:
                self._listeners.remove(on_insert)

        return unsubscribe

    def _handle_flower_planted(self, payload: Dict[str, Any]):
        try:
            record = FlowerRecord.from_dict(payload)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed flower event: {e}")
            return
        if self.state.merge(record):
            self._notify(record)

    def _notify(self, record: FlowerRecord):
        for listener in list(self._listeners):
            try:
                listener(record)
            except Exception as e:
                logger.error(f"Insert listener failed for {record.id}: {e}")

    def close(self):
        if self.sio.connected:
            self.sio.disconnect()
        self.session.close()
