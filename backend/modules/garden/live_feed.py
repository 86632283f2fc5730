"""
Cosmic Garden - Live Flower Feed
Pushes every newly planted flower to connected Socket.IO clients and to
in-process subscribers.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional

from flask_socketio import SocketIO, emit

from .models import FlowerRecord

logger = logging.getLogger(__name__)

GARDEN_NAMESPACE = "/garden"
FLOWER_PLANTED_EVENT = "flower_planted"


class FlowerFeed:
    """Insert-only change feed for the flowers table"""

    def __init__(self, socketio: Optional[SocketIO] = None, namespace: str = GARDEN_NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace
        self._subscribers: List[Callable[[FlowerRecord], None]] = []
        self._lock = threading.Lock()
        self.connected_clients = 0

        if self.socketio is not None:
            self._register_handlers()
            logger.info(f"Live flower feed ready on {self.namespace}")

    def _register_handlers(self):
        """Set up WebSocket event handlers"""

        @self.socketio.on("connect", namespace=self.namespace)
        def handle_connect(auth=None):
            with self._lock:
                self.connected_clients += 1
            emit("connection_established", {
                "namespace": self.namespace,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            })

        @self.socketio.on("disconnect", namespace=self.namespace)
        def handle_disconnect(*args):
            with self._lock:
                self.connected_clients = max(0, self.connected_clients - 1)

    def subscribe(self, callback: Callable[[FlowerRecord], None]) -> Callable[[], None]:
        """Register an in-process listener; returns a function that removes it"""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, record: FlowerRecord):
        """
        Announce a stored flower. Delivery is fire-and-forget: a failing
        listener or socket never fails the insert that triggered it.

        With a Socket.IO server, in-process subscribers run in a background
        task so the planting request does not wait on them.
        """
        payload = record.to_dict()

        if self.socketio is not None:
            try:
                self.socketio.emit(FLOWER_PLANTED_EVENT, payload, namespace=self.namespace)
            except Exception as e:
                logger.error(f"Error broadcasting flower {record.id}: {e}")

        with self._lock:
            subscribers = list(self._subscribers)
        if not subscribers:
            return

        if self.socketio is not None:
            self.socketio.start_background_task(self._notify_subscribers, subscribers, record)
        else:
            self._notify_subscribers(subscribers, record)

    def _notify_subscribers(self, subscribers: List[Callable[[FlowerRecord], None]], record: FlowerRecord):
        for callback in subscribers:
            try:
                callback(record)
            except Exception as e:
                logger.error(f"Flower feed subscriber failed for {record.id}: {e}")
