"""
Cosmic Garden - Local Garden State
Client-side view of the garden keyed by record id.

The live feed is the source of truth. A flower the client plants itself is
shown right away as a provisional copy and swapped for the stored record
when either the POST response or the feed echo arrives, whichever is first,
so it is never rendered twice.
"""
import threading
import uuid
from typing import Dict, List, Optional

from .models import FlowerRecord

LOCAL_ID_PREFIX = "local-"


class GardenState:

    def __init__(self):
        self._order: List[str] = []
        self._records: Dict[str, FlowerRecord] = {}
        self._provisional: Dict[str, FlowerRecord] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def __contains__(self, flower_id: str) -> bool:
        with self._lock:
            return flower_id in self._records

    def records(self) -> List[FlowerRecord]:
        """Snapshot in display order"""
        with self._lock:
            return [self._records[i] for i in self._order]

    def get(self, flower_id: str) -> Optional[FlowerRecord]:
        with self._lock:
            return self._records.get(flower_id)

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._provisional)

    def hydrate(self, records: List[FlowerRecord]):
        """Replace local state with a full load (oldest first)"""
        with self._lock:
            self._order = []
            self._records = {}
            for record in records:
                if record.id and record.id not in self._records:
                    self._order.append(record.id)
                    self._records[record.id] = record
            # Pending local copies stay visible until they are confirmed
            for local_id, record in self._provisional.items():
                self._order.append(local_id)
                self._records[local_id] = record

    def add_provisional(self, record: FlowerRecord) -> str:
        """Show a not-yet-stored flower; returns its local id"""
        local_id = f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex[:12]}"
        record.id = local_id
        with self._lock:
            self._order.append(local_id)
            self._records[local_id] = record
            self._provisional[local_id] = record
        return local_id

    def discard_provisional(self, local_id: str):
        with self._lock:
            if self._provisional.pop(local_id, None) is not None:
                self._records.pop(local_id, None)
                self._order.remove(local_id)

    def _replace(self, old_id: str, record: FlowerRecord):
        index = self._order.index(old_id)
        self._order[index] = record.id
        self._records.pop(old_id, None)
        self._provisional.pop(old_id, None)
        self._records[record.id] = record

    def _matching_provisional(self, record: FlowerRecord) -> Optional[str]:
        for local_id, pending in self._provisional.items():
            if pending.mood and pending.mood == record.mood:
                return local_id
        return None

    def confirm(self, local_id: str, record: FlowerRecord) -> bool:
        """
        Swap a provisional copy for the stored record.

        Returns True when the record id is new to this state.
        """
        with self._lock:
            if record.id in self._records:
                self.discard_provisional(local_id)
                return False
            if local_id in self._provisional:
                self._replace(local_id, record)
            else:
                self._order.append(record.id)
                self._records[record.id] = record
            return True

    def merge(self, record: FlowerRecord) -> bool:
        """
        Apply a record from the live feed.

        Known ids are ignored; a record that answers a pending local copy
        takes that copy's place. Returns True when the record id is new.
        """
        if not record.id:
            return False
        with self._lock:
            if record.id in self._records:
                return False
            local_id = self._matching_provisional(record)
            if local_id is not None:
                self._replace(local_id, record)
            else:
                self._order.append(record.id)
                self._records[record.id] = record
            return True
