"""
Booking store for InkBook
Keeps every booking in a single JSON array, cached in memory after the first read
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from inkbook.config import bookings_path

logger = logging.getLogger(__name__)


def new_booking_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


TEXT_FIELDS = (
    "id", "name", "phone", "email", "date", "time", "style", "placement",
    "size", "description", "reference_image", "status", "created_at", "updated_at",
)


def clean_legacy(booking: Dict) -> Dict:
    """
    Coerce a record written by an older front end into the stored shape.

    Ids become strings (a missing one is generated), a null status falls
    back to pending, and the known text fields hold strings or null.
    Unknown keys are kept as they are.
    """
    booking = dict(booking)
    if booking.get("id") in (None, ""):
        booking["id"] = new_booking_id()
    if booking.get("status") is None:
        booking["status"] = "pending"
    for key in TEXT_FIELDS:
        value = booking.get(key)
        if value is None or isinstance(value, str):
            continue
        if isinstance(value, bool):
            booking[key] = "true" if value else "false"
        elif isinstance(value, (int, float)):
            booking[key] = str(value)
        else:
            booking[key] = json.dumps(value, ensure_ascii=False)
    return booking


class BookingStore:
    """
    Read-modify-write store over a JSON file.

    With ``path=None`` the in-memory cache is the only storage. Writes
    replace the whole file; the lock only serializes threads of this
    process, so separate processes sharing a file still race.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._bookings: Optional[List[Dict]] = None
        self._lock = threading.RLock()

    @property
    def in_memory(self) -> bool:
        return self.path is None

    def _load(self) -> List[Dict]:
        if self._bookings is not None:
            return self._bookings
        if self.in_memory:
            self._bookings = []
            return self._bookings

        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
            logger.info("Created empty bookings file at %s", self.path)
            self._bookings = []
            return self._bookings

        try:
            with open(self.path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s (%s); starting with no bookings", self.path, exc)
            self._bookings = []
            return self._bookings

        if not isinstance(data, list):
            logger.warning("%s does not hold a JSON array; starting with no bookings", self.path)
            self._bookings = []
            return self._bookings

        bookings = [entry for entry in data if isinstance(entry, dict)]
        if len(bookings) != len(data):
            logger.warning("Dropped %d malformed entries from %s", len(data) - len(bookings), self.path)
        self._bookings = [clean_legacy(booking) for booking in bookings]
        return self._bookings

    def _commit(self, bookings: List[Dict]) -> None:
        """Write ``bookings`` and only then make them the cached state"""
        if not self.in_memory:
            self._write(bookings)
        self._bookings = bookings

    def _write(self, bookings: List[Dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".bookings-", suffix=".json", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(bookings, file, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Wrote %d bookings to %s", len(bookings), self.path)

    def reload(self) -> None:
        """Forget the cached bookings; the next access re-reads the file"""
        with self._lock:
            self._bookings = None

    def count(self) -> int:
        with self._lock:
            return len(self._load())

    def list_bookings(self, status: Optional[str] = None, date: Optional[str] = None) -> List[Dict]:
        with self._lock:
            bookings = self._load()
            return [
                dict(b) for b in bookings
                if (status is None or b.get("status", "pending") == status)
                and (date is None or b.get("date") == date)
            ]

    def get_booking(self, booking_id: str) -> Optional[Dict]:
        with self._lock:
            for booking in self._load():
                if booking.get("id") == booking_id:
                    return dict(booking)
        return None

    def add_booking(self, record: Dict) -> Dict:
        booking = dict(record)
        booking.setdefault("id", new_booking_id())
        booking.setdefault("status", "pending")
        booking.setdefault("created_at", utc_now())
        with self._lock:
            self._commit(self._load() + [booking])
        logger.info("Stored booking %s for %s", booking["id"], booking.get("date"))
        return dict(booking)

    def update_booking(self, booking_id: str, changes: Dict) -> Optional[Dict]:
        changes = {k: v for k, v in changes.items() if k not in ("id", "created_at")}
        with self._lock:
            bookings = self._load()
            for index, booking in enumerate(bookings):
                if booking.get("id") != booking_id:
                    continue
                updated = dict(booking, **changes)
                updated["updated_at"] = utc_now()
                self._commit(bookings[:index] + [updated] + bookings[index + 1:])
                logger.info("Updated booking %s (%s)", booking_id, ", ".join(sorted(changes)) or "no fields")
                return dict(updated)
        return None

    def delete_booking(self, booking_id: str) -> bool:
        with self._lock:
            bookings = self._load()
            remaining = [b for b in bookings if b.get("id") != booking_id]
            if len(remaining) == len(bookings):
                return False
            self._commit(remaining)
        logger.info("Deleted booking %s", booking_id)
        return True

    def clear(self) -> int:
        with self._lock:
            removed = len(self._load())
            self._commit([])
        logger.info("Cleared %d bookings", removed)
        return removed


# Singleton instance
_store_instance = None


def get_store() -> BookingStore:
    """Get or create the store singleton"""
    global _store_instance
    if _store_instance is None:
        _store_instance = BookingStore(bookings_path())
    return _store_instance


def reset_store(store: Optional[BookingStore] = None) -> None:
    global _store_instance
    _store_instance = store
