"""Entry store: insertion-ordered journal entries persisted as one snapshot."""

from __future__ import annotations

import json
import logging
import time
from typing import List, Optional

from pydantic import ValidationError

from moodmemories.core.storage import ENTRIES_SLOT, read_slot, write_slot
from moodmemories.domains.journal.schemas import Entry

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class EntryStore:
    """In-memory entry collection backed by the ``entries`` slot."""

    def __init__(self, entries: Optional[List[Entry]] = None) -> None:
        self._entries: List[Entry] = list(entries or [])

    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> "EntryStore":
        """Replace the collection with the persisted snapshot; never raises on bad data."""
        raw = read_slot(ENTRIES_SLOT)
        self._entries = []
        if not raw:
            return self
        try:
            records = json.loads(raw)
        except ValueError as exc:
            logger.error("Could not parse saved entries: %s", exc)
            return self
        if not isinstance(records, list):
            logger.error("Saved entries snapshot is not a list; starting empty")
            return self
        for record in records:
            try:
                self._entries.append(Entry.model_validate(record))
            except ValidationError:
                logger.warning("Dropping malformed entry record: %r", record)
        return self

    def save(self) -> None:
        payload = [entry.model_dump() for entry in self._entries]
        write_slot(ENTRIES_SLOT, json.dumps(payload))

    def add(self, entry: Entry) -> Entry:
        self._entries.append(entry)
        return entry

    def remove(self, timestamp: int) -> bool:
        for idx, entry in enumerate(self._entries):
            if entry.timestamp == timestamp:
                del self._entries[idx]
                return True
        return False

    def next_timestamp(self) -> int:
        """Current instant, bumped past the newest stored timestamp so identities stay unique."""
        latest = max((e.timestamp for e in self._entries), default=0)
        return max(now_ms(), latest + 1)

    def create(self, mood: Optional[str], text: Optional[str]) -> Optional[Entry]:
        """
        Stamp and append a new entry.

        Returns None without touching the store when mood or text is blank.
        """
        mood_name = (mood or "").strip()
        body = (text or "").strip()
        if not mood_name or not body:
            return None
        return self.add(Entry(mood=mood_name, text=body, timestamp=self.next_timestamp()))
