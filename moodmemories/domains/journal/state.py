"""Process-wide journal state owned by the application."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from flask import current_app

from moodmemories.domains.journal.schemas import Entry
from moodmemories.domains.journal.services.assistant_service import ChatSession, MixtureSummaryCache
from moodmemories.domains.journal.services.entry_store import EntryStore
from moodmemories.domains.journal.services.filter_state import FilterState
from moodmemories.domains.journal.services.mood_registry import MoodRegistry

STATE_KEY = "mood_journal"


@dataclass
class CalendarCursor:
    year: int
    month: int

    @classmethod
    def current(cls) -> "CalendarCursor":
        today = date.today()
        return cls(today.year, today.month)

    def shift(self, months: int) -> Tuple[int, int]:
        index = self.year * 12 + (self.month - 1) + months
        self.year, self.month = divmod(index, 12)
        self.month += 1
        return self.year, self.month


@dataclass
class JournalState:
    entries: EntryStore = field(default_factory=EntryStore)
    moods: MoodRegistry = field(default_factory=MoodRegistry)
    filters: FilterState = field(default_factory=FilterState)
    cursor: CalendarCursor = field(default_factory=CalendarCursor.current)
    summaries: MixtureSummaryCache = field(default_factory=MixtureSummaryCache)
    chat: ChatSession = field(default_factory=ChatSession)
    # Held across every mutate-and-save sequence; requests may run on several threads.
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def load(cls) -> "JournalState":
        """Build state from persisted slots. Requires an app context."""
        state = cls()
        state.moods.load()
        state.entries.load()
        return state

    def record_entry(self, mood: Optional[str], text: Optional[str]) -> Optional[Entry]:
        """Create and persist an entry under the state lock; None when blank."""
        with self.lock:
            entry = self.entries.create(mood, text)
            if entry is not None:
                self.entries.save()
            return entry

    def delete_entry(self, timestamp: int) -> bool:
        with self.lock:
            if not self.entries.remove(timestamp):
                return False
            self.entries.save()
            return True


def get_state() -> JournalState:
    return current_app.extensions[STATE_KEY]
