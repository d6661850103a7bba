"""Journal domain services."""

from moodmemories.domains.journal.services.entry_store import EntryStore
from moodmemories.domains.journal.services.filter_state import FilterState, day_of
from moodmemories.domains.journal.services.mood_registry import (
    BUILT_IN_MOOD_NAMES,
    BUILT_IN_MOODS,
    MoodRegistry,
)

__all__ = [
    "EntryStore",
    "MoodRegistry",
    "FilterState",
    "day_of",
    "BUILT_IN_MOODS",
    "BUILT_IN_MOOD_NAMES",
]
