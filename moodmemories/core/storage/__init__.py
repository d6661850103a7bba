"""Local slot storage."""

from moodmemories.core.storage.models import StorageSlot
from moodmemories.core.storage.slot_service import (
    API_KEY_SLOT,
    COLOR_THEME_SLOT,
    ENTRIES_SLOT,
    MOODS_SLOT,
    THEME_SLOT,
    delete_slot,
    read_slot,
    write_slot,
)

__all__ = [
    "StorageSlot",
    "read_slot",
    "write_slot",
    "delete_slot",
    "ENTRIES_SLOT",
    "MOODS_SLOT",
    "THEME_SLOT",
    "COLOR_THEME_SLOT",
    "API_KEY_SLOT",
]
