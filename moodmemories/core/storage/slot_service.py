"""Read and write serialized snapshots in named storage slots."""

from __future__ import annotations

from typing import Optional

from moodmemories.core.storage.models import StorageSlot
from moodmemories.extensions import db

ENTRIES_SLOT = "entries"
MOODS_SLOT = "moods"
THEME_SLOT = "theme"
COLOR_THEME_SLOT = "color_theme"
API_KEY_SLOT = "api_key"


def read_slot(key: str) -> Optional[str]:
    slot = db.session.get(StorageSlot, key)
    return slot.value if slot else None


def write_slot(key: str, value: str) -> None:
    """Replace the slot value. Storage errors propagate to the caller."""
    slot = db.session.get(StorageSlot, key)
    if slot:
        slot.value = value
    else:
        db.session.add(StorageSlot(key=key, value=value))
    db.session.commit()


def delete_slot(key: str) -> bool:
    slot = db.session.get(StorageSlot, key)
    if not slot:
        return False
    db.session.delete(slot)
    db.session.commit()
    return True
