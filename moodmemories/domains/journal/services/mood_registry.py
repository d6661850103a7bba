"""Mood registry: built-in and custom mood definitions."""

from __future__ import annotations

import json
import logging
import re
from typing import List, Optional

from pydantic import ValidationError

from moodmemories.core.storage import MOODS_SLOT, read_slot, write_slot
from moodmemories.domains.journal.schemas import CUSTOM_MOOD_ICON, MoodDefinition

logger = logging.getLogger(__name__)

BUILT_IN_MOODS: List[MoodDefinition] = [
    MoodDefinition(name="Happy", icon="fa-smile-beam", color="#6c63ff"),
    MoodDefinition(name="Sad", icon="fa-frown", color="#f77754"),
    MoodDefinition(name="Angry", icon="fa-angry", color="#ff9a56"),
    MoodDefinition(name="Excited", icon="fa-grin-stars", color="#f0c808"),
    MoodDefinition(name="Calm", icon="fa-spa", color="#55c57a"),
]
BUILT_IN_MOOD_NAMES = frozenset(m.name for m in BUILT_IN_MOODS)

# Placeholder names that leaked into saved data; stripped on every load.
RESERVED_MOOD_NAMES = frozenset({"gg", "gg gg"})

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_built_in(name: str) -> bool:
    return name in BUILT_IN_MOOD_NAMES


class MoodRegistry:
    """Ordered mood definitions backed by the ``moods`` slot."""

    def __init__(self, moods: Optional[List[MoodDefinition]] = None) -> None:
        self._moods: List[MoodDefinition] = list(moods or [])

    @property
    def moods(self) -> List[MoodDefinition]:
        return list(self._moods)

    def __len__(self) -> int:
        return len(self._moods)

    def names(self) -> List[str]:
        return [m.name for m in self._moods]

    def get(self, name: str) -> Optional[MoodDefinition]:
        return next((m for m in self._moods if m.name == name), None)

    def is_built_in(self, name: str) -> bool:
        return is_built_in(name)

    def load(self) -> "MoodRegistry":
        """
        Load persisted moods, seeding built-ins only when nothing was ever saved.

        A saved registry that is missing a built-in stays that way.
        """
        raw = read_slot(MOODS_SLOT)
        if raw is None:
            records: list = [m.model_dump() for m in BUILT_IN_MOODS]
        else:
            try:
                records = json.loads(raw)
            except ValueError as exc:
                logger.error("Could not load mood list: %s", exc)
                records = []
            if not isinstance(records, list):
                logger.error("Saved mood list is not a list; starting empty")
                records = []
        self._moods = self._clean(records)
        return self

    @staticmethod
    def _clean(records: list) -> List[MoodDefinition]:
        moods: List[MoodDefinition] = []
        seen = set()
        for record in records:
            if not isinstance(record, dict):
                continue
            name = str(record.get("name") or "").strip()
            if not name or name.lower() in RESERVED_MOOD_NAMES:
                continue
            # First occurrence wins.
            if name.lower() in seen:
                continue
            try:
                mood = MoodDefinition.model_validate(record)
            except ValidationError:
                logger.warning("Dropping malformed mood record: %r", record)
                continue
            seen.add(name.lower())
            moods.append(mood)
        return moods

    def save(self) -> None:
        write_slot(MOODS_SLOT, json.dumps([m.model_dump() for m in self._moods]))

    def add(self, name: str, color: str) -> MoodDefinition:
        """Upsert by case-insensitive name; new moods get the custom icon."""
        name = (name or "").strip()
        if not name or not _HEX_COLOR.match(color or ""):
            raise ValueError("validation_error")
        for idx, mood in enumerate(self._moods):
            if mood.name.lower() == name.lower():
                updated = mood.model_copy(update={"color": color, "icon": CUSTOM_MOOD_ICON})
                self._moods[idx] = updated
                return updated
        mood = MoodDefinition(name=name, color=color, icon=CUSTOM_MOOD_ICON)
        self._moods.append(mood)
        return mood

    def remove(self, name: str) -> bool:
        if is_built_in(name):
            return False
        for idx, mood in enumerate(self._moods):
            if mood.name == name:
                del self._moods[idx]
                return True
        return False
