"""Journal mappers for JSON responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from moodmemories.domains.journal.schemas import Entry, MoodDefinition
from moodmemories.domains.journal.services.mood_registry import is_built_in


def map_entry(entry: Entry, mood: Optional[MoodDefinition] = None) -> dict:
    created = datetime.fromtimestamp(entry.timestamp / 1000)
    return {
        **entry.model_dump(),
        "created_at": created.isoformat(timespec="seconds"),
        "display_date": f"{created:%b} {created.day}, {created.year}, {created:%H:%M}",
        "date": created.date().isoformat(),
        "mood_color": mood.color if mood else None,
    }


def map_mood(mood: MoodDefinition) -> dict:
    return {**mood.model_dump(), "built_in": is_built_in(mood.name)}
