"""Journal domain Pydantic schemas."""

from moodmemories.domains.journal.schemas.journal_schemas import (
    CUSTOM_MOOD_ICON,
    CalendarParams,
    ChatRequest,
    DateFilterToggle,
    Entry,
    EntryCreate,
    MoodCreate,
    MoodDefinition,
    MoodFilterToggle,
    SuggestMoodRequest,
)

__all__ = [
    "CUSTOM_MOOD_ICON",
    "Entry",
    "MoodDefinition",
    "EntryCreate",
    "MoodCreate",
    "MoodFilterToggle",
    "DateFilterToggle",
    "CalendarParams",
    "SuggestMoodRequest",
    "ChatRequest",
]
