"""Journal records and request schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"
CUSTOM_MOOD_ICON = "fa-heart"
# 9999-12-31T00:00Z; later instants can overflow datetime in local time.
MAX_TIMESTAMP_MS = 253402214400000


class Entry(BaseModel):
    """One journal entry. ``timestamp`` is epoch milliseconds and its identity."""

    model_config = ConfigDict(frozen=True)

    mood: str = Field(min_length=1)
    text: str = Field(min_length=1)
    timestamp: int = Field(ge=0, le=MAX_TIMESTAMP_MS)

    @field_validator("mood", "text", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class MoodDefinition(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(pattern=HEX_COLOR_PATTERN)
    icon: str = CUSTOM_MOOD_ICON

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("icon", mode="before")
    @classmethod
    def _default_icon(cls, value):
        if not isinstance(value, str) or not value.strip():
            return CUSTOM_MOOD_ICON
        return value.strip()


class EntryCreate(BaseModel):
    # Blank values are allowed here; the store discards them silently.
    mood: Optional[str] = None
    text: Optional[str] = None


class MoodCreate(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    color: str = Field(pattern=HEX_COLOR_PATTERN)


class MoodFilterToggle(BaseModel):
    mood: str = Field(min_length=1)


class DateFilterToggle(BaseModel):
    day: date


class CalendarParams(BaseModel):
    year: Optional[int] = Field(default=None, ge=1, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)


class SuggestMoodRequest(BaseModel):
    text: str = ""


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
