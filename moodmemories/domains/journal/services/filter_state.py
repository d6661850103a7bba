"""Transient mood/date selectors gating the timeline and chart highlight."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from moodmemories.domains.journal.schemas import Entry


def day_of(timestamp: int) -> date:
    """Local calendar day of an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp / 1000).date()


def format_day_label(day: date) -> str:
    return f"{day:%b} {day.day}, {day.year}"


@dataclass
class FilterState:
    mood: Optional[str] = None
    day: Optional[date] = None

    @property
    def active(self) -> bool:
        return self.mood is not None or self.day is not None

    def toggle_mood(self, mood: str) -> Optional[str]:
        """Select a mood, or clear the selection when it is already selected."""
        self.mood = None if self.mood == mood else mood
        return self.mood

    def toggle_day(self, day: date) -> Optional[date]:
        self.day = None if self.day == day else day
        return self.day

    def matches(self, entry: Entry) -> bool:
        if self.mood is not None and entry.mood != self.mood:
            return False
        if self.day is not None and day_of(entry.timestamp) != self.day:
            return False
        return True

    def label(self) -> str:
        parts = []
        if self.mood is not None:
            parts.append(f"Mood: {self.mood}")
        if self.day is not None:
            parts.append(format_day_label(self.day))
        return " | ".join(parts)

    def to_dict(self) -> dict:
        return {
            "mood": self.mood,
            "date": self.day.isoformat() if self.day else None,
            "label": self.label(),
        }
