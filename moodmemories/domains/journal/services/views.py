"""Derived views: pure projections of entries and moods.

Every function here recomputes from scratch; nothing is persisted.
"""

from __future__ import annotations

import calendar
import re
from collections import Counter
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from moodmemories.domains.journal.schemas import Entry, MoodDefinition
from moodmemories.domains.journal.services.filter_state import FilterState, day_of

SUMMARY_THRESHOLD = 4
MAX_DAY_DOTS = 3
TRENDING_LIMIT = 5
WORD_CLOUD_LIMIT = 20
WORD_CLOUD_MIN_REM = 1.0
WORD_CLOUD_MAX_REM = 3.0
FADED_ALPHA = 0.3
BORDER_ALPHA = 0.5

TRENDING_STOPWORDS = frozenset(
    {"the", "and", "to", "is", "it", "in", "a", "of", "on", "for", "with", "that", "this",
     "today", "i", "was", "my", "me", "at"}
)
WORD_CLOUD_STOPWORDS = TRENDING_STOPWORDS | {"had", "have", "has", "you", "we"}
WORD_CLOUD_PALETTE = ("#6c63ff", "#f77754", "#ff9a56", "#f0c808", "#55c57a", "#00bcd4", "#e94e77")

# ASCII word boundaries: accented letters split words rather than join them.
_WORD_RE = re.compile(r"\b[a-z]{3,}\b", re.ASCII)


# ==================== Color helpers ====================


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    value = int(hex_color.lstrip("#"), 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def hex_to_rgba(hex_color: str, alpha: float = 1) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r},{g},{b},{alpha})"


def average_color(colors: Sequence[str]) -> Optional[str]:
    """Average the RGB channels of ``#rrggbb`` colors, rounding half up."""
    if not colors:
        return None
    if len(colors) == 1:
        return colors[0]
    channels = [hex_to_rgb(c) for c in colors]
    avg = [int(sum(ch[i] for ch in channels) / len(channels) + 0.5) for i in range(3)]
    return "#" + "".join(f"{v:02x}" for v in avg)


def _color_lookup(moods: Iterable[MoodDefinition]) -> Dict[str, str]:
    return {m.name: m.color for m in moods}


# ==================== Mood counts / chart ====================


def mood_counts(entries: Iterable[Entry], moods: Sequence[MoodDefinition]) -> Dict[str, int]:
    """Count entries per registry mood, zero-filled, in registry order.

    Entries whose mood is not in the registry are not counted anywhere.
    """
    counts = {m.name: 0 for m in moods}
    for entry in entries:
        if entry.mood in counts:
            counts[entry.mood] += 1
    return counts


def chart_view(
    entries: Iterable[Entry],
    moods: Sequence[MoodDefinition],
    filters: Optional[FilterState] = None,
) -> List[dict]:
    counts = mood_counts(entries, moods)
    total = sum(counts.values())
    selected = filters.mood if filters else None
    bars = []
    for mood in moods:
        count = counts[mood.name]
        is_selected = selected == mood.name
        faded = selected is not None and not is_selected
        bars.append(
            {
                "name": mood.name,
                "icon": mood.icon,
                "color": mood.color,
                "count": count,
                "percent": round(count / total * 100, 1) if total else 0,
                "selected": is_selected,
                "background": hex_to_rgba(mood.color, FADED_ALPHA) if faded else mood.color,
                "border_color": "#000000" if is_selected else hex_to_rgba(mood.color, BORDER_ALPHA),
                "border_width": 3 if is_selected else 1,
            }
        )
    return bars


# ==================== Calendar ====================


def group_by_day(entries: Iterable[Entry]) -> Dict[date, List[str]]:
    """Moods logged per local calendar day, in storage order."""
    days: Dict[date, List[str]] = {}
    for entry in entries:
        days.setdefault(day_of(entry.timestamp), []).append(entry.mood)
    return days


def unique_in_order(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def dominant_mood_color(day_moods: Sequence[str], moods: Sequence[MoodDefinition]) -> Optional[str]:
    if not day_moods:
        return None
    top, top_count = None, 0
    for name, count in Counter(day_moods).items():
        if count > top_count:
            top, top_count = name, count
    return _color_lookup(moods).get(top)


def calendar_day(
    day: date,
    day_moods: Sequence[str],
    moods: Sequence[MoodDefinition],
    filters: Optional[FilterState] = None,
    summary: Optional[str] = None,
) -> dict:
    colors = _color_lookup(moods)
    unique = unique_in_order(day_moods)
    dots = [colors[name] for name in unique[:MAX_DAY_DOTS] if name in colors]
    return {
        "date": day.isoformat(),
        "day": day.day,
        "moods": unique,
        "dots": dots,
        "entry_count": len(day_moods),
        "needs_summary": len(day_moods) >= SUMMARY_THRESHOLD,
        "summary": summary,
        "selected": bool(filters and filters.day == day),
        "average_color": average_color([colors[m] for m in day_moods if m in colors]),
        "dominant_color": dominant_mood_color(day_moods, moods),
    }


def calendar_month(
    entries: Iterable[Entry],
    moods: Sequence[MoodDefinition],
    year: int,
    month: int,
    filters: Optional[FilterState] = None,
    summaries: Optional[Mapping[str, str]] = None,
) -> dict:
    """Sunday-first month grid with per-day mood groupings."""
    first = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]
    leading = (first.weekday() + 1) % 7
    trailing = (7 - (leading + days_in_month) % 7) % 7
    by_day = group_by_day(entries)
    summaries = summaries or {}
    days = []
    for num in range(1, days_in_month + 1):
        day = date(year, month, num)
        days.append(
            calendar_day(day, by_day.get(day, []), moods, filters, summaries.get(day.isoformat()))
        )
    return {
        "year": year,
        "month": month,
        "label": f"{first:%B} {year}",
        "leading_blanks": leading,
        "trailing_blanks": trailing,
        "days": days,
    }


# ==================== Word frequency ====================


def tokenize(text: str) -> List[str]:
    return _WORD_RE.findall(text.lower())


def word_frequencies(entries: Iterable[Entry], stopwords: Iterable[str] = TRENDING_STOPWORDS) -> List[Tuple[str, int]]:
    """Word counts ranked descending; ties keep first-seen order."""
    stop = set(stopwords)
    freq: Dict[str, int] = {}
    for entry in entries:
        for word in tokenize(entry.text):
            if word not in stop:
                freq[word] = freq.get(word, 0) + 1
    return sorted(freq.items(), key=lambda item: item[1], reverse=True)


def trending(entries: Iterable[Entry], limit: int = TRENDING_LIMIT) -> List[dict]:
    ranked = word_frequencies(entries, TRENDING_STOPWORDS)[:limit]
    return [{"word": word, "count": count} for word, count in ranked]


def word_cloud(entries: Iterable[Entry], limit: int = WORD_CLOUD_LIMIT) -> List[dict]:
    ranked = word_frequencies(entries, WORD_CLOUD_STOPWORDS)[:limit]
    if not ranked:
        return []
    top_count = ranked[0][1]
    spread = WORD_CLOUD_MAX_REM - WORD_CLOUD_MIN_REM
    return [
        {
            "word": word,
            "count": count,
            "size_rem": round(WORD_CLOUD_MIN_REM + (count / top_count) * spread, 3),
            "color": WORD_CLOUD_PALETTE[idx % len(WORD_CLOUD_PALETTE)],
        }
        for idx, (word, count) in enumerate(ranked)
    ]


# ==================== Timeline ====================


def filtered_timeline(entries: Iterable[Entry], filters: Optional[FilterState] = None) -> List[Entry]:
    """Newest first, gated by every active filter."""
    ordered = sorted(entries, key=lambda e: e.timestamp, reverse=True)
    if not filters:
        return ordered
    return [e for e in ordered if filters.matches(e)]


def recent_moods(entries: Sequence[Entry], limit: int = 5) -> List[str]:
    """Moods of the last ``limit`` entries in storage order."""
    if limit <= 0:
        return []
    return [e.mood for e in list(entries)[-limit:]]
