"""Keyword-count mood suggestion."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

MOOD_KEYWORDS: Dict[str, List[str]] = {
    "Happy": ["happy", "joy", "smile", "glad", "content", "cheerful", "delighted", "bliss"],
    "Sad": ["sad", "down", "unhappy", "tearful", "sorrow", "depressed", "cry", "blue", "lonely"],
    "Angry": ["angry", "mad", "furious", "annoyed", "rage", "frustrated", "irritated", "upset"],
    "Excited": ["excited", "thrilled", "eager", "enthusiastic", "pumped", "elated"],
    "Calm": ["calm", "relaxed", "peaceful", "tranquil", "chill", "serene", "soothe"],
}


def suggest_mood(content: str) -> Optional[str]:
    """Return the mood whose keywords occur most often, or None."""
    words = re.findall(r"\b[a-z]+\b", (content or "").lower(), re.ASCII)
    counts = {mood: 0 for mood in MOOD_KEYWORDS}
    for word in words:
        for mood, keywords in MOOD_KEYWORDS.items():
            if word in keywords:
                counts[mood] += 1
    best, best_count = None, 0
    for mood, count in counts.items():
        if count > best_count:
            best, best_count = mood, count
    return best
