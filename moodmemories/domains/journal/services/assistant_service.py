"""Generated text features: affirmations, day summaries, prompts and chat.

Every feature except chat falls back to local text when the generative
service is unavailable; chat reports the problem as its reply instead.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from moodmemories.core.text_service import TextServiceError, build_contents, get_text_client
from moodmemories.domains.journal.schemas import Entry
from moodmemories.domains.journal.services.filter_state import day_of
from moodmemories.domains.journal.services.views import (
    SUMMARY_THRESHOLD,
    recent_moods,
    unique_in_order,
)

logger = logging.getLogger(__name__)

RECENT_MOOD_LIMIT = 5

FALLBACK_AFFIRMATIONS = [
    "You are resilient and capable of handling whatever comes your way.",
    "Every day is a new opportunity to grow and learn.",
    "You have the strength to turn challenges into opportunities.",
    "Trust yourself; you are doing your best and it is enough.",
    "Focus on what you can control and let go of the rest.",
    "You are worthy of love and compassion, including your own.",
    "Celebrate your small victories and progress today.",
    "Take a deep breath; you deserve calm and clarity.",
]

FALLBACK_PROMPTS = [
    "What made you smile today?",
    "Describe a moment you felt proud of yourself.",
    "What are three things you're grateful for?",
    "Write about a challenge you overcame recently.",
    "Who is someone that inspired you today?",
    "What did you learn about yourself today?",
    "How would you describe your perfect day?",
    "What's a small step you can take to improve your wellbeing?",
    "Recall a happy memory from the past week.",
    "Write about a time you felt calm and at peace.",
]

PROMPT_REQUEST = "Please provide a unique, encouraging journaling prompt in one concise sentence."

CHAT_NO_KEY_REPLY = (
    "Error: No Gemini API key provided. Please add a valid key in settings to use the chatbot."
)
CHAT_FAILURE_REPLY = "Oops! Something went wrong while contacting the API."
CHAT_EMPTY_REPLY = "Sorry, I didn't catch that."


def affirmation_prompt(moods: Sequence[str]) -> str:
    unique = unique_in_order(moods)
    if not unique:
        return "Provide a single positive affirmation sentence to encourage reflection and positivity."
    return (
        f"Based on the moods {', '.join(unique)}, craft a single positive affirmation sentence "
        "that encourages the user and helps them reflect constructively. Do not list the moods "
        "explicitly; instead weave their essence into the affirmation."
    )


def chat_context_prompt(moods: Sequence[str]) -> str:
    unique = unique_in_order(moods)
    if not unique:
        return (
            "You are a friendly journaling assistant. The user seeks supportive, reflective guidance. "
            "Provide empathetic responses that encourage positive self-reflection, help them find "
            "meaning and purpose, and transform challenges into constructive actions."
        )
    return (
        "You are a friendly domain-specific journaling assistant. The user has recently logged the "
        f"moods: {', '.join(unique)}. Use these moods as cues to discuss their day, reflect "
        "positively on their emotions, and offer gentle suggestions for turning tough or overwhelmed "
        "feelings into meaningful actions. In your replies, help the user find more meaning and "
        "purpose in their life by encouraging self-discovery and intentional growth. Provide "
        "empathy, encouragement and constructive reflection without explicitly listing the moods."
    )


def generate_affirmation(moods: Sequence[str]) -> Optional[str]:
    """Ask the service for an affirmation; None when unavailable."""
    client = get_text_client()
    if client is None:
        return None
    return client.generate_text(affirmation_prompt(moods))


def daily_affirmation(entries: Sequence[Entry]) -> dict:
    generated = generate_affirmation(recent_moods(entries, RECENT_MOOD_LIMIT))
    if generated:
        return {"text": generated, "generated": True}
    return {"text": random.choice(FALLBACK_AFFIRMATIONS), "generated": False}


def journaling_prompt() -> dict:
    client = get_text_client()
    generated = client.generate_text(PROMPT_REQUEST) if client else None
    if generated:
        return {"text": generated, "generated": True}
    return {"text": random.choice(FALLBACK_PROMPTS), "generated": False}


# ==================== Mixture summaries ====================


class MixtureSummaryCache:
    """Generated day summaries keyed by ISO day string.

    Values are kept for the life of the process, even if that day's entries
    change afterwards.
    """

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get(self, day_key: str) -> Optional[str]:
        return self._items.get(day_key)

    def set(self, day_key: str, summary: str) -> None:
        self._items[day_key] = summary

    def snapshot(self) -> Dict[str, str]:
        return dict(self._items)

    def __contains__(self, day_key: str) -> bool:
        return day_key in self._items

    def __len__(self) -> int:
        return len(self._items)


def fallback_mixture_summary(day_moods: Sequence[str]) -> str:
    return f"Mixed feelings: {', '.join(unique_in_order(day_moods))}"


def mixture_summary(day: date, entries: Sequence[Entry], cache: MixtureSummaryCache) -> Optional[str]:
    """
    Summary caption for a day with enough entries.

    Returns the cached phrase when present. Otherwise, for days with at least
    SUMMARY_THRESHOLD entries, asks the service and caches a non-empty reply,
    falling back to an uncached local phrase. Returns None for quieter days.
    """
    key = day.isoformat()
    cached = cache.get(key)
    if cached:
        return cached
    day_moods = [e.mood for e in entries if day_of(e.timestamp) == day]
    if len(day_moods) < SUMMARY_THRESHOLD:
        return None
    generated = generate_affirmation(day_moods)
    if generated:
        cache.set(key, generated)
        return generated
    logger.info("Using local mixture summary for %s", key)
    return fallback_mixture_summary(day_moods)


# ==================== Chat ====================


@dataclass
class ChatSession:
    """Running conversation relayed to the text service."""

    history: List[tuple] = field(default_factory=list)

    def send(self, message: str, entries: Sequence[Entry]) -> dict:
        self.history.append(("user", message))
        client = get_text_client()
        if client is None:
            return {"ok": False, "reply": CHAT_NO_KEY_REPLY}
        context = chat_context_prompt(recent_moods(entries, RECENT_MOOD_LIMIT))
        try:
            reply = client.generate_content(build_contents(context, self.history))
        except TextServiceError as exc:
            logger.error(f"Chat request failed: {exc}")
            return {"ok": False, "reply": CHAT_FAILURE_REPLY}
        if reply is None:
            reply = CHAT_EMPTY_REPLY
        self.history.append(("assistant", reply))
        return {"ok": True, "reply": reply}

    def transcript(self) -> List[dict]:
        return [{"role": role, "content": text} for role, text in self.history]
