"""Assistant feature tests: fallbacks, mixture-summary caching and chat relay."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest
import requests

pytestmark = pytest.mark.integration

from conftest import gemini_response, ts
from moodmemories.domains.journal.schemas import Entry
from moodmemories.domains.journal.services import assistant_service
from moodmemories.domains.journal.services.assistant_service import (
    CHAT_EMPTY_REPLY,
    CHAT_FAILURE_REPLY,
    CHAT_NO_KEY_REPLY,
    FALLBACK_AFFIRMATIONS,
    FALLBACK_PROMPTS,
    ChatSession,
    MixtureSummaryCache,
)

POST = "moodmemories.core.text_service.client.requests.post"


def _day_entries(day: date, moods):
    base = ts(day.year, day.month, day.day, 8)
    return [Entry(mood=m, text=f"entry {i}", timestamp=base + i) for i, m in enumerate(moods)]


@pytest.fixture
def with_key(app):
    app.config["GEMINI_API_KEY"] = "test-key"
    return app


def test_affirmation_prompt_uses_unique_moods():
    prompt = assistant_service.affirmation_prompt(["Happy", "Sad", "Happy"])
    assert "Happy, Sad" in prompt
    assert "Happy, Sad, Happy" not in prompt
    assert assistant_service.affirmation_prompt([]).startswith("Provide a single positive affirmation")


def test_daily_affirmation_without_key_uses_fallback(app):
    with patch(POST) as mock_post:
        result = assistant_service.daily_affirmation([])
    mock_post.assert_not_called()
    assert result["generated"] is False
    assert result["text"] in FALLBACK_AFFIRMATIONS


def test_daily_affirmation_service_error_uses_fallback(with_key):
    with patch(POST, side_effect=requests.Timeout("slow")):
        result = assistant_service.daily_affirmation([])
    assert result["generated"] is False
    assert result["text"] in FALLBACK_AFFIRMATIONS


def test_daily_affirmation_uses_recent_moods(with_key):
    entries = [Entry(mood=m, text="x", timestamp=i + 1) for i, m in enumerate(["Angry", "Happy", "Calm"])]
    with patch(POST, return_value=gemini_response("You are doing well.")) as mock_post:
        result = assistant_service.daily_affirmation(entries)
    assert result == {"text": "You are doing well.", "generated": True}
    sent = mock_post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
    assert "Angry, Happy, Calm" in sent


def test_journaling_prompt_generated_and_fallback(app):
    assert assistant_service.journaling_prompt()["text"] in FALLBACK_PROMPTS
    app.config["GEMINI_API_KEY"] = "test-key"
    with patch(POST, return_value=gemini_response("What surprised you?")):
        assert assistant_service.journaling_prompt() == {"text": "What surprised you?", "generated": True}


# ==================== Mixture summaries ====================


def test_mixture_summary_below_threshold_is_none(with_key):
    day = date(2025, 3, 5)
    entries = _day_entries(day, ["Happy", "Sad", "Calm"])
    with patch(POST) as mock_post:
        assert assistant_service.mixture_summary(day, entries, MixtureSummaryCache()) is None
    mock_post.assert_not_called()


def test_mixture_summary_generates_and_caches(with_key):
    day = date(2025, 3, 5)
    entries = _day_entries(day, ["Happy", "Happy", "Sad", "Calm"])
    cache = MixtureSummaryCache()
    with patch(POST, return_value=gemini_response("A day of many colors.")) as mock_post:
        first = assistant_service.mixture_summary(day, entries, cache)
        second = assistant_service.mixture_summary(day, entries, cache)
    assert first == second == "A day of many colors."
    assert mock_post.call_count == 1
    assert cache.get("2025-03-05") == "A day of many colors."


def test_mixture_summary_cache_survives_entry_deletion(with_key):
    day = date(2025, 3, 5)
    entries = _day_entries(day, ["Happy", "Sad", "Calm", "Angry"])
    cache = MixtureSummaryCache()
    with patch(POST, return_value=gemini_response("Stormy then still.")):
        assistant_service.mixture_summary(day, entries, cache)
    assert assistant_service.mixture_summary(day, [], cache) == "Stormy then still."


def test_mixture_summary_fallback_is_not_cached(app):
    day = date(2025, 3, 5)
    entries = _day_entries(day, ["Happy", "Happy", "Sad", "Calm"])
    cache = MixtureSummaryCache()
    summary = assistant_service.mixture_summary(day, entries, cache)
    assert summary == "Mixed feelings: Happy, Sad, Calm"
    assert len(cache) == 0


def test_mixture_summary_ignores_other_days(with_key):
    day = date(2025, 3, 5)
    entries = _day_entries(day, ["Happy", "Sad"]) + _day_entries(date(2025, 3, 6), ["Calm", "Calm"])
    with patch(POST) as mock_post:
        assert assistant_service.mixture_summary(day, entries, MixtureSummaryCache()) is None
    mock_post.assert_not_called()


# ==================== Chat ====================


def test_chat_without_key_reports_error_and_sends_nothing(app):
    session = ChatSession()
    with patch(POST) as mock_post:
        result = session.send("Hello", [])
    mock_post.assert_not_called()
    assert result == {"ok": False, "reply": CHAT_NO_KEY_REPLY}
    assert session.transcript() == [{"role": "user", "content": "Hello"}]


def test_chat_sends_context_and_history(with_key):
    session = ChatSession()
    entries = [Entry(mood="Sad", text="rough", timestamp=1)]
    with patch(POST, side_effect=[gemini_response("I'm here."), gemini_response("Tell me more.")]) as mock_post:
        session.send("Hi", entries)
        result = session.send("Work was hard", entries)
    assert result == {"ok": True, "reply": "Tell me more."}
    contents = mock_post.call_args.kwargs["json"]["contents"]
    assert "Sad" in contents[0]["parts"][0]["text"]
    assert [c["role"] for c in contents] == ["user", "user", "model", "user"]
    assert contents[-1]["parts"][0]["text"] == "Work was hard"
    assert [m["role"] for m in session.transcript()] == ["user", "assistant", "user", "assistant"]


def test_chat_service_failure_reply(with_key):
    session = ChatSession()
    with patch(POST, return_value=gemini_response(status=503)):
        result = session.send("Hi", [])
    assert result == {"ok": False, "reply": CHAT_FAILURE_REPLY}
    assert session.transcript() == [{"role": "user", "content": "Hi"}]


def test_chat_empty_candidate_reply(with_key):
    session = ChatSession()
    with patch(POST, return_value=gemini_response(text=None)):
        result = session.send("Hi", [])
    assert result == {"ok": True, "reply": CHAT_EMPTY_REPLY}
