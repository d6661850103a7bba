from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from moodmemories import create_app
from moodmemories.domains.journal.schemas import Entry
from moodmemories.domains.journal.state import get_state
from moodmemories.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app():
    """Per-test app backed by its own in-memory SQLite database."""
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.remove()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def state(app):
    return get_state()


def ts(year: int, month: int, day: int, hour: int = 9, minute: int = 0) -> int:
    """Epoch milliseconds for a local wall-clock time."""
    return int(datetime(year, month, day, hour, minute).timestamp() * 1000)


@pytest.fixture()
def make_entry():
    def _make(mood: str, text: str = "A quiet day", when: int | None = None) -> Entry:
        return Entry(mood=mood, text=text, timestamp=when if when is not None else ts(2025, 3, 5))

    return _make


def gemini_response(text: str | None = "Generated text", status: int = 200) -> MagicMock:
    """Build a fake requests.Response for the generateContent endpoint."""
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        import requests

        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    else:
        resp.raise_for_status.return_value = None
    if text is None:
        resp.json.return_value = {"candidates": []}
    else:
        resp.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return resp
