"""Mood registry tests: seeding, load hygiene, upsert and built-in protection."""

from __future__ import annotations

import json

import pytest

pytestmark = pytest.mark.integration

from moodmemories.core.storage import MOODS_SLOT, read_slot, write_slot
from moodmemories.domains.journal.schemas import CUSTOM_MOOD_ICON
from moodmemories.domains.journal.services.mood_registry import (
    BUILT_IN_MOOD_NAMES,
    MoodRegistry,
)


def _save_raw(records):
    write_slot(MOODS_SLOT, json.dumps(records))


def test_first_load_seeds_built_ins(app):
    registry = MoodRegistry().load()
    assert registry.names() == ["Happy", "Sad", "Angry", "Excited", "Calm"]
    assert registry.get("Happy").color == "#6c63ff"
    assert registry.get("Calm").icon == "fa-spa"


def test_saved_registry_missing_built_in_is_not_reseeded(app):
    _save_raw([{"name": "Happy", "icon": "fa-smile-beam", "color": "#6c63ff"}])
    registry = MoodRegistry().load()
    assert registry.names() == ["Happy"]


def test_load_dedupes_keeping_first_occurrence(app):
    _save_raw(
        [
            {"name": "Joy", "icon": "fa-heart", "color": "#111111"},
            {"name": "Happy", "icon": "fa-smile-beam", "color": "#6c63ff"},
            {"name": "joy", "icon": "fa-heart", "color": "#222222"},
            {"name": "Joy", "icon": "fa-heart", "color": "#333333"},
        ]
    )
    registry = MoodRegistry().load()
    joys = [m for m in registry.moods if m.name.lower() == "joy"]
    assert len(joys) == 1
    assert joys[0].color == "#111111"
    assert registry.names() == ["Joy", "Happy"]


def test_load_strips_empty_and_reserved_names(app):
    _save_raw(
        [
            {"name": "", "color": "#111111"},
            {"name": "   ", "color": "#111111"},
            {"name": "gg", "color": "#111111"},
            {"name": "GG GG", "color": "#111111"},
            {"name": "Focused", "color": "#123abc"},
        ]
    )
    assert MoodRegistry().load().names() == ["Focused"]


def test_load_defaults_missing_icon_and_drops_bad_color(app):
    _save_raw([{"name": "Tired", "color": "#abcdef"}, {"name": "Weird", "color": "blue"}])
    registry = MoodRegistry().load()
    assert registry.names() == ["Tired"]
    assert registry.get("Tired").icon == CUSTOM_MOOD_ICON


def test_load_corrupt_snapshot_gives_empty_registry(app, caplog):
    write_slot(MOODS_SLOT, "[[[")
    registry = MoodRegistry().load()
    assert len(registry) == 0
    assert "Could not load mood list" in caplog.text


def test_add_appends_custom_mood(app):
    registry = MoodRegistry().load()
    mood = registry.add("Joy", "#ffb74d")
    assert mood.icon == CUSTOM_MOOD_ICON
    assert registry.names()[-1] == "Joy"
    assert len(registry) == 6


def test_add_upserts_case_insensitively(app):
    registry = MoodRegistry().load()
    registry.add("Joy", "#ffb74d")
    updated = registry.add("JOY", "#000000")
    assert len(registry) == 6
    assert updated.name == "Joy"
    assert registry.get("Joy").color == "#000000"


def test_add_upsert_on_built_in_updates_color_and_icon(app):
    registry = MoodRegistry().load()
    registry.add("happy", "#010203")
    happy = registry.get("Happy")
    assert happy.color == "#010203"
    assert happy.icon == CUSTOM_MOOD_ICON
    assert len(registry) == 5


@pytest.mark.parametrize("name,color", [("", "#ffffff"), ("   ", "#ffffff"), ("Joy", "red"), ("Joy", "#fff")])
def test_add_rejects_invalid_input(app, name, color):
    registry = MoodRegistry().load()
    with pytest.raises(ValueError, match="validation_error"):
        registry.add(name, color)


@pytest.mark.parametrize("name", sorted(BUILT_IN_MOOD_NAMES))
def test_remove_built_in_is_noop(app, name):
    registry = MoodRegistry().load()
    assert registry.remove(name) is False
    assert len(registry) == 5


def test_remove_custom_mood(app):
    registry = MoodRegistry().load()
    registry.add("Joy", "#ffb74d")
    assert registry.remove("Joy") is True
    assert len(registry) == 5
    assert registry.remove("Joy") is False
    assert len(registry) == 5


def test_save_persists_registry(app):
    registry = MoodRegistry().load()
    registry.add("Joy", "#ffb74d")
    registry.save()
    saved = json.loads(read_slot(MOODS_SLOT))
    assert saved[-1] == {"name": "Joy", "color": "#ffb74d", "icon": CUSTOM_MOOD_ICON}
    assert MoodRegistry().load().names() == registry.names()
