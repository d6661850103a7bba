"""Journal JSON API: entries, moods, filters and derived views."""

from __future__ import annotations

from datetime import date

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from moodmemories.domains.journal.mappers import map_entry, map_mood
from moodmemories.domains.journal.schemas import (
    CalendarParams,
    DateFilterToggle,
    EntryCreate,
    MoodCreate,
    MoodFilterToggle,
    SuggestMoodRequest,
)
from moodmemories.domains.journal.services import assistant_service, views
from moodmemories.domains.journal.services.export_service import EXPORT_FILENAME, export_entries
from moodmemories.domains.journal.services.suggestion_service import suggest_mood
from moodmemories.domains.journal.state import JournalState, get_state
from moodmemories.extensions import limiter

journal_api_bp = Blueprint("journal_api", __name__)


def _assistant_limit() -> str:
    return current_app.config.get("ASSISTANT_RATE_LIMIT", "30/minute")


def _timeline_payload(state: JournalState) -> dict:
    items = views.filtered_timeline(state.entries.entries, state.filters)
    return {
        "items": [map_entry(e, state.moods.get(e.mood)) for e in items],
        "total": len(items),
        "filters": state.filters.to_dict(),
    }


def _chart_payload(state: JournalState) -> list:
    return views.chart_view(state.entries.entries, state.moods.moods, state.filters)


def _calendar_payload(state: JournalState, year: int, month: int) -> dict:
    return views.calendar_month(
        state.entries.entries,
        state.moods.moods,
        year,
        month,
        state.filters,
        state.summaries.snapshot(),
    )


# ==================== Entries ====================


@journal_api_bp.get("/entries")
def list_entries():
    return jsonify({"ok": True, **_timeline_payload(get_state())})


@journal_api_bp.post("/entries")
def create_entry():
    payload = request.get_json(silent=True) or {}
    try:
        data = EntryCreate.model_validate(payload)
    except ValidationError:
        data = EntryCreate()
    state = get_state()
    entry = state.record_entry(data.mood, data.text)
    if entry is None:
        # Blank submissions are discarded without an error.
        return jsonify({"ok": True, "entry": None})
    return jsonify({"ok": True, "entry": map_entry(entry, state.moods.get(entry.mood))}), 201


@journal_api_bp.delete("/entries/<int:timestamp>")
def delete_entry(timestamp: int):
    if not get_state().delete_entry(timestamp):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})


@journal_api_bp.get("/export")
def export_journal():
    try:
        body = export_entries(get_state().entries.entries)
    except ValueError:
        return jsonify({"ok": False, "error": "no_entries"}), 404
    return Response(
        body,
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


# ==================== Moods ====================


@journal_api_bp.get("/moods")
def list_moods():
    return jsonify({"ok": True, "moods": [map_mood(m) for m in get_state().moods.moods]})


@journal_api_bp.post("/moods")
def add_mood():
    payload = request.get_json(silent=True) or {}
    try:
        data = MoodCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors()}), 400
    state = get_state()
    with state.lock:
        try:
            mood = state.moods.add(data.name, data.color)
        except ValueError:
            return jsonify({"ok": False, "error": "validation_error"}), 400
        state.moods.save()
    return jsonify({"ok": True, "mood": map_mood(mood)}), 201


@journal_api_bp.delete("/moods/<path:name>")
def delete_mood(name: str):
    state = get_state()
    if state.moods.is_built_in(name):
        return jsonify({"ok": False, "error": "built_in_mood"}), 400
    with state.lock:
        if not state.moods.remove(name):
            return jsonify({"ok": False, "error": "not_found"}), 404
        state.moods.save()
    return jsonify({"ok": True})


@journal_api_bp.post("/suggest-mood")
def suggest():
    payload = request.get_json(silent=True) or {}
    try:
        data = SuggestMoodRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors()}), 400
    return jsonify({"ok": True, "mood": suggest_mood(data.text)})


# ==================== Chart & filters ====================


@journal_api_bp.get("/chart")
def chart():
    return jsonify({"ok": True, "bars": _chart_payload(get_state())})


@journal_api_bp.get("/filters")
def get_filters():
    return jsonify({"ok": True, "filters": get_state().filters.to_dict()})


@journal_api_bp.post("/filters/mood")
def toggle_mood_filter():
    """Chart bar click: select a mood, or clear it when clicked again."""
    payload = request.get_json(silent=True) or {}
    try:
        data = MoodFilterToggle.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors()}), 400
    state = get_state()
    with state.lock:
        state.filters.toggle_mood(data.mood)
    return jsonify({"ok": True, "bars": _chart_payload(state), **_timeline_payload(state)})


@journal_api_bp.post("/filters/date")
def toggle_date_filter():
    """Calendar cell click: select a day, or clear it when clicked again."""
    payload = request.get_json(silent=True) or {}
    try:
        data = DateFilterToggle.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors()}), 400
    state = get_state()
    with state.lock:
        state.filters.toggle_day(data.day)
    return jsonify({"ok": True, "bars": _chart_payload(state), **_timeline_payload(state)})


# ==================== Calendar ====================


@journal_api_bp.get("/calendar")
def calendar_view():
    try:
        params = CalendarParams.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors()}), 400
    state = get_state()
    year = params.year or state.cursor.year
    month = params.month or state.cursor.month
    return jsonify({"ok": True, "calendar": _calendar_payload(state, year, month)})


@journal_api_bp.post("/calendar/prev")
def calendar_prev():
    state = get_state()
    with state.lock:
        year, month = state.cursor.shift(-1)
    return jsonify({"ok": True, "calendar": _calendar_payload(state, year, month)})


@journal_api_bp.post("/calendar/next")
def calendar_next():
    state = get_state()
    with state.lock:
        year, month = state.cursor.shift(1)
    return jsonify({"ok": True, "calendar": _calendar_payload(state, year, month)})


@journal_api_bp.get("/calendar/<day>/summary")
@limiter.limit(_assistant_limit)
def calendar_summary(day: str):
    try:
        parsed = date.fromisoformat(day)
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    state = get_state()
    summary = assistant_service.mixture_summary(parsed, state.entries.entries, state.summaries)
    return jsonify({"ok": True, "date": parsed.isoformat(), "summary": summary})


# ==================== Words ====================


@journal_api_bp.get("/trending")
def trending_words():
    return jsonify({"ok": True, "words": views.trending(get_state().entries.entries)})


@journal_api_bp.get("/word-cloud")
def word_cloud():
    return jsonify({"ok": True, "words": views.word_cloud(get_state().entries.entries)})
