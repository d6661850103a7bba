"""Settings JSON API: theme, color theme and API key."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import BaseModel, Field, ValidationError

from moodmemories.core.preferences import services as preference_service
from moodmemories.core.text_service import clear_api_key, store_api_key

settings_api_bp = Blueprint("settings_api", __name__)


class ColorThemeUpdate(BaseModel):
    color_theme: str


class ApiKeyUpdate(BaseModel):
    api_key: str = Field(min_length=1)


@settings_api_bp.get("")
def get_settings():
    return jsonify({"ok": True, "preferences": preference_service.get_preferences()})


@settings_api_bp.post("/theme/toggle")
def toggle_theme():
    return jsonify({"ok": True, "theme": preference_service.toggle_theme()})


@settings_api_bp.put("/color-theme")
def update_color_theme():
    payload = request.get_json(silent=True) or {}
    try:
        data = ColorThemeUpdate.model_validate(payload)
        color_theme = preference_service.set_color_theme(data.color_theme)
    except (ValidationError, ValueError):
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "color_theme": color_theme})


@settings_api_bp.put("/api-key")
def update_api_key():
    payload = request.get_json(silent=True) or {}
    try:
        data = ApiKeyUpdate.model_validate(payload)
        store_api_key(data.api_key)
    except (ValidationError, ValueError):
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "has_api_key": True})


@settings_api_bp.delete("/api-key")
def delete_api_key():
    clear_api_key()
    return jsonify({"ok": True, "has_api_key": preference_service.get_preferences()["has_api_key"]})
