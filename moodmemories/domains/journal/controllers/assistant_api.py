"""Assistant JSON API: affirmations, journaling prompts and chat."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from moodmemories.domains.journal.schemas import ChatRequest
from moodmemories.domains.journal.services import assistant_service
from moodmemories.domains.journal.state import get_state
from moodmemories.extensions import limiter

assistant_api_bp = Blueprint("assistant_api", __name__)


def _assistant_limit() -> str:
    return current_app.config.get("ASSISTANT_RATE_LIMIT", "30/minute")


@assistant_api_bp.get("/affirmation")
@limiter.limit(_assistant_limit)
def affirmation():
    result = assistant_service.daily_affirmation(get_state().entries.entries)
    return jsonify({"ok": True, "affirmation": result["text"], "generated": result["generated"]})


@assistant_api_bp.get("/prompt")
@limiter.limit(_assistant_limit)
def journaling_prompt():
    result = assistant_service.journaling_prompt()
    return jsonify({"ok": True, "prompt": result["text"], "generated": result["generated"]})


@assistant_api_bp.post("/chat")
@limiter.limit(_assistant_limit)
def chat():
    payload = request.get_json(silent=True) or {}
    try:
        data = ChatRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors()}), 400
    message = data.message.strip()
    if not message:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    state = get_state()
    result = state.chat.send(message, state.entries.entries)
    # Service problems are reported as the bot's reply, not as an HTTP error.
    return jsonify({"ok": result["ok"], "reply": result["reply"]})


@assistant_api_bp.get("/chat")
def chat_history():
    return jsonify({"ok": True, "messages": get_state().chat.transcript()})
