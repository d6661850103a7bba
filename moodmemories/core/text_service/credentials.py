"""API key resolution for the generative text service."""

from __future__ import annotations

import logging
from typing import Optional

from flask import current_app

from moodmemories.core.storage import API_KEY_SLOT, delete_slot, read_slot, write_slot
from moodmemories.core.text_service.client import GenerativeTextClient

logger = logging.getLogger(__name__)


def resolve_api_key() -> Optional[str]:
    """
    Return a usable key or None.

    Priority: configured ``GEMINI_API_KEY``, then the locally stored key.
    """
    configured = (current_app.config.get("GEMINI_API_KEY") or "").strip()
    if configured:
        return configured
    saved = (read_slot(API_KEY_SLOT) or "").strip()
    return saved or None


def store_api_key(api_key: str) -> str:
    key = (api_key or "").strip()
    if not key:
        raise ValueError("validation_error")
    write_slot(API_KEY_SLOT, key)
    logger.info("Stored generative text API key")
    return key


def clear_api_key() -> bool:
    """Forget the locally stored key. A configured key is unaffected."""
    return delete_slot(API_KEY_SLOT)


def get_text_client() -> Optional[GenerativeTextClient]:
    api_key = resolve_api_key()
    if not api_key:
        return None
    return GenerativeTextClient.from_config(api_key)
