"""Gemini generateContent client with call-and-fallback semantics."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests
from flask import current_app

logger = logging.getLogger(__name__)

# A conversation turn is (role, text); role is "user" or "assistant".
Turn = Tuple[str, str]


class TextServiceError(Exception):
    """Base exception for generative text calls."""

    pass


class MissingCredentialError(TextServiceError):
    """Raised when no API key is available."""

    pass


def build_contents(prompt: Optional[str], conversation: Optional[Iterable[Turn]] = None) -> List[Dict[str, Any]]:
    """
    Build the Gemini ``contents`` array.

    The prompt (if any) goes first as a user turn, followed by prior turns.
    Assistant turns are sent with the ``model`` role.
    """
    contents: List[Dict[str, Any]] = []
    if prompt:
        contents.append({"role": "user", "parts": [{"text": prompt}]})
    for role, text in conversation or ():
        contents.append(
            {
                "role": "model" if role == "assistant" else "user",
                "parts": [{"text": text}],
            }
        )
    return contents


def extract_text(data: Any) -> Optional[str]:
    """Pull the first candidate's first text part out of a response payload."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


class GenerativeTextClient:
    """Thin wrapper around the Gemini REST endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: int = 30,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("No API key available")
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, api_key: str) -> "GenerativeTextClient":
        config = current_app.config
        return cls(
            api_key,
            model=config.get("GEMINI_MODEL", "gemini-2.5-flash"),
            api_base=config.get("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"),
            timeout=config.get("TEXT_SERVICE_TIMEOUT_SECONDS", 30),
        )

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def generate_content(self, contents: List[Dict[str, Any]]) -> Optional[str]:
        """
        Send a generateContent request.

        Returns:
            The first candidate text, or None when the payload carries none.

        Raises:
            TextServiceError: On network errors, non-2xx status, a body
                that is not JSON, or a payload that cannot be read.
        """
        try:
            resp = requests.post(
                self.url,
                json={"contents": contents},
                headers={"Content-Type": "application/json", "X-Goog-Api-Key": self.api_key},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise TextServiceError(f"Text service request failed: {e}") from e
        except ValueError as e:
            raise TextServiceError(f"Malformed text service response: {e}") from e
        try:
            return extract_text(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise TextServiceError(f"Unexpected text service payload: {e}") from e

    def generate_text(self, prompt: str, conversation: Optional[Iterable[Turn]] = None) -> Optional[str]:
        """Return stripped generated text, or None on any failure."""
        try:
            text = self.generate_content(build_contents(prompt, conversation))
        except TextServiceError as e:
            logger.warning(f"generate_text failed: {e}")
            return None
        if not text or not text.strip():
            return None
        return text.strip()
