"""External generative text service adapter."""

from moodmemories.core.text_service.client import (
    GenerativeTextClient,
    MissingCredentialError,
    TextServiceError,
    build_contents,
    extract_text,
)
from moodmemories.core.text_service.credentials import (
    clear_api_key,
    get_text_client,
    resolve_api_key,
    store_api_key,
)

__all__ = [
    "GenerativeTextClient",
    "TextServiceError",
    "MissingCredentialError",
    "build_contents",
    "extract_text",
    "get_text_client",
    "resolve_api_key",
    "store_api_key",
    "clear_api_key",
]
