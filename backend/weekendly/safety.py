"""Input guardrails for user-defined activities."""

from __future__ import annotations

import re

import bleach


# No HTML is allowed in activity text
ALLOWED_TAGS: list[str] = []
ALLOWED_ATTRIBUTES: dict[str, list[str]] = {}

EVENT_HANDLER_PATTERN = re.compile(r'\s*on\w+\s*=\s*["\'][^"\']*["\']', re.IGNORECASE)
JS_URL_PATTERN = re.compile(r'javascript:', re.IGNORECASE)


def normalize_text(text: str) -> str:
    # Collapse whitespace
    return re.sub(r"\s+", " ", text or "").strip()


def sanitize_text_input(text: str, max_length: int = 1000) -> str:
    """
    Strip markup from user text and clamp its length.

    Args:
        text: Raw user input
        max_length: Maximum allowed length

    Returns:
        Plain text safe for storage and display
    """
    if not text:
        return ""

    text = bleach.clean(str(text), tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)
    text = EVENT_HANDLER_PATTERN.sub('', text)
    text = JS_URL_PATTERN.sub('', text)
    text = normalize_text(text)

    if len(text) > max_length:
        text = text[:max_length].rsplit(' ', 1)[0] + '...'

    return text


def sanitize_activity_name(name: str) -> str:
    return sanitize_text_input(name, max_length=120)


def sanitize_activity_description(description: str) -> str:
    return sanitize_text_input(description, max_length=1000)


def sanitize_vibe(vibe: str) -> str:
    """Vibes are histogram keys, so they are lower-cased as well."""
    return sanitize_text_input(vibe, max_length=40).lower()
