"""Cleanup of raw LLM responses and personal-data detection."""

from __future__ import annotations

import re

FENCE = "```"

EMAIL_PATTERN = re.compile(r"[\w._%+-]+@[\w.-]+\.[A-Za-z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\d[\d\s().-]{7,}")
URL_PATTERN = re.compile(r"https?://|www\.")


def extract_json_text(text: str | None) -> str:
    """Strip code fences and leading prose from an LLM response.

    Returns the text starting at the first '{' or '[' with all fence
    markers removed. Never raises; the result may still be invalid JSON.
    """
    if not text or not text.strip():
        return ""

    cleaned = text.strip()
    if cleaned.startswith(FENCE):
        cleaned = cleaned.strip("`")
        # Drop the language tag line ("json") or the empty rest of a bare fence line
        first_line, sep, rest = cleaned.partition("\n")
        if sep and not first_line.strip().startswith(("{", "[")):
            cleaned = rest
        cleaned = cleaned.strip()

    start = cleaned.find("{")
    alt = cleaned.find("[")
    if start < 0 or (0 <= alt < start):
        start = alt
    if start > 0:
        cleaned = cleaned[start:].strip()

    return cleaned.replace(FENCE, "").strip()


def contains_personal_data(text: str | None) -> bool:
    """True if text contains an email address, phone-like number or URL."""
    if not text or not text.strip():
        return False
    return bool(
        EMAIL_PATTERN.search(text)
        or PHONE_PATTERN.search(text)
        or URL_PATTERN.search(text)
    )
