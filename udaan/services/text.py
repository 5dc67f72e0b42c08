"""Sanitizing of free-text profile fields (interests, skills, mindset)."""
import re

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_SURROUNDING_QUOTES = re.compile(r"^\s*[\"'`]+|[\"'`]+\s*$")


def clean_text(raw) -> str:
    """
    Strip control characters and one run of surrounding quotes, then trim.

    Never raises: None and unconvertible values become "".
    """
    if raw is None:
        return ""
    try:
        text = raw if isinstance(raw, str) else str(raw)
    except Exception:
        return ""
    text = _CONTROL_CHARS.sub("", text)
    text = _SURROUNDING_QUOTES.sub("", text)
    return text.strip()
