from typing import Any, Optional
from urllib.parse import urlparse

MAX_TEXT_LENGTH = 10000


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_text(value: Any) -> Optional[str]:
    """Return the client-side error code for `value`, or None when it is acceptable."""
    text = normalize_text(value)
    if not text:
        return "empty_text"
    if len(text) > MAX_TEXT_LENGTH:
        return "text_too_long"
    return None


def is_valid_url(value: str) -> bool:
    v = value.strip()
    try:
        parsed = urlparse(v)
        return bool(parsed.scheme and parsed.netloc)
    except Exception:
        return False
