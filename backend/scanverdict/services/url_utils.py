import re
from typing import Any
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def ensure_protocol(value: Any) -> Any:
    """Add http:// when the user typed a bare host."""
    if not value or not isinstance(value, str):
        return value
    v = value.strip()
    if _SCHEME_RE.match(v):
        return v
    return f"http://{v}"


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)
