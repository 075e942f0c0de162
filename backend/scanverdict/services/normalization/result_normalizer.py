from typing import Any, Optional

from scanverdict.services.normalization.aliases import (
    FAVICON_BASE64_ALIASES,
    FAVICON_URL_ALIASES,
    SCREENSHOT_BASE64_ALIASES,
    SCREENSHOT_URL_ALIASES,
    first_present_string,
)

DATA_URI_PREFIX = "data:image/png;base64,"


def _to_data_uri(payload: Any) -> Optional[str]:
    if not isinstance(payload, str):
        return None
    if payload.startswith("data:"):
        return payload
    return f"{DATA_URI_PREFIX}{payload}"


def _resolve_media_src(
    result: dict[str, Any], url_aliases: tuple, base64_aliases: tuple
) -> Optional[str]:
    """
    Remote URL wins; an embedded base64 payload is only used when no URL
    alias is set.
    """
    url = first_present_string(result, url_aliases)
    if url is not None:
        return url
    return _to_data_uri(first_present_string(result, base64_aliases))


def normalize_result(result: Any) -> Any:
    """
    Layer canonical favicon_src / screenshot_src on top of a shallow copy
    of one scan result. Original fields are left untouched.
    """
    if not isinstance(result, dict):
        return result

    return {
        **result,
        "favicon_src": _resolve_media_src(
            result, FAVICON_URL_ALIASES, FAVICON_BASE64_ALIASES
        ),
        "screenshot_src": _resolve_media_src(
            result, SCREENSHOT_URL_ALIASES, SCREENSHOT_BASE64_ALIASES
        ),
    }
