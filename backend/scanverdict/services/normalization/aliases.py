"""
Alias tables for upstream field names.

Every provider behind the scan aggregator names things its own way, so each
canonical field maps to an ordered list of known keys. Resolution is
first-present-wins. New provider shapes are handled by extending a table.

Aliases are dotted paths; numeric segments index into lists
("favicons.0.url").
"""
from typing import Any, Iterable, Optional


# --------------------------------------------------------------------
# Scan result media (favicon / screenshot)
# --------------------------------------------------------------------

FAVICON_URL_ALIASES = (
    "favicon_url",
    "favicon",
    "faviconUrl",
    "favicon_image_url",
    "favicons.0.url",
)

FAVICON_BASE64_ALIASES = (
    "favicon_base64",
    "faviconBase64",
    "favicon_data",
    "faviconData",
)

SCREENSHOT_URL_ALIASES = (
    "screenshot_url",
    "screenshotUrl",
    "screenshot.image_url",
)

SCREENSHOT_BASE64_ALIASES = (
    "screenshot_base64",
    "screenshotBase64",
    "screenshot.screenshot_base64",
)


# --------------------------------------------------------------------
# WHOIS
# --------------------------------------------------------------------

WHOIS_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "domain_name": ("domain_name", "domain", "domainName"),
    "registrar": ("registrar", "sponsoring_registrar"),
    "org": ("org", "organization", "registrant_organization", "registrant_org"),
    "country": ("country", "registrant_country"),
    "state": ("state", "registrant_state"),
    "city": ("city", "registrant_city"),
    "creation_date": ("creation_date", "created", "creationDate", "created_date"),
    "updated_date": ("updated_date", "updated", "updatedDate", "last_updated"),
    "expiration_date": (
        "expiration_date",
        "expires",
        "expirationDate",
        "expiry_date",
    ),
    "name_servers": ("name_servers", "nameServers", "nserver"),
    "status": ("status", "domain_status", "domainStatus"),
    "registrant_name": ("registrant_name", "registrant"),
    "registrant_email": ("registrant_email", "email"),
    "dnssec": ("dnssec",),
}

# Fields that make a WHOIS blob worth showing at all
WHOIS_GATE_FIELDS = (
    "domain_name",
    "registrar",
    "org",
    "country",
    "creation_date",
    "expiration_date",
    "name_servers",
)


# --------------------------------------------------------------------
# VirusTotal sub-object on a category
# --------------------------------------------------------------------

VT_PAYLOAD_ALIASES = (
    "vt",
    "virustotal",
    "vt_data",
    "raw_vt",
    "virus_total",
    "vtResult",
    "vtData",
)


# --------------------------------------------------------------------
# Resolution
# --------------------------------------------------------------------


def is_present(value: Any) -> bool:
    """None, empty strings and empty collections count as missing."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
        return False
    return True


def get_path(obj: Any, path: str) -> Any:
    current = obj
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, (list, tuple)) and part.isdigit():
            idx = int(part)
            current = current[idx] if idx < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def first_present(obj: Any, aliases: Iterable[str]) -> Optional[Any]:
    if not isinstance(obj, dict):
        return None
    for alias in aliases:
        value = get_path(obj, alias)
        if is_present(value):
            return value
    return None


def first_present_string(obj: Any, aliases: Iterable[str]) -> Optional[str]:
    """Like first_present, but aliases holding non-string values are skipped."""
    if not isinstance(obj, dict):
        return None
    for alias in aliases:
        value = get_path(obj, alias)
        if isinstance(value, str) and value:
            return value
    return None
