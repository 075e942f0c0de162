"""
WHOIS normalisation and derived metrics.

Registries and WHOIS libraries disagree on field names and on whether a
date is a single value or a list of historical values. Everything here maps
those shapes onto one record and derives age / expiry figures from it.

Date metrics return None when a date can't be parsed (distinct from a real 0),
while display formatting falls back to the original string so the value is
still visible.
"""
import math
from datetime import date, datetime, timezone
from typing import Any, List, Optional

from dateutil.parser import ParserError, parse as parse_date

from scanverdict.schemas.whois import AgeRisk, Registrant, WhoisDates, WhoisRecord
from scanverdict.services.normalization.aliases import (
    WHOIS_FIELD_ALIASES,
    WHOIS_GATE_FIELDS,
    first_present,
)
from scanverdict.services.risk_scoring.risk_utils import round_half_up

# missing date parts (e.g. a bare year) resolve to Jan 1, never to today
PARTIAL_DATE_DEFAULT = datetime(2000, 1, 1)

SECONDS_PER_DAY = 60 * 60 * 24
DAYS_PER_YEAR = 365.25
EXPIRING_SOON_DAYS = 30

KNOWN_REGISTRARS = (
    "godaddy",
    "namecheap",
    "cloudflare",
    "google",
    "tucows",
    "enom",
    "network solutions",
    "register.com",
    "gandi",
    "hover",
    "name.com",
    "dynadot",
    "porkbun",
    "squarespace",
)


# --------------------------------------------------------------------
# Field normalisation
# --------------------------------------------------------------------


def has_whois_data(whois: Any) -> bool:
    """True if at least one meaningful field is set under any alias."""
    if not isinstance(whois, dict):
        return False
    return any(
        first_present(whois, WHOIS_FIELD_ALIASES[field]) is not None
        for field in WHOIS_GATE_FIELDS
    )


def normalize_whois_fields(whois: Any) -> dict[str, Any]:
    if not isinstance(whois, dict):
        return {}
    return {
        field: first_present(whois, aliases)
        for field, aliases in WHOIS_FIELD_ALIASES.items()
    }


def _as_text(value: Any) -> Optional[str]:
    # python-whois hands back lists for repeated fields
    if isinstance(value, (list, tuple)):
        value = next((v for v in value if v), None)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _string_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [v for v in value if v and isinstance(v, str)]
    if isinstance(value, str) and value:
        return [value]
    return []


def format_name_servers(name_servers: Any) -> List[str]:
    return _string_list(name_servers)


def get_domain_status(whois: dict[str, Any]) -> List[str]:
    if not whois:
        return []
    return _string_list(whois.get("status") or whois.get("domain_status"))


def get_registrant_info(whois: dict[str, Any]) -> Registrant:
    whois = whois or {}
    return Registrant(
        name=_as_text(whois.get("registrant_name") or whois.get("registrant")),
        organization=_as_text(
            whois.get("org") or whois.get("registrant_organization")
        ),
        email=_as_text(whois.get("registrant_email") or whois.get("email")),
        country=_as_text(whois.get("country") or whois.get("registrant_country")),
        state=_as_text(whois.get("state") or whois.get("registrant_state")),
        city=_as_text(whois.get("city") or whois.get("registrant_city")),
    )


# --------------------------------------------------------------------
# Dates
# --------------------------------------------------------------------


def first_date_value(value: Any) -> Any:
    """Registries often return a list of dates; the first one is authoritative."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_whois_date(value: Any) -> Optional[datetime]:
    value = first_date_value(value)

    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        # epoch seconds, or milliseconds for large values
        seconds = value / 1000 if abs(value) > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return _as_utc(parse_date(value.strip(), default=PARTIAL_DATE_DEFAULT))
        except (ParserError, ValueError, OverflowError):
            return None
    return None


def format_whois_date(value: Any) -> Optional[str]:
    """
    "Jan 1, 2024" style date. Unparseable values come back unchanged so
    they are still shown; absent values give None.
    """
    raw = first_date_value(value)
    if raw is None or raw == "":
        return None

    parsed = parse_whois_date(raw)
    if parsed is None:
        return raw if isinstance(raw, str) else str(raw)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def _now(now: Optional[datetime]) -> datetime:
    return _as_utc(now) if now is not None else datetime.now(timezone.utc)


def calculate_domain_age(
    creation_date: Any, now: Optional[datetime] = None
) -> Optional[float]:
    """Domain age in years, 1 decimal."""
    created = parse_whois_date(creation_date)
    if created is None:
        return None
    years = (_now(now) - created).total_seconds() / (SECONDS_PER_DAY * DAYS_PER_YEAR)
    return round_half_up(years * 10) / 10


def calculate_domain_age_in_days(
    creation_date: Any, now: Optional[datetime] = None
) -> Optional[int]:
    created = parse_whois_date(creation_date)
    if created is None:
        return None
    return math.floor((_now(now) - created).total_seconds() / SECONDS_PER_DAY)


def days_until_expiration(
    expiration_date: Any, now: Optional[datetime] = None
) -> Optional[int]:
    """Negative when the domain already expired."""
    expires = parse_whois_date(expiration_date)
    if expires is None:
        return None
    return math.floor((expires - _now(now)).total_seconds() / SECONDS_PER_DAY)


def is_domain_expired(expiration_date: Any, now: Optional[datetime] = None) -> bool:
    days = days_until_expiration(expiration_date, now)
    return days is not None and days < 0


def is_domain_expiring_soon(
    expiration_date: Any, now: Optional[datetime] = None
) -> bool:
    days = days_until_expiration(expiration_date, now)
    return days is not None and 0 <= days <= EXPIRING_SOON_DAYS


# --------------------------------------------------------------------
# Trust signals
# --------------------------------------------------------------------


def get_domain_age_risk(age_years: Optional[float]) -> AgeRisk:
    if age_years is None:
        return AgeRisk(level="unknown", color="#6b7280", label="Unknown")
    if age_years < 0.5:
        return AgeRisk(level="high", color="#ef4444", label="Very New (High Risk)")
    if age_years < 1:
        return AgeRisk(level="medium", color="#f59e0b", label="New (Medium Risk)")
    if age_years < 3:
        return AgeRisk(level="low", color="#10b981", label="Established")
    return AgeRisk(level="minimal", color="#059669", label="Well Established")


def is_known_registrar(registrar: Any) -> bool:
    """
    Auxiliary trust signal only; not used by verdict computation.
    """
    if not registrar or not isinstance(registrar, str):
        return False
    reg = registrar.lower()
    return any(known in reg for known in KNOWN_REGISTRARS)


# --------------------------------------------------------------------
# Main API
# --------------------------------------------------------------------


def parse_whois_data(
    whois: Any, now: Optional[datetime] = None
) -> Optional[WhoisRecord]:
    """
    Structured WHOIS record, or None when nothing meaningful is present.
    """
    if not has_whois_data(whois):
        return None

    normalized = normalize_whois_fields(whois)
    created = normalized["creation_date"]
    updated = normalized["updated_date"]
    expires = normalized["expiration_date"]

    age = calculate_domain_age(created, now)
    registrar = _as_text(normalized["registrar"])

    return WhoisRecord(
        domain=_as_text(normalized["domain_name"]),
        registrar=registrar,
        registrant=get_registrant_info(normalized),
        dates=WhoisDates(
            created=format_whois_date(created),
            updated=format_whois_date(updated),
            expires=format_whois_date(expires),
            created_raw=first_date_value(created),
            updated_raw=first_date_value(updated),
            expires_raw=first_date_value(expires),
            age=age,
            age_in_days=calculate_domain_age_in_days(created, now),
            days_to_expiry=days_until_expiration(expires, now),
        ),
        name_servers=format_name_servers(normalized["name_servers"]),
        status=get_domain_status(normalized),
        dnssec=normalized["dnssec"],
        is_expired=is_domain_expired(expires, now),
        is_expiring_soon=is_domain_expiring_soon(expires, now),
        age_risk=get_domain_age_risk(age),
        known_registrar=is_known_registrar(registrar),
        raw=whois,
    )
