import math
from typing import Any, Union

from scanverdict.schemas.scan import Verdict

Number = Union[int, float]

# Severity order; only used to escalate, never to downgrade.
VERDICT_RANK = {
    Verdict.CLEAN.value: 1,
    Verdict.SUSPICIOUS.value: 2,
    Verdict.MALICIOUS.value: 3,
}


def confidence_from_score(score: Number) -> str:
    if score > 70:
        return "High"
    if score > 30:
        return "Medium"
    return "Low"


def verdict_rank(verdict: Any) -> int:
    if not isinstance(verdict, str):
        return 0
    return VERDICT_RANK.get(verdict, 0)


def coerce_number(value: Any, default: Number = 0) -> Number:
    """
    Lenient numeric parse for upstream fields ("12", 12.0, True, None...).
    Anything not finite falls back to default. Integral values come back as int.
    """
    if isinstance(value, bool):
        return int(value)
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    if not isinstance(value, (str, int, float)):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(score: Number) -> Number:
    return max(0, min(100, score))
