from typing import Any, Optional

from scanverdict.schemas.scan import Verdict
from scanverdict.schemas.vt import VTVerdict
from scanverdict.services.normalization.aliases import VT_PAYLOAD_ALIASES, first_present
from scanverdict.services.risk_scoring.risk_utils import (
    coerce_number,
    confidence_from_score,
)


def extract_vt_payload(category: Any) -> Optional[dict[str, Any]]:
    """
    Find the VirusTotal sub-object a category carries, whatever it is called.
    """
    if not isinstance(category, dict):
        return None
    for alias in VT_PAYLOAD_ALIASES:
        payload = first_present(category, (alias,))
        if isinstance(payload, dict):
            return payload
    return None


def parse_vt_result(vt_data: Any) -> VTVerdict:
    """
    Defensive parse of a VirusTotal-style verdict.
    Anything that isn't an object gives the all-default verdict.
    """
    safe = vt_data if isinstance(vt_data, dict) else {}

    verdict = safe.get("verdict")
    risk_score = coerce_number(safe.get("risk_score"))
    confidence = safe.get("confidence")
    detections = safe.get("detections")

    return VTVerdict(
        verdict=verdict if isinstance(verdict, str) else Verdict.UNKNOWN.value,
        risk_score=risk_score,
        confidence=(
            confidence
            if isinstance(confidence, str)
            else confidence_from_score(risk_score)
        ),
        malicious_count=coerce_number(safe.get("malicious_count")),
        total_engines=coerce_number(safe.get("total_engines")),
        detections=detections if isinstance(detections, list) else [],
        count=1,
    )


def is_malicious(vt_data: Any) -> bool:
    """Quick check: VT flags the URL, or at least one engine detected it."""
    if not isinstance(vt_data, dict):
        return False
    return (
        vt_data.get("verdict") == Verdict.MALICIOUS.value
        or coerce_number(vt_data.get("malicious_count")) > 0
    )
