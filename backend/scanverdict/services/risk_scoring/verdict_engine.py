from typing import Any, List, Tuple

from scanverdict.schemas.scan import Verdict
from scanverdict.services.risk_scoring.risk_utils import (
    Number,
    clamp_score,
    coerce_number,
    confidence_from_score,
    round_half_up,
    verdict_rank,
)

# Assumed engine pool of an antivirus aggregator when only detections are sent
DEFAULT_ENGINE_POOL = 70

RESULT_MALICIOUS_THRESHOLD = 50

MALICIOUS_SCORE = 70
MALICIOUS_COUNT = 10
SUSPICIOUS_SCORE = 40
SUSPICIOUS_COUNT = 3


# --------------------------------------------------------------------
# Helper functions
# --------------------------------------------------------------------


def _count_risky_results(results: Any) -> int:
    if not isinstance(results, list):
        return 0
    return sum(
        1
        for r in results
        if isinstance(r, dict)
        and coerce_number(r.get("risk_score")) > RESULT_MALICIOUS_THRESHOLD
    )


def _engine_counts(category: dict[str, Any]) -> Tuple[Number, Number]:
    """
    (malicious_count, total_engines) for one category.
    Explicit upstream counts win over anything re-derived here.
    """
    malicious = _count_risky_results(category.get("results"))
    total: Number = 0

    detections = category.get("detections")
    if isinstance(detections, list) and detections:
        malicious += len(detections)
        total = max(total, DEFAULT_ENGINE_POOL)

    if category.get("malicious_count") is not None:
        malicious = coerce_number(category["malicious_count"])
    if category.get("total_engines") is not None:
        total = coerce_number(category["total_engines"])
    # a total forced to 1 on an earlier pass is not a real engine count
    if category.get("engines_reported") is False:
        total = 0

    return malicious, total


def compute_risk_score(
    malicious_count: Number, total_engines: Number, fallback: Any = None
) -> Number:
    if total_engines > 0:
        score: Number = round_half_up(malicious_count / total_engines * 100)
    else:
        score = coerce_number(fallback)
    return clamp_score(score)


def classify(risk_score: Number, malicious_count: Number) -> str:
    if risk_score >= MALICIOUS_SCORE or malicious_count >= MALICIOUS_COUNT:
        return Verdict.MALICIOUS.value
    if risk_score >= SUSPICIOUS_SCORE or malicious_count >= SUSPICIOUS_COUNT:
        return Verdict.SUSPICIOUS.value
    return Verdict.CLEAN.value


def escalate(explicit: Any, computed: str) -> str:
    """
    Merge an upstream verdict with the computed one: max by rank.
    A verdict can only move up in severity here.
    """
    if verdict_rank(explicit) > verdict_rank(computed):
        return explicit
    return computed


def _decide_category(category: dict[str, Any]) -> dict[str, Any]:
    malicious, total = _engine_counts(category)
    risk_score = compute_risk_score(malicious, total, category.get("risk_score"))
    verdict = escalate(category.get("verdict"), classify(risk_score, malicious))

    detections = category.get("detections")
    confidence = category.get("confidence")

    return {
        **category,
        "verdict": verdict,
        "risk_score": risk_score,
        "confidence": (
            confidence
            if isinstance(confidence, str)
            else confidence_from_score(risk_score)
        ),
        "malicious_count": malicious,
        # never 0: downstream divides by it
        "total_engines": total if total >= 1 else 1,
        "engines_reported": total >= 1,
        "detections": detections if isinstance(detections, list) else [],
    }


# --------------------------------------------------------------------
# Main API
# --------------------------------------------------------------------


def decide_verdict(categories: Any) -> Any:
    """
    Compute risk score and final verdict for every category.

    Per category:
    - count results with risk_score > 50 and add one per detection
      (detections imply a ~70 engine pool)
    - explicit malicious_count / total_engines override those counts
    - risk_score = malicious / total * 100 (or the existing score if no engines)
    - with no engines the output carries engines_reported=False, so deciding
      the same category again keeps the existing score
    - MALICIOUS at >=70 or >=10 hits, SUSPICIOUS at >=40 or >=3 hits, else CLEAN
    - an explicit upstream verdict is kept when it is more severe
    Returns new dicts; input is not modified. Non-list input comes back as is.
    """
    if not isinstance(categories, list):
        return categories

    decided: List[Any] = []
    for category in categories:
        if isinstance(category, dict):
            decided.append(_decide_category(category))
        else:
            decided.append(category)
    return decided
