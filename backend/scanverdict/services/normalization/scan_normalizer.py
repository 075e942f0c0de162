import logging
from typing import Any, List

from scanverdict.schemas.scan import Verdict
from scanverdict.services.normalization.result_normalizer import normalize_result

logger = logging.getLogger(__name__)


CATEGORY_MARKERS = ("verdict", "risk_score", "results")
SCAN_RESULT_MARKERS = ("input_url", "domain", "ip")


# --------------------------------------------------------------------
# Helper functions
# --------------------------------------------------------------------


def _normalize_results(results: Any) -> Any:
    if isinstance(results, list):
        return [normalize_result(r) for r in results]
    return results


def _normalize_category(category: dict[str, Any]) -> dict[str, Any]:
    detections = category.get("detections")
    return {
        **category,
        "detections": detections if isinstance(detections, list) else [],
        "results": _normalize_results(category.get("results")),
    }


def _normalize_categories(items: list) -> List[dict[str, Any]]:
    out: List[dict[str, Any]] = []
    for item in items:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object category entry: %r", item)
            continue
        out.append(_normalize_category(item))
    return out


def _synthetic_category(
    raw: dict[str, Any], results: list, count: Any, fields: dict[str, Any]
) -> dict[str, Any]:
    detections = fields.get("detections")
    return {
        "verdict": fields.get("verdict") or Verdict.UNKNOWN.value,
        "risk_score": fields.get("risk_score") or 0,
        "confidence": fields.get("confidence") or "N/A",
        "malicious_count": fields.get("malicious_count") or 0,
        "total_engines": fields.get("total_engines") or 0,
        "detections": detections if isinstance(detections, list) else [],
        "results": results,
        "count": count,
        # keep the whole payload for specialised handlers downstream
        "_raw": raw,
    }


def _has_any(raw: dict[str, Any], keys: tuple) -> bool:
    return any(raw.get(k) is not None for k in keys)


def _results_are_categories(results: Any) -> bool:
    return (
        isinstance(results, list)
        and len(results) > 0
        and isinstance(results[0], dict)
        and bool(results[0].get("verdict"))
    )


# --------------------------------------------------------------------
# Main API
# --------------------------------------------------------------------


def normalize_scan_response(raw: Any) -> List[dict[str, Any]]:
    """
    Classify an upstream payload into a list of category dicts.

    Shapes, first match wins:
      1. a list of categories
      2. {"categories": [...]}
      3. {"results": [...]} where results[0] has a verdict (results are categories)
      4. a single category ({verdict / risk_score / results})
      5. a single scan result ({input_url / domain / ip})
    Anything else yields [].
    """
    if isinstance(raw, list):
        logger.debug("Scan payload shape: category list")
        return _normalize_categories(raw)

    if not isinstance(raw, dict):
        return []

    if isinstance(raw.get("categories"), list):
        logger.debug("Scan payload shape: categories field")
        return _normalize_categories(raw["categories"])

    if _results_are_categories(raw.get("results")):
        logger.debug("Scan payload shape: results are categories")
        return _normalize_categories(raw["results"])

    if _has_any(raw, CATEGORY_MARKERS):
        logger.debug("Scan payload shape: single category")
        if isinstance(raw.get("results"), list):
            source = raw["results"]
        elif isinstance(raw.get("items"), list):
            source = raw["items"]
        else:
            source = None
        results = _normalize_results(source) if source is not None else []
        count = raw.get("count") or (len(source) if source is not None else 1)
        return [_synthetic_category(raw, results, count, fields=raw)]

    if _has_any(raw, SCAN_RESULT_MARKERS):
        logger.debug("Scan payload shape: single scan result")
        return [_synthetic_category(raw, [normalize_result(raw)], 1, fields={})]

    logger.warning("Unrecognised scan payload shape (keys: %s)", sorted(raw.keys()))
    return []
