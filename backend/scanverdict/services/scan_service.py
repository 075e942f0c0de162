# backend/scanverdict/services/scan_service.py
import logging
from typing import Any, List, Optional

from scanverdict.core.errors import InvalidScanURLError
from scanverdict.schemas.scan import ScanResponse
from scanverdict.services.history.history_store_service import (
    HistoryStoreService,
    history_store_service,
)
from scanverdict.services.normalization.scan_normalizer import normalize_scan_response
from scanverdict.services.risk_scoring.verdict_engine import decide_verdict
from scanverdict.services.scan_client import fetch_scan
from scanverdict.services.url_utils import ensure_protocol, is_valid_url

logger = logging.getLogger(__name__)


def analyze_payload(raw: Any) -> List[dict]:
    """
    Normalize an upstream payload and decide verdicts. No I/O.
    """
    return decide_verdict(normalize_scan_response(raw))


async def scan_url(
    url: str,
    history: Optional[HistoryStoreService] = None,
) -> ScanResponse:
    """
    Full scan flow used by the /scan route:
      - add a protocol if missing and validate
      - call the scan aggregator
      - normalize + decide verdicts
      - record the scan in history
    """
    history = history or history_store_service

    normalized_url = ensure_protocol(url)
    if not is_valid_url(normalized_url):
        raise InvalidScanURLError(url)

    raw = await fetch_scan(normalized_url)
    categories = analyze_payload(raw)

    if not categories:
        logger.info("Scan of %s produced no recognisable categories", normalized_url)
    else:
        logger.info(
            "Scan of %s: %s",
            normalized_url,
            ", ".join(str(c.get("verdict")) for c in categories),
        )

    history.add_to_history(normalized_url, categories)

    return ScanResponse(url=normalized_url, categories=categories)
