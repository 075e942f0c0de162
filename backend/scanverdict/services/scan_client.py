import logging
from typing import Any, Optional

import httpx

from scanverdict.core.config import settings
from scanverdict.core.errors import ScanConfigurationError, ScanRequestError

logger = logging.getLogger(__name__)


async def fetch_scan(
    url: str,
    webhook_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Any]:
    """
    POST {"url": url} to the scan aggregator webhook.
    Returns decoded JSON, or None if the body isn't JSON.
    Raises ScanRequestError on non-2xx / network failure. No retries.
    """
    endpoint = webhook_url or settings.SCAN_WEBHOOK_URL
    if not endpoint:
        raise ScanConfigurationError("SCAN_WEBHOOK_URL is not defined")

    try:
        async with httpx.AsyncClient(
            timeout=settings.SCAN_TIMEOUT_SECONDS, transport=transport
        ) as client:
            resp = await client.post(
                endpoint,
                json={"url": url},
                headers={"Accept": "application/json"},
            )
    except httpx.HTTPError as e:
        logger.warning("Scan request to %s failed: %s", endpoint, e)
        raise ScanRequestError(None, str(e)) from e

    if resp.is_error:
        logger.warning("Scan request for %s returned HTTP %s", url, resp.status_code)
        raise ScanRequestError(resp.status_code, resp.text or "")

    try:
        return resp.json()
    except ValueError:
        logger.warning("Scan response for %s is not JSON; treating as empty", url)
        return None
