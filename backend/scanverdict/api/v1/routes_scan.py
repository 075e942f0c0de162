# backend/scanverdict/api/v1/routes_scan.py
from typing import Any, List

from fastapi import APIRouter, Body, HTTPException, status

from scanverdict.core.errors import (
    InvalidScanURLError,
    ScanConfigurationError,
    ScanRequestError,
)
from scanverdict.schemas.scan import Category, ScanRequest, ScanResponse
from scanverdict.services.scan_service import analyze_payload, scan_url

router = APIRouter(
    prefix="/scan",
    tags=["scan"],
)


@router.post("", response_model=ScanResponse, summary="Scan a URL")
async def scan(payload: ScanRequest) -> ScanResponse:
    """
    Send the URL to the scan aggregator, normalize whatever comes back,
    decide a verdict per category and record it in history.
    """
    try:
        return await scan_url(payload.url)
    except InvalidScanURLError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ScanConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        )
    except ScanRequestError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": str(e),
                "upstream_status": e.status_code,
                "upstream_body": e.body,
            },
        )


@router.post(
    "/analyze",
    response_model=List[Category],
    summary="Normalize and decide an upstream payload without scanning",
)
def analyze(raw: Any = Body(None)) -> List[dict]:
    return analyze_payload(raw)
