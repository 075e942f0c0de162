# backend/scanverdict/api/v1/routes_details.py
from typing import Any, Optional

from fastapi import APIRouter, Body

from scanverdict.schemas.vt import VTParseResponse
from scanverdict.schemas.whois import WhoisRecord
from scanverdict.services.vt.vt_parser import (
    extract_vt_payload,
    is_malicious,
    parse_vt_result,
)
from scanverdict.services.whois.whois_parser import parse_whois_data

router = APIRouter(tags=["details"])


@router.post(
    "/whois/parse",
    response_model=Optional[WhoisRecord],
    summary="Normalize a raw WHOIS object from a scan result",
)
def parse_whois(raw: Any = Body(None)) -> Optional[WhoisRecord]:
    # null when the record has nothing worth showing
    return parse_whois_data(raw)


@router.post(
    "/vt/parse",
    response_model=VTParseResponse,
    summary="Parse a VirusTotal-style sub-verdict",
)
def parse_vt(raw: Any = Body(None)) -> VTParseResponse:
    """
    Accepts either the VT object itself or a whole category carrying it
    (under vt / virustotal / vt_data / ...).
    """
    vt_data = extract_vt_payload(raw) or raw
    return VTParseResponse(
        verdict=parse_vt_result(vt_data), is_malicious=is_malicious(vt_data)
    )
