# backend/scanverdict/schemas/scan.py
from enum import Enum
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    CLEAN = "CLEAN"
    SUSPICIOUS = "SUSPICIOUS"
    MALICIOUS = "MALICIOUS"
    UNKNOWN = "UNKNOWN"


class Detection(BaseModel):
    """One engine's judgment inside an antivirus-style aggregator."""

    engine: Optional[str] = None
    result: Optional[str] = None
    threat_type: Optional[str] = None

    class Config:
        extra = "allow"


class ScanResult(BaseModel):
    """
    One scanned target. Upstream fields we don't model (raw favicon aliases,
    capture-service sub-objects, ...) are kept as extras.
    """

    input_url: Optional[str] = None
    domain: Optional[str] = None
    ip: Optional[str] = None
    whois: Optional[Any] = None
    dns: Optional[Any] = None
    ssl: Optional[Any] = None
    favicon_src: Optional[str] = None
    screenshot_src: Optional[str] = None

    class Config:
        extra = "allow"


class Category(BaseModel):
    """
    One verdict bucket from one logical upstream data source.
    Values are whatever the engine produced; upstream may send odd types,
    so numbers are left loose here.
    """

    verdict: Optional[str] = Verdict.UNKNOWN.value
    risk_score: Optional[Union[int, float]] = 0
    confidence: Optional[str] = "N/A"
    malicious_count: Optional[Union[int, float]] = 0
    total_engines: Optional[Union[int, float]] = 0
    detections: List[
        Annotated[Union[Detection, Any], Field(union_mode="left_to_right")]
    ] = Field(default_factory=list)
    # falls back to the raw value when upstream results are not scan targets
    results: Optional[Union[List[ScanResult], Any]] = Field(
        default_factory=list, union_mode="left_to_right"
    )
    # False when total_engines was forced to 1 from an unknown engine count
    engines_reported: Optional[bool] = None
    count: Optional[Any] = None
    raw: Optional[Any] = Field(None, alias="_raw")

    class Config:
        extra = "allow"
        populate_by_name = True


class ScanRequest(BaseModel):
    url: str = Field(..., min_length=1)


class ScanResponse(BaseModel):
    url: str
    categories: List[Category]
