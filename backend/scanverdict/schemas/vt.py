from typing import Any, List, Union

from pydantic import BaseModel, Field


class VTVerdict(BaseModel):
    """
    Consolidated antivirus-aggregator judgment attached to a category.
    count is always 1: this is one judgment no matter how many engines voted.
    """

    verdict: str = "UNKNOWN"
    risk_score: Union[int, float] = 0
    confidence: str = "Low"
    malicious_count: Union[int, float] = 0
    total_engines: Union[int, float] = 0
    detections: List[Any] = Field(default_factory=list)
    count: int = 1


class VTParseResponse(BaseModel):
    verdict: VTVerdict
    is_malicious: bool
