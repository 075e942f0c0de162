from typing import Any, Optional

from pydantic import BaseModel, Field


class HistoryItem(BaseModel):
    url: Optional[str] = None
    timestamp: Optional[str] = Field(
        None, description="ISO-8601 time the scan finished (UTC)."
    )
    result: Optional[Any] = None

    class Config:
        extra = "allow"


class HistoryClearResponse(BaseModel):
    cleared: bool
