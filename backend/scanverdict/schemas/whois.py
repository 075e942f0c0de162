from typing import Any, Optional, List

from pydantic import BaseModel, Field


class Registrant(BaseModel):
    name: Optional[str] = None
    organization: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None


class WhoisDates(BaseModel):
    """
    Display strings (e.g. "Jan 1, 2024") plus the raw registry values and
    derived metrics. Metrics are None when the date could not be parsed.
    """

    created: Optional[str] = None
    updated: Optional[str] = None
    expires: Optional[str] = None
    created_raw: Optional[Any] = None
    updated_raw: Optional[Any] = None
    expires_raw: Optional[Any] = None
    age: Optional[float] = None
    age_in_days: Optional[int] = Field(None, alias="ageInDays")
    days_to_expiry: Optional[int] = Field(None, alias="daysToExpiry")

    class Config:
        populate_by_name = True


class AgeRisk(BaseModel):
    level: str
    color: str
    label: str


class WhoisRecord(BaseModel):
    domain: Optional[str] = None
    registrar: Optional[str] = None
    registrant: Registrant
    dates: WhoisDates
    name_servers: List[str] = Field(default_factory=list, alias="nameServers")
    status: List[str] = Field(default_factory=list)
    dnssec: Optional[Any] = None
    is_expired: bool = Field(False, alias="isExpired")
    is_expiring_soon: bool = Field(False, alias="isExpiringSoon")
    age_risk: AgeRisk = Field(..., alias="ageRisk")
    known_registrar: bool = Field(False, alias="knownRegistrar")
    raw: Optional[dict[str, Any]] = None

    class Config:
        populate_by_name = True
