from typing import Literal

from pydantic import BaseModel, Field


# --- /api/achievement payload ---
class YearHighlights(BaseModel):
    year: int = Field(..., ge=0)
    items: list[str] = Field(default_factory=list, max_length=5)


# --- Error envelope ---
class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


# --- Health payload ---
class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    as_of: str
    service: str = "year-highlights"
    credential_configured: bool
    cached_years: int


# --- Version payload ---
class VersionResponse(BaseModel):
    service: str  # "year-highlights:0.1.0"
    service_version: str
    upstream_endpoint: str
