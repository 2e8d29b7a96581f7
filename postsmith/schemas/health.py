"""Schemas for the /health probe."""

from typing import Any, Literal

from pydantic import BaseModel, Field

ProbeStatus = Literal["healthy", "unhealthy"]


class ServiceStatus(BaseModel):
    """One dependency check: the store or the LLM provider."""

    status: ProbeStatus
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Overall status is ``degraded`` when any dependency check is unhealthy."""

    status: Literal["ok", "degraded"]
    version: str
    services: dict[str, ServiceStatus]
    timestamp: str = Field(..., description="UTC ISO-8601 with a trailing Z")
