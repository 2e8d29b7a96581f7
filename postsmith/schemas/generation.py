"""Generation request and response schemas."""

from typing import Optional

from pydantic import Field

from postsmith.schemas.common import CamelModel
from postsmith.schemas.quality import QualityAssessment


class GenerateRequest(CamelModel):
    """Raw generation fields; sanitized and validated by the service layer."""

    topic: Optional[str] = Field(None, description="What the post is about (>= 3 chars)")
    platform: Optional[str] = Field(None, description="Instagram, LinkedIn or Twitter/X")
    tone: Optional[str] = Field(None, description="Professional, Casual or Motivational")
    language: Optional[str] = Field(None, description="Output language, English by default")


class RefineRequest(GenerateRequest):
    refinement: Optional[str] = Field(None, description="Refinement instruction")


class UsageInfo(CamelModel):
    daily_generations: int
    limit: int
    is_guest: bool = False


class GenerateResponse(CamelModel):
    text: str
    quality: QualityAssessment
    usage: UsageInfo
    requires_login: Optional[bool] = None
    estimated_tokens: Optional[int] = None
    cached: Optional[bool] = None
