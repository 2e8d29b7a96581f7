"""Quality assessment schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class QualityAssessment(BaseModel):
    """Self-rated quality of a generated post."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    hook_score: int = Field(..., ge=0, le=10)
    clarity_score: int = Field(..., ge=0, le=10)
    engagement_level: Literal["Low", "Medium", "High"]
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("hook_score", "clarity_score", mode="before")
    @classmethod
    def _round_scores(cls, value: object) -> object:
        if isinstance(value, float):
            return round(value)
        return value


FALLBACK_ASSESSMENT = QualityAssessment(
    hook_score=7,
    clarity_score=7,
    engagement_level="Medium",
    suggestions=[
        "Add a stronger opening line.",
        "Use one concrete example.",
        "End with a clearer CTA.",
    ],
)
