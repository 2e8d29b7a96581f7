"""Brand profile schemas."""

from typing import Optional

from postsmith.records import BrandProfile
from postsmith.schemas.common import CamelModel


class ProfileRequest(CamelModel):
    """Brand profile fields. All optional free text."""

    display_name: Optional[str] = None
    bio: Optional[str] = None
    writing_style: Optional[str] = None
    target_audience: Optional[str] = None


class BrandProfileSchema(CamelModel):
    display_name: str = ""
    bio: str = ""
    writing_style: str = ""
    target_audience: str = ""

    @classmethod
    def from_profile(cls, profile: BrandProfile) -> "BrandProfileSchema":
        return cls(
            display_name=profile.display_name,
            bio=profile.bio,
            writing_style=profile.writing_style,
            target_audience=profile.target_audience,
        )


class ProfileResponse(CamelModel):
    success: bool = True
    profile: BrandProfileSchema
