"""Dashboard schemas."""

from postsmith.schemas.common import CamelModel


class DashboardResponse(CamelModel):
    """Aggregate usage numbers for the caller."""

    total_posts: int
    daily_usage: int
    limit: int
    most_used_platform: str
    most_used_tone: str
    platform_breakdown: dict[str, int]
    tone_breakdown: dict[str, int]
