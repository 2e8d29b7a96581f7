"""Generation prompt rendering.

The prompt is the cache key material, so rendering must be deterministic:
identical inputs always give byte-identical text.
"""

from typing import Optional

from postsmith.records import BrandProfile

NOT_AVAILABLE = "N/A"

GENERATION_TEMPLATE = """You are an expert social media copywriter.
Create one {language} social media post.

Inputs:
- Platform: {platform}
- Tone: {tone}
- Topic: {topic}
- Refinement: {refinement}

Brand context:
- Display Name: {display_name}
- Bio: {bio}
- Writing Style: {writing_style}
- Target Audience: {target_audience}

Requirements:
1) Match the requested tone naturally.
2) Optimize style for {platform} best practices.
3) Put one strong hook in the first line.
4) End with a clear call-to-action in the final line.
5) Use emojis sparingly.
6) Include 3 to 5 relevant hashtags.

Output format:
- Return only the post text.
- Do not include titles, labels, or explanations.
"""


def _or_placeholder(value: str) -> str:
    return value if value else NOT_AVAILABLE


def build_prompt(
    topic: str,
    platform: str,
    tone: str,
    language: str,
    brand_profile: Optional[BrandProfile] = None,
    refinement: Optional[str] = None,
) -> str:
    """Render a generation request into a single upstream prompt."""
    profile = brand_profile or BrandProfile()
    return GENERATION_TEMPLATE.format(
        language=language,
        platform=platform,
        tone=tone,
        topic=topic,
        refinement=refinement or "None",
        display_name=_or_placeholder(profile.display_name),
        bio=_or_placeholder(profile.bio),
        writing_style=_or_placeholder(profile.writing_style),
        target_audience=_or_placeholder(profile.target_audience),
    )
