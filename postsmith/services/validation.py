"""Request field sanitization and validation."""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, TypeVar

from postsmith.exceptions import ValidationError
from postsmith.options import DEFAULT_LANGUAGE, Language, Platform, Refinement, Tone
from postsmith.records import BrandProfile

E = TypeVar("E", bound=StrEnum)

_ANGLE_BRACKETS = re.compile(r"[<>]")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize(value: object) -> str:
    """Strip angle brackets, collapse whitespace runs, trim."""
    if value is None:
        return ""
    text = _ANGLE_BRACKETS.sub("", str(value))
    return _WHITESPACE_RUN.sub(" ", text).strip()


@dataclass(frozen=True, slots=True)
class GenerationInput:
    """Sanitized, validated generation request."""

    topic: str
    platform: Platform
    tone: Tone
    language: Language
    refinement: Refinement | None = None


class SanitizationValidator:
    """Normalizes and validates free-text and enum-constrained fields."""

    MIN_TOPIC_LENGTH = 3

    @staticmethod
    def _choice(field: str, value: str, enum_cls: type[E]) -> E:
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            raise ValidationError(field, f"{field.capitalize()} must be one of: {allowed}.")

    def validate_generation(
        self,
        topic: object,
        platform: object,
        tone: object,
        language: object = None,
        refinement: object = None,
        require_refinement: bool = False,
    ) -> GenerationInput:
        clean_topic = sanitize(topic)
        if len(clean_topic) < self.MIN_TOPIC_LENGTH:
            raise ValidationError(
                "topic",
                f"Topic is required and should be at least {self.MIN_TOPIC_LENGTH} characters long.",
            )

        clean_platform = self._choice("platform", sanitize(platform), Platform)
        clean_tone = self._choice("tone", sanitize(tone), Tone)

        raw_language = sanitize(language)
        clean_language = (
            self._choice("language", raw_language, Language) if raw_language else DEFAULT_LANGUAGE
        )

        clean_refinement: Optional[Refinement] = None
        raw_refinement = sanitize(refinement)
        if raw_refinement or require_refinement:
            clean_refinement = self._choice("refinement", raw_refinement, Refinement)

        return GenerationInput(
            topic=clean_topic,
            platform=clean_platform,
            tone=clean_tone,
            language=clean_language,
            refinement=clean_refinement,
        )

    def sanitize_profile(
        self,
        display_name: object = None,
        bio: object = None,
        writing_style: object = None,
        target_audience: object = None,
    ) -> BrandProfile:
        return BrandProfile(
            display_name=sanitize(display_name),
            bio=sanitize(bio),
            writing_style=sanitize(writing_style),
            target_audience=sanitize(target_audience),
        )
