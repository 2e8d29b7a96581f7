"""Enumerated request options."""

from enum import StrEnum


class Platform(StrEnum):
    INSTAGRAM = "Instagram"
    LINKEDIN = "LinkedIn"
    TWITTER = "Twitter/X"


class Tone(StrEnum):
    PROFESSIONAL = "Professional"
    CASUAL = "Casual"
    MOTIVATIONAL = "Motivational"


class Language(StrEnum):
    ENGLISH = "English"
    HINDI = "Hindi"
    SPANISH = "Spanish"
    FRENCH = "French"
    GERMAN = "German"


class Refinement(StrEnum):
    SHORTER = "Make it shorter"
    MORE_ENGAGING = "Make it more engaging"
    STRONGER_HOOK = "Stronger hook"
    MORE_PROFESSIONAL = "More professional"
    STORYTELLING = "Add storytelling"


DEFAULT_LANGUAGE = Language.ENGLISH
