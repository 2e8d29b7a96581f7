"""Tests for request sanitization and validation."""

import pytest

from postsmith.exceptions import ValidationError
from postsmith.options import Language, Platform, Refinement, Tone
from postsmith.services.validation import SanitizationValidator, sanitize


@pytest.fixture
def validator():
    return SanitizationValidator()


class TestSanitize:
    def test_strips_angle_brackets(self):
        assert sanitize("<script>alert(1)</script>") == "scriptalert(1)/script"

    def test_collapses_whitespace_and_trims(self):
        assert sanitize("  launching \n\t my   newsletter ") == "launching my newsletter"

    def test_none_is_empty(self):
        assert sanitize(None) == ""

    def test_non_string_is_stringified(self):
        assert sanitize(42) == "42"


class TestValidateGeneration:
    def test_valid_input(self, validator):
        result = validator.validate_generation(
            topic="  Launching my new AI newsletter ",
            platform="LinkedIn",
            tone="Professional",
            language="English",
        )

        assert result.topic == "Launching my new AI newsletter"
        assert result.platform is Platform.LINKEDIN
        assert result.tone is Tone.PROFESSIONAL
        assert result.language is Language.ENGLISH
        assert result.refinement is None

    @pytest.mark.parametrize("language", [None, "", "   "])
    def test_language_defaults_to_english(self, validator, language):
        result = validator.validate_generation("Coffee tips", "Instagram", "Casual", language)
        assert result.language is Language.ENGLISH

    @pytest.mark.parametrize("topic", [None, "", "ab", " <a> ", "  x  "])
    def test_short_topic_rejected(self, validator, topic):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_generation(topic, "LinkedIn", "Professional")

        assert exc_info.value.field == "topic"
        assert exc_info.value.details == {"field": "topic"}
        assert exc_info.value.status_code == 400

    def test_topic_length_counted_after_sanitizing(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_generation("<<a>>b", "LinkedIn", "Professional")

    def test_unknown_platform_names_allowed_values(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_generation("Coffee tips", "MySpace", "Casual")

        assert exc_info.value.field == "platform"
        assert "Instagram, LinkedIn, Twitter/X" in exc_info.value.message

    def test_unknown_tone(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_generation("Coffee tips", "Instagram", "Sarcastic")
        assert exc_info.value.field == "tone"

    def test_unknown_language(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_generation("Coffee tips", "Instagram", "Casual", "Klingon")
        assert exc_info.value.field == "language"

    def test_enum_values_are_case_sensitive(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_generation("Coffee tips", "linkedin", "Casual")

    def test_optional_refinement_accepted(self, validator):
        result = validator.validate_generation(
            "Coffee tips", "Twitter/X", "Motivational", refinement="Stronger hook"
        )
        assert result.refinement is Refinement.STRONGER_HOOK

    def test_unknown_refinement_rejected(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_generation(
                "Coffee tips", "Twitter/X", "Motivational", refinement="Make it rhyme"
            )
        assert exc_info.value.field == "refinement"

    def test_required_refinement_missing(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_generation(
                "Coffee tips", "Twitter/X", "Motivational", require_refinement=True
            )
        assert exc_info.value.field == "refinement"


class TestSanitizeProfile:
    def test_all_fields_sanitized(self, validator):
        profile = validator.sanitize_profile(
            display_name=" Ada  <b>Lovelace</b> ",
            bio="Writes\n\nabout  engines",
            writing_style=None,
            target_audience="  founders ",
        )

        assert profile.display_name == "Ada bLovelace/b"
        assert profile.bio == "Writes about engines"
        assert profile.writing_style == ""
        assert profile.target_audience == "founders"
