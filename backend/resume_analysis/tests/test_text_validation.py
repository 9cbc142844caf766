"""
Tests for the resume text quality gate.
"""
from resume_analysis.text_validation import (
    EMPTY_INPUT,
    MAX_RESUME_LENGTH,
    MIN_RESUME_LENGTH,
    MISSING_SECTIONS_WARNING,
    TOO_LONG,
    TOO_SHORT,
    validate_resume_text,
)
from resume_analysis.tests.fixtures import FRONTEND_RESUME


class TestValidateResumeText:
    def test_empty_and_whitespace_only(self):
        for text in (None, '', '   \n\t  '):
            result = validate_resume_text(text)
            assert result.valid is False
            assert result.error_code == EMPTY_INPUT
            assert 'empty' in result.error

    def test_too_short_uses_trimmed_length(self):
        text = '  ' + 'a' * (MIN_RESUME_LENGTH - 1) + '  '
        result = validate_resume_text(text)
        assert result.valid is False
        assert result.error_code == TOO_SHORT
        assert result.text_length == MIN_RESUME_LENGTH - 1

    def test_minimum_length_is_accepted(self):
        result = validate_resume_text('Skills ' + 'x' * (MIN_RESUME_LENGTH - 7))
        assert result.valid is True
        assert result.text_length == MIN_RESUME_LENGTH

    def test_too_long(self):
        result = validate_resume_text('skills ' * (MAX_RESUME_LENGTH // 6))
        assert result.valid is False
        assert result.error_code == TOO_LONG
        assert '100,000' in result.error

    def test_maximum_length_is_accepted(self):
        text = 'Experience ' + 'y' * (MAX_RESUME_LENGTH - 11)
        result = validate_resume_text(text)
        assert result.valid is True
        assert result.text_length == MAX_RESUME_LENGTH

    def test_plain_prose_is_valid_with_warning(self):
        text = 'I like long walks on the beach and writing poems about the sea at dawn.'
        result = validate_resume_text(text)
        assert result.valid is True
        assert result.error is None
        assert result.warning == MISSING_SECTIONS_WARNING

    def test_contact_details_suppress_warning(self):
        email_only = 'Reach me any time at someone@example.org for poems about the sea.'
        phone_only = 'Reach me any time on +15551234567 for poems about the sea and sky.'
        assert validate_resume_text(email_only).warning is None
        assert validate_resume_text(phone_only).warning is None

    def test_well_formed_resume(self):
        result = validate_resume_text(FRONTEND_RESUME)
        assert result.valid is True
        assert result.warning is None
        assert result.text_length == len(FRONTEND_RESUME.strip())

    def test_fifty_plain_characters_pass_with_warning(self):
        result = validate_resume_text('a' * 50)
        assert result.valid is True
        assert result.warning
