"""
Quality gate for extracted resume text.

Runs before any provider call so that empty or truncated extractions never
reach the expensive part of the pipeline.
"""
import re
from dataclasses import dataclass
from typing import Optional

MIN_RESUME_LENGTH = 50
MAX_RESUME_LENGTH = 100_000

EMPTY_INPUT = 'empty_input'
TOO_SHORT = 'too_short'
TOO_LONG = 'too_long'

EMAIL_RX = re.compile(r'\S+@\S+\.\S+')
PHONE_RX = re.compile(r'\+?\d{10,}')
SECTION_RX = re.compile(r'experience|education|skills|projects', re.IGNORECASE)

MISSING_SECTIONS_WARNING = (
    'Resume may be missing standard sections (contact info, experience, skills, etc.)'
)


@dataclass(frozen=True)
class TextValidationResult:
    valid: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    warning: Optional[str] = None
    text_length: int = 0


def validate_resume_text(text: Optional[str]) -> TextValidationResult:
    """
    Check extracted resume text for minimum quality.

    Length limits apply to the trimmed text. A text that passes the limits but
    shows no contact details and no usual section headings is still valid;
    the result then carries a non-blocking warning.
    """
    trimmed = (text or '').strip()
    length = len(trimmed)

    if not length:
        return TextValidationResult(
            valid=False,
            error_code=EMPTY_INPUT,
            error='Resume text is empty. Please ensure the file was parsed correctly.',
        )
    if length < MIN_RESUME_LENGTH:
        return TextValidationResult(
            valid=False,
            error_code=TOO_SHORT,
            error=(
                f'Resume text is too short (minimum {MIN_RESUME_LENGTH} characters). '
                'Please ensure the file contains actual content.'
            ),
            text_length=length,
        )
    if length > MAX_RESUME_LENGTH:
        return TextValidationResult(
            valid=False,
            error_code=TOO_LONG,
            error=(
                f'Resume text is too long (maximum {MAX_RESUME_LENGTH:,} characters). '
                'Please use a shorter resume.'
            ),
            text_length=length,
        )

    has_email = EMAIL_RX.search(trimmed) is not None
    has_phone = PHONE_RX.search(trimmed) is not None
    has_sections = SECTION_RX.search(trimmed) is not None
    if not (has_email or has_phone or has_sections):
        return TextValidationResult(valid=True, warning=MISSING_SECTIONS_WARNING, text_length=length)

    return TextValidationResult(valid=True, text_length=length)
