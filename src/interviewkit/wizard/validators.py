"""Field validators.

Each validator maps a raw field value to an error message, or "" when the
value is valid. They are pure and never raise, so they can be called on every
keystroke and in isolation.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable

FieldValidator = Callable[[str], str]

TITLE_PATTERN = re.compile(r"^[a-zA-Z0-9\s.,\-_'&()]+$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s-]*$")

MIN_DURATION_MINUTES = 3
MAX_DURATION_MINUTES = 60


def validate_title(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return "Project title is required"
    if len(trimmed) < 3:
        return "Project title must be at least 3 characters"
    if len(trimmed) > 80:
        return "Project title must be shorter than 80 characters"
    if not TITLE_PATTERN.match(trimmed):
        return "Project title contains invalid characters"
    return ""


def validate_description(value: str) -> str:
    if len(value.strip()) > 2000:
        return "Project description must be shorter than 2000 characters"
    return ""


def validate_name(value: str) -> str:
    """Interviewer persona name. Optional; the title is used when blank."""
    trimmed = value.strip()
    if not trimmed:
        return ""
    if len(trimmed) < 2:
        return "Interviewer name must be at least 2 characters"
    if len(trimmed) > 20:
        return "Interviewer name must be shorter than 20 characters"
    if not NAME_PATTERN.match(trimmed):
        return "Interviewer name can only contain letters, spaces, and dashes"
    return ""


def validate_duration(value: str) -> str:
    """Target interview duration in whole minutes, between 3 and 60."""
    text = str(value).strip()
    if not text:
        return "Target interview duration is required"
    try:
        minutes = float(text)
    except ValueError:
        return "Duration must be a number in minutes"
    if math.isnan(minutes):
        return "Duration must be a number in minutes"
    if not minutes.is_integer():
        return "Duration must be a whole number"
    if minutes < MIN_DURATION_MINUTES:
        return f"Interviews must be at least {MIN_DURATION_MINUTES} minutes"
    if minutes > MAX_DURATION_MINUTES:
        return f"Interviews cannot be longer than {MAX_DURATION_MINUTES} minutes"
    return ""


def validate_interview_context(value: str) -> str:
    if len(value.strip()) > 2000:
        return "Interview context must be shorter than 2000 characters"
    return ""


def validate_intro_context(value: str) -> str:
    if len(value.strip()) > 600:
        return "Introduction context must be shorter than 600 characters"
    return ""


def validate_screener_questions(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return "Screener / warm-up questions are required"
    if len(trimmed) < 10:
        return "Screener questions must be at least 10 characters"
    if len(trimmed) > 2000:
        return "Screener text must be shorter than 2,000 characters"
    return ""


def validate_introduction_questions(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return "Introduction questions are required"
    if len(trimmed) < 10:
        return "Introduction questions must be at least 10 characters"
    if len(trimmed) > 2000:
        return "Introduction questions must be shorter than 2,000 characters"
    return ""


def validate_interview_guide(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return "Interview guide is required"
    if len(trimmed) > 10000:
        return "Interview guide must be shorter than 10,000 characters"
    return ""


def validate_close_context(value: str) -> str:
    if len(value.strip()) > 600:
        return "Closing context must be shorter than 600 characters"
    return ""


def validate_knowledge_text(value: str) -> str:
    if len(value.strip()) > 10000:
        return "Knowledge base text must be shorter than 10,000 characters"
    return ""


def validate_case_code(value: str) -> str:
    if not value.strip():
        return "Case Code is required"
    return ""


FIELD_VALIDATORS: dict[str, FieldValidator] = {
    "title": validate_title,
    "description": validate_description,
    "name": validate_name,
    "target_duration": validate_duration,
    "interview_context": validate_interview_context,
    "intro_context": validate_intro_context,
    "screener_questions": validate_screener_questions,
    "introduction_questions": validate_introduction_questions,
    "interview_guide": validate_interview_guide,
    "close_context": validate_close_context,
    "knowledge_text": validate_knowledge_text,
    "case_code": validate_case_code,
}


def validate_field(field: str, value: object) -> str:
    """Run the validator registered for a form field.

    Fields without a validator (toggles, selections, file lists) are always valid.
    """
    validator = FIELD_VALIDATORS.get(field)
    if validator is None:
        return ""
    return validator(str(value) if value is not None else "")
