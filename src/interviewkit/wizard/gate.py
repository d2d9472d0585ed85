"""Step validation gate.

One ordered table of checks per step decides both whether a step may be
advanced past and which single message is shown when it may not. The table
order is the message priority.
"""

from __future__ import annotations

from collections.abc import Callable

from interviewkit.wizard.models import FormState, Step
from interviewkit.wizard.validators import (
    validate_case_code,
    validate_close_context,
    validate_description,
    validate_duration,
    validate_interview_context,
    validate_interview_guide,
    validate_intro_context,
    validate_introduction_questions,
    validate_knowledge_text,
    validate_name,
    validate_screener_questions,
    validate_title,
)

# (field name, form -> error message)
StepCheck = tuple[str, Callable[[FormState], str]]


def _check_archetype(form: FormState) -> str:
    return "" if form.archetype is not None else "Archetype selection is required"


def _check_active_questions(form: FormState) -> str:
    if form.enable_screener:
        return validate_screener_questions(form.screener_questions)
    return validate_introduction_questions(form.introduction_questions)


STEP_CHECKS: dict[int, tuple[StepCheck, ...]] = {
    Step.IDENTITY: (
        ("title", lambda f: validate_title(f.title)),
        ("description", lambda f: validate_description(f.description)),
    ),
    Step.CONFIGURE: (
        ("archetype", _check_archetype),
        ("name", lambda f: validate_name(f.name)),
    ),
    Step.CONTENT: (
        ("target_duration", lambda f: validate_duration(f.target_duration)),
        ("questions", _check_active_questions),
        ("interview_guide", lambda f: validate_interview_guide(f.interview_guide)),
        ("interview_context", lambda f: validate_interview_context(f.interview_context)),
        ("intro_context", lambda f: validate_intro_context(f.intro_context)),
        ("close_context", lambda f: validate_close_context(f.close_context)),
        ("knowledge_text", lambda f: validate_knowledge_text(f.knowledge_text)),
    ),
    Step.REVIEW: (),
    Step.TEST: (),
    Step.DEPLOY: (("case_code", lambda f: validate_case_code(f.case_code)),),
}


def step_errors(step: int, form: FormState) -> dict[str, str]:
    """Run every check of a step and return the field error map."""
    errors: dict[str, str] = {}
    for field, check in STEP_CHECKS.get(step, ()):
        key = form.active_question_field if field == "questions" else field
        errors[key] = check(form)
    return errors


def validate_step(step: int, form: FormState) -> bool:
    """Check whether a step's fields allow advancing past it.

    Review and test steps have no checks and always pass, as does any
    ordinal outside the table.
    """
    return all(not check(form) for _, check in STEP_CHECKS.get(step, ()))


def get_validation_message(step: int, form: FormState) -> str:
    """Return the first failing message of a step in priority order, or ""."""
    for _, check in STEP_CHECKS.get(step, ()):
        message = check(form)
        if message:
            return message
    return ""
