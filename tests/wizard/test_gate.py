"""Unit tests for the step validation gate."""

from __future__ import annotations

from collections.abc import Callable

from interviewkit.repository.models import Archetype
from interviewkit.wizard.gate import get_validation_message, step_errors, validate_step
from interviewkit.wizard.models import FormState, Step


class TestValidateStep:
    def test_valid_form_passes_editable_steps(self, valid_form: FormState) -> None:
        assert validate_step(Step.IDENTITY, valid_form)
        assert validate_step(Step.CONFIGURE, valid_form)
        assert validate_step(Step.CONTENT, valid_form)

    def test_identity_needs_title(self, make_form: Callable[..., FormState]) -> None:
        assert not validate_step(Step.IDENTITY, make_form(title=""))

    def test_configure_needs_archetype(self, make_form: Callable[..., FormState]) -> None:
        assert not validate_step(Step.CONFIGURE, make_form(archetype=None))

    def test_configure_rejects_bad_name(self, make_form: Callable[..., FormState]) -> None:
        assert not validate_step(Step.CONFIGURE, make_form(name="R2-D2"))

    def test_review_and_test_always_pass(self) -> None:
        empty = FormState()
        assert validate_step(Step.REVIEW, empty)
        assert validate_step(Step.TEST, empty)

    def test_deploy_needs_case_code(self, make_form: Callable[..., FormState]) -> None:
        assert validate_step(Step.DEPLOY, make_form())
        assert not validate_step(Step.DEPLOY, make_form(case_code=" "))

    def test_content_checks_every_length_bound(self, make_form: Callable[..., FormState]) -> None:
        assert not validate_step(Step.CONTENT, make_form(knowledge_text="k" * 10001))
        assert not validate_step(Step.CONTENT, make_form(close_context="c" * 601))
        assert not validate_step(Step.CONTENT, make_form(intro_context="i" * 601))
        assert not validate_step(Step.CONTENT, make_form(interview_context="x" * 2001))


class TestExclusiveQuestions:
    def test_only_active_question_set_is_required(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(introduction_questions="Tell me about your role.", screener_questions="")
        assert validate_step(Step.CONTENT, form)

        form.enable_screener = True
        assert not validate_step(Step.CONTENT, form)
        assert get_validation_message(Step.CONTENT, form) == (
            "Screener / warm-up questions are required"
        )

    def test_toggle_round_trip_restores_outcome(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(screener_questions="short")
        before = (validate_step(Step.CONTENT, form), get_validation_message(Step.CONTENT, form))

        form.enable_screener = True
        form.enable_screener = False

        after = (validate_step(Step.CONTENT, form), get_validation_message(Step.CONTENT, form))
        assert before == after
        assert form.screener_questions == "short"
        assert form.introduction_questions == "Tell me about your role."


class TestGetValidationMessage:
    def test_empty_when_valid(self, valid_form: FormState) -> None:
        for step in Step:
            assert get_validation_message(step, valid_form) == ""

    def test_title_before_description(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(title="", description="d" * 2001)
        assert get_validation_message(Step.IDENTITY, form) == "Project title is required"

    def test_archetype_before_name(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(archetype=None, name="X")
        assert get_validation_message(Step.CONFIGURE, form) == "Archetype selection is required"

    def test_duration_then_questions_then_guide(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(target_duration="", introduction_questions="", interview_guide="")
        assert get_validation_message(Step.CONTENT, form) == "Target interview duration is required"

        form.target_duration = "20"
        assert get_validation_message(Step.CONTENT, form) == "Introduction questions are required"

        form.introduction_questions = "Tell me about your role."
        assert get_validation_message(Step.CONTENT, form) == "Interview guide is required"

    def test_message_present_whenever_step_fails(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(knowledge_text="k" * 10001)
        assert not validate_step(Step.CONTENT, form)
        assert get_validation_message(Step.CONTENT, form) != ""

    def test_deploy_message(self, make_form: Callable[..., FormState]) -> None:
        assert get_validation_message(Step.DEPLOY, make_form(case_code="")) == "Case Code is required"


class TestStepErrors:
    def test_lists_every_check(self, make_form: Callable[..., FormState]) -> None:
        errors = step_errors(Step.IDENTITY, make_form(title="", description=""))
        assert errors == {"title": "Project title is required", "description": ""}

    def test_question_key_follows_toggle(self, make_form: Callable[..., FormState]) -> None:
        assert "introduction_questions" in step_errors(Step.CONTENT, make_form())
        assert "screener_questions" in step_errors(Step.CONTENT, make_form(enable_screener=True))

    def test_review_has_no_checks(self) -> None:
        assert step_errors(Step.REVIEW, FormState()) == {}

    def test_archetype_accepts_enum_value(self, make_form: Callable[..., FormState]) -> None:
        form = make_form(archetype="rapid_survey")
        assert form.archetype == Archetype.rapid_survey
        assert step_errors(Step.CONFIGURE, form)["archetype"] == ""
