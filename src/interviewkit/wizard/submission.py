"""SubmissionController — sequences the repository calls for create and update.

Create: create_interviewer → set_guide (if guide) → add_knowledge_asset (if
knowledge text) → provision_contact.
Update: update_interviewer → set_guide.

Calls are awaited one at a time. The first failure stops the sequence and
becomes the single error notification; calls that already succeeded are not
rolled back and nothing is retried. Re-entering the edit flow is how a
partial interviewer gets fixed.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from enum import StrEnum
from typing import TypeVar

from pydantic import BaseModel, Field

from interviewkit.repository.base import InterviewerRepository
from interviewkit.repository.models import (
    AssetType,
    GuideContent,
    InterviewerFields,
    KnowledgeAssetSpec,
)
from interviewkit.wizard.errors import SubmissionError
from interviewkit.wizard.gate import get_validation_message, validate_step
from interviewkit.wizard.initializers import interviewer_route
from interviewkit.wizard.models import (
    EDITABLE_STEPS,
    FormState,
    Notification,
    NotificationVariant,
)
from interviewkit.wizard.session import WizardSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

KNOWLEDGE_BASE_TITLE = "Knowledge Base"


class SubmissionOutcome(StrEnum):
    """How a submission ended."""

    succeeded = "succeeded"
    rejected = "rejected"
    failed = "failed"
    stale = "stale"


class SubmissionResult(BaseModel):
    """Outcome of one submission.

    calls lists the repository calls that completed, in order. failed_call
    names the call that raised, if any.
    """

    outcome: SubmissionOutcome
    interviewer_id: str | None = None
    notification: Notification | None = None
    redirect_to: str | None = None
    calls: list[str] = Field(default_factory=list)
    failed_call: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == SubmissionOutcome.succeeded


def build_fields(form: FormState, include_channel: bool = True) -> InterviewerFields:
    """Core interviewer fields from the form.

    Raises:
        ValueError: If no archetype is selected or the duration is not a number.
    """
    if form.archetype is None:
        raise ValueError("Archetype selection is required")
    return InterviewerFields(
        name=form.name or form.title,
        title=form.title,
        description=form.description,
        archetype=form.archetype,
        language=form.language,
        voice_id=form.voice_id,
        channel=form.channel if include_channel else None,
        project_id=form.project_id,
        target_duration=int(float(form.target_duration)),
        interview_context=form.interview_context,
        intro_context=form.intro_context,
        enable_screener=form.enable_screener,
        screener_questions=form.screener_questions,
        introduction_questions=form.introduction_questions,
        close_context=form.close_context,
        pronunciation_hints=form.pronunciation_hints,
    )


class SubmissionController:
    """Runs the create or update sequence for a wizard session.

    busy is True from the first repository call of a sequence until its
    result is built. A submission started while busy is rejected without
    calling the repository. invalidate() marks any submission in flight as
    stale, so its result is not applied to a session that was torn down.
    """

    def __init__(self, repository: InterviewerRepository) -> None:
        self.repository = repository
        self.busy = False
        self._generation = 0

    def invalidate(self) -> None:
        self._generation += 1

    async def submit(self, session: WizardSession) -> SubmissionResult:
        """Create or update depending on whether the session edits an interviewer.

        Never raises; every outcome carries at most one notification.
        """
        if rejected := self._reject(session.form):
            return rejected

        generation = self._generation
        self.busy = True
        try:
            if session.interviewer_id is not None:
                result = await self._run_update(session.interviewer_id, session.form)
            else:
                result = await self._run_create(session.form)
        finally:
            self.busy = False

        if generation != self._generation:
            logger.debug("Discarding stale submission result (%s)", result.outcome)
            return SubmissionResult(
                outcome=SubmissionOutcome.stale,
                interviewer_id=result.interviewer_id,
                calls=result.calls,
                failed_call=result.failed_call,
            )
        return result

    async def create(self, form: FormState) -> SubmissionResult:
        """Run the create sequence without a session."""
        if rejected := self._reject(form):
            return rejected
        self.busy = True
        try:
            return await self._run_create(form)
        finally:
            self.busy = False

    async def update(self, interviewer_id: str, form: FormState) -> SubmissionResult:
        """Run the update sequence without a session."""
        if rejected := self._reject(form):
            return rejected
        self.busy = True
        try:
            return await self._run_update(interviewer_id, form)
        finally:
            self.busy = False

    def _reject(self, form: FormState) -> SubmissionResult | None:
        if self.busy:
            logger.debug("Submission already in progress, rejecting")
            return SubmissionResult(
                outcome=SubmissionOutcome.rejected,
                notification=_error("Cannot submit", "A submission is already in progress."),
            )
        return _reject_invalid(form)

    async def _call(self, name: str, awaitable: Awaitable[T], calls: list[str]) -> T:
        try:
            value = await awaitable
        except Exception as e:
            logger.error("Submission call %s failed: %s", name, e)
            raise SubmissionError(str(e), call=name) from e
        calls.append(name)
        return value

    async def _run_create(self, form: FormState) -> SubmissionResult:
        calls: list[str] = []
        interviewer_id: str | None = None
        try:
            interviewer = await self._call(
                "create_interviewer", self.repository.create_interviewer(build_fields(form)), calls
            )
            interviewer_id = interviewer.id
            if form.has_guide:
                await self._call(
                    "set_guide",
                    self.repository.set_guide(
                        interviewer_id,
                        GuideContent(guide_content=form.interview_guide, structured=form.guide_structured),
                    ),
                    calls,
                )
            if form.has_knowledge_text:
                await self._call(
                    "add_knowledge_asset",
                    self.repository.add_knowledge_asset(
                        interviewer_id,
                        KnowledgeAssetSpec(
                            title=KNOWLEDGE_BASE_TITLE,
                            type=AssetType.text,
                            content_text=form.knowledge_text,
                        ),
                    ),
                    calls,
                )
            await self._call(
                "provision_contact", self.repository.provision_contact(interviewer_id), calls
            )
        except SubmissionError as e:
            return _failed(
                interviewer_id, e.call, calls, "Failed to create interviewer. Please try again."
            )

        logger.info("Created interviewer %s", interviewer_id)
        return SubmissionResult(
            outcome=SubmissionOutcome.succeeded,
            interviewer_id=interviewer_id,
            notification=Notification(
                title="Success!",
                description="Your interviewer has been created and is ready to test.",
            ),
            redirect_to=interviewer_route(interviewer_id),
            calls=calls,
        )

    async def _run_update(self, interviewer_id: str, form: FormState) -> SubmissionResult:
        # Knowledge is not resubmitted on update; only the create path attaches it.
        calls: list[str] = []
        try:
            await self._call(
                "update_interviewer",
                self.repository.update_interviewer(
                    interviewer_id, build_fields(form, include_channel=False)
                ),
                calls,
            )
            await self._call(
                "set_guide",
                self.repository.set_guide(
                    interviewer_id,
                    GuideContent(guide_content=form.interview_guide, structured=form.guide_structured),
                ),
                calls,
            )
        except SubmissionError as e:
            return _failed(interviewer_id, e.call, calls, "Failed to update interviewer.")

        logger.info("Updated interviewer %s", interviewer_id)
        return SubmissionResult(
            outcome=SubmissionOutcome.succeeded,
            interviewer_id=interviewer_id,
            notification=Notification(title="Success!", description="Interviewer updated successfully."),
            redirect_to=interviewer_route(interviewer_id),
            calls=calls,
        )


def _failed(
    interviewer_id: str | None, call: str, calls: list[str], description: str
) -> SubmissionResult:
    return SubmissionResult(
        outcome=SubmissionOutcome.failed,
        interviewer_id=interviewer_id,
        notification=_error("Error", description),
        calls=calls,
        failed_call=call,
    )


def _error(title: str, description: str) -> Notification:
    return Notification(title=title, description=description, variant=NotificationVariant.destructive)


def _reject_invalid(form: FormState) -> SubmissionResult | None:
    """Reject a form whose editable steps do not validate, before any call is made."""
    for step in sorted(EDITABLE_STEPS):
        if not validate_step(step, form):
            return SubmissionResult(
                outcome=SubmissionOutcome.rejected,
                notification=_error("Cannot submit", get_validation_message(step, form)),
            )
    return None
