"""Session initializers for the create and edit flows.

Both produce the same WizardSession shape, so nothing downstream needs to
branch on the mode. EditInitializer also reconciles the three fetched
shapes (interviewer, guide, knowledge) into one FormState and captures the
baseline used for unsaved-change detection.
"""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from interviewkit.config import WizardSettings
from interviewkit.repository.base import InterviewerRepository
from interviewkit.repository.models import (
    AssetType,
    Interviewer,
    InterviewGuide,
    KnowledgeAsset,
)
from interviewkit.wizard.errors import FetchError, LockedStateError
from interviewkit.wizard.gate import validate_step
from interviewkit.wizard.machine import WizardStateMachine
from interviewkit.wizard.models import (
    STEPS,
    DraftRecord,
    FormState,
    Notification,
    NotificationVariant,
)
from interviewkit.wizard.session import WizardSession

logger = logging.getLogger(__name__)

LIST_ROUTE = "/interviewers"


def interviewer_route(interviewer_id: str) -> str:
    return f"{LIST_ROUTE}/{interviewer_id}"


class CreateInitializer:
    """Starts the create flow from defaults or from a saved draft."""

    def __init__(self, settings: WizardSettings | None = None) -> None:
        self.settings = settings or WizardSettings()

    def default_form(self) -> FormState:
        return FormState(
            language=self.settings.default_language,
            voice_id=self.settings.default_voice,
            target_duration=str(self.settings.default_duration),
        )

    def start(self) -> WizardSession:
        """New session on step 0, nothing completed.

        The baseline is the defaulted form, so "unsaved changes" means the
        operator entered something.
        """
        form = self.default_form()
        return WizardSession(form=form, machine=WizardStateMachine.for_create(), baseline=form)

    def resume(self, record: DraftRecord) -> WizardSession:
        """Rebuild a session from a saved draft.

        Only the unbroken run of completed steps from step 0 that still
        validate is kept, so no step past an invalid one stays reachable.
        The current step falls back to the furthest reachable step.
        """
        form = record.form.model_copy(deep=True)
        recorded = set(record.completed_steps)
        completed: set[int] = set()
        for step in range(len(STEPS) - 1):
            if step not in recorded or not validate_step(step, form):
                break
            completed.add(step)
        current = 0
        for step in range(len(STEPS)):
            if step > record.current_step:
                break
            if step == 0 or step - 1 in completed:
                current = step
            else:
                break
        machine = WizardStateMachine(current_step=current, completed_steps=completed)
        return WizardSession(form=form, machine=machine, baseline=self.default_form())


class BootstrapOutcome(StrEnum):
    """How an edit-mode load ended."""

    ready = "ready"
    not_found = "not_found"
    locked = "locked"
    failed = "failed"
    stale = "stale"


class BootstrapResult(BaseModel):
    """Result of loading an interviewer for editing.

    session is set only when outcome is ready. Every other outcome carries
    one notification and a route to redirect to (except stale, which
    carries neither).
    """

    outcome: BootstrapOutcome
    session: WizardSession | None = None
    notification: Notification | None = None
    redirect_to: str | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def is_ready(self) -> bool:
        return self.outcome == BootstrapOutcome.ready


def map_to_form(
    interviewer: Interviewer,
    guide: InterviewGuide | None,
    knowledge: list[KnowledgeAsset],
    settings: WizardSettings | None = None,
) -> FormState:
    """Map the fetched shapes into the unified wizard form."""
    settings = settings or WizardSettings()
    text_asset = next((a for a in knowledge if a.type == AssetType.text), None)
    return FormState(
        title=interviewer.title or interviewer.name,
        description=interviewer.description,
        project_id=interviewer.project_id,
        archetype=interviewer.archetype,
        name=interviewer.name,
        language=interviewer.language or settings.default_language,
        voice_id=interviewer.voice_id or settings.default_voice,
        channel=interviewer.channel,
        expert_source=interviewer.expert_source or "internal",
        target_duration=str(interviewer.target_duration or settings.default_duration),
        interview_context=interviewer.interview_context,
        intro_context=interviewer.intro_context,
        enable_screener=interviewer.enable_screener,
        screener_questions=interviewer.screener_questions,
        introduction_questions=interviewer.introduction_questions,
        interview_guide=guide.raw_text if guide else "",
        guide_structured=guide.structured if guide else None,
        close_context=interviewer.close_context,
        knowledge_text=(text_asset.content_text or "") if text_asset else "",
        pronunciation_hints=interviewer.pronunciation_hints,
    )


class EditInitializer:
    """Loads an existing interviewer into an edit session.

    The interviewer, guide, and knowledge fetches run concurrently. Only the
    interviewer fetch is fatal; a failed guide or knowledge fetch leaves those
    fields empty.
    """

    def __init__(
        self,
        repository: InterviewerRepository,
        settings: WizardSettings | None = None,
    ) -> None:
        self.repository = repository
        self.settings = settings or WizardSettings()
        self.loading = False
        self._generation = 0

    def cancel(self) -> None:
        """Invalidate any load in flight; its result will be reported stale."""
        self._generation += 1
        self.loading = False

    async def load(self, interviewer_id: str) -> BootstrapResult:
        """Fetch, reconcile, and baseline an interviewer for editing.

        A newer load supersedes one still in flight, whose result is then
        reported stale. loading stays True until the newest load finishes.
        Never raises: every failure becomes one notification plus a redirect.
        """
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            session = await self._bootstrap(interviewer_id)
        except LockedStateError as e:
            return self._finish(
                generation,
                BootstrapResult(
                    outcome=BootstrapOutcome.locked,
                    notification=_error(e.message),
                    redirect_to=interviewer_route(interviewer_id),
                ),
            )
        except FetchError as e:
            outcome = BootstrapOutcome.not_found if e.not_found else BootstrapOutcome.failed
            return self._finish(
                generation,
                BootstrapResult(
                    outcome=outcome, notification=_error(e.message), redirect_to=LIST_ROUTE
                ),
            )
        finally:
            if generation == self._generation:
                self.loading = False
        return self._finish(
            generation, BootstrapResult(outcome=BootstrapOutcome.ready, session=session)
        )

    def _finish(self, generation: int, result: BootstrapResult) -> BootstrapResult:
        if generation != self._generation:
            logger.debug("Discarding stale edit bootstrap (%s)", result.outcome)
            return BootstrapResult(outcome=BootstrapOutcome.stale)
        return result

    async def _bootstrap(self, interviewer_id: str) -> WizardSession:
        interviewer, guide, knowledge = await asyncio.gather(
            self.repository.get_interviewer(interviewer_id),
            self.repository.get_guide(interviewer_id),
            self.repository.get_knowledge_assets(interviewer_id),
            return_exceptions=True,
        )
        for result in (interviewer, guide, knowledge):
            if isinstance(result, asyncio.CancelledError):
                raise result

        if isinstance(interviewer, BaseException):
            logger.error("Failed to load interviewer %s: %s", interviewer_id, interviewer)
            raise FetchError("Error loading interviewer") from interviewer
        if interviewer is None:
            raise FetchError("Interviewer not found", not_found=True)
        if interviewer.is_locked:
            raise LockedStateError(f"Cannot edit {interviewer.status.value} interviewer")

        if isinstance(guide, BaseException):
            logger.warning("Guide unavailable for %s, continuing without it: %s", interviewer_id, guide)
            guide = None
        if isinstance(knowledge, BaseException):
            logger.warning(
                "Knowledge unavailable for %s, continuing without it: %s", interviewer_id, knowledge
            )
            knowledge = []

        form = map_to_form(interviewer, guide, knowledge, self.settings)
        return WizardSession(
            form=form,
            machine=WizardStateMachine.for_edit(),
            baseline=form,
            interviewer_id=interviewer_id,
        )


def _error(title: str, description: str = "") -> Notification:
    return Notification(title=title, description=description, variant=NotificationVariant.destructive)
