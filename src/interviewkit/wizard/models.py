"""Wizard data models — form state, steps, progress, drafts, and notifications.

FormState is the single mutable record the wizard edits. Everything else here
is a value object.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from interviewkit.repository.models import Archetype, Channel

# Accepted knowledge upload extensions; anything else is dropped on attach
KNOWLEDGE_FILE_EXTENSIONS = (".pdf", ".doc", ".docx", ".ppt", ".pptx")

# Single outstanding draft, stored under one key
DRAFT_KEY = "agent_draft"


class Step(IntEnum):
    """Step ordinals of the configuration wizard."""

    IDENTITY = 0
    CONFIGURE = 1
    CONTENT = 2
    REVIEW = 3
    TEST = 4
    DEPLOY = 5


class StepDefinition(BaseModel):
    """Display metadata for one wizard step."""

    id: str
    title: str
    description: str
    ordinal: int

    model_config = ConfigDict(frozen=True)


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(id="project", title="Project details", description="Basic information", ordinal=0),
    StepDefinition(
        id="interviewer", title="Configure interviewer", description="Archetype and voice", ordinal=1
    ),
    StepDefinition(id="content", title="Interview content", description="Guide and knowledge", ordinal=2),
    StepDefinition(id="review", title="Review", description="Summary", ordinal=3),
    StepDefinition(id="test", title="Test", description="Try before deploying", ordinal=4),
    StepDefinition(id="deploy", title="Deploy", description="Generate link", ordinal=5),
)

# Steps an existing interviewer is assumed to satisfy
EDITABLE_STEPS = frozenset({Step.IDENTITY, Step.CONFIGURE, Step.CONTENT})


class KnowledgeFile(BaseModel):
    """Metadata of a file attached to the knowledge base."""

    name: str
    size: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def is_supported(self) -> bool:
        """Check the file extension against the accepted upload types."""
        return self.name.lower().endswith(KNOWLEDGE_FILE_EXTENSIONS)


class FormState(BaseModel):
    """Every field across every wizard step.

    Values are kept raw (target_duration is the string the operator typed) so
    validators see exactly what was entered.
    """

    # Step 0: identity
    title: str = ""
    description: str = ""
    engagement_type: str = "internal-work"
    project_id: str | None = None

    # Step 1: configure
    archetype: Archetype | None = None
    name: str = ""
    language: str = "en"
    voice_id: str = "alloy"
    channel: Channel = Channel.web_link
    expert_source: str = "internal"

    # Step 2: content
    target_duration: str = "20"
    interview_context: str = ""
    intro_context: str = ""
    enable_screener: bool = False
    screener_questions: str = ""
    introduction_questions: str = ""
    interview_guide: str = ""
    guide_structured: dict[str, Any] | None = None
    close_context: str = ""
    knowledge_text: str = ""
    knowledge_files: list[KnowledgeFile] = Field(default_factory=list)
    pronunciation_hints: str = ""

    # Step 5: deploy
    case_code: str = ""

    model_config = ConfigDict(validate_assignment=True)

    @property
    def active_question_field(self) -> str:
        """Name of the question field that is required for the current toggle."""
        return "screener_questions" if self.enable_screener else "introduction_questions"

    @property
    def has_guide(self) -> bool:
        """Check if guide text was entered."""
        return len(self.interview_guide) > 0

    @property
    def has_knowledge_text(self) -> bool:
        """Check if knowledge base text was entered."""
        return len(self.knowledge_text) > 0


class WizardProgress(BaseModel):
    """Current step and the set of steps already advanced past."""

    current_step: int = 0
    completed_steps: set[int] = Field(default_factory=set)

    model_config = ConfigDict(frozen=True)


class DraftRecord(BaseModel):
    """Persisted snapshot of an in-progress wizard."""

    form: FormState
    completed_steps: list[int] = Field(default_factory=list)
    current_step: int = 0


class NotificationVariant(StrEnum):
    """Visual weight of a notification."""

    default = "default"
    destructive = "destructive"


class Notification(BaseModel):
    """The one user-visible outcome of an operation."""

    title: str
    description: str = ""
    variant: NotificationVariant = NotificationVariant.default

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        """Check if the notification reports a failure."""
        return self.variant == NotificationVariant.destructive
