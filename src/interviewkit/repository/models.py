"""Repository data models — interviewers, guides, and knowledge assets."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Archetype(StrEnum):
    """Interviewer archetypes offered in the configure step."""

    expert_deep_dive = "expert_deep_dive"
    client_stakeholder = "client_stakeholder"
    customer_user = "customer_user"
    rapid_survey = "rapid_survey"
    diagnostic = "diagnostic"
    investigative = "investigative"
    panel_moderator = "panel_moderator"


class Channel(StrEnum):
    """How respondents reach the interviewer."""

    chat = "chat"
    inbound_call = "inbound_call"
    outbound_call = "outbound_call"
    web_link = "web_link"


class InterviewerStatus(StrEnum):
    """Interviewer lifecycle status."""

    draft = "draft"
    ready_to_test = "ready_to_test"
    launching = "launching"
    published = "published"
    unpublished = "unpublished"
    active = "active"
    archived = "archived"
    deleted = "deleted"


# Statuses in which an interviewer can no longer be edited
LOCKED_STATUSES = frozenset({InterviewerStatus.archived, InterviewerStatus.deleted})


class AssetType(StrEnum):
    """Knowledge asset kinds."""

    text = "text"
    file = "file"


class Contact(BaseModel):
    """Contact details assigned when an interviewer is provisioned."""

    link_id: str | None = None
    phone_number: str | None = None

    model_config = ConfigDict(frozen=True)


class InterviewerFields(BaseModel):
    """Core fields sent on create and update.

    Built from the wizard form; guide and knowledge travel separately.
    """

    name: str
    title: str
    description: str = ""
    archetype: Archetype
    language: str = "en"
    voice_id: str = "alloy"
    channel: Channel | None = None
    project_id: str | None = None
    target_duration: int
    interview_context: str = ""
    intro_context: str = ""
    enable_screener: bool = False
    screener_questions: str = ""
    introduction_questions: str = ""
    close_context: str = ""
    pronunciation_hints: str = ""

    model_config = ConfigDict(frozen=True)


class Interviewer(BaseModel):
    """A stored interviewer configuration."""

    id: str
    name: str = ""
    title: str = ""
    description: str = ""
    archetype: Archetype | None = None
    status: InterviewerStatus = InterviewerStatus.draft
    channel: Channel = Channel.web_link
    language: str = "en"
    voice_id: str | None = None
    project_id: str | None = None
    target_duration: int | None = None
    interview_context: str = ""
    intro_context: str = ""
    enable_screener: bool = False
    screener_questions: str = ""
    introduction_questions: str = ""
    close_context: str = ""
    pronunciation_hints: str = ""
    expert_source: str | None = None
    contact: Contact = Field(default_factory=Contact)

    @property
    def is_locked(self) -> bool:
        """Check if the lifecycle status forbids editing."""
        return self.status in LOCKED_STATUSES


class GuideContent(BaseModel):
    """Guide payload written by set_guide."""

    guide_content: str
    structured: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


class InterviewGuide(BaseModel):
    """A stored interview guide."""

    interviewer_id: str
    raw_text: str = ""
    structured: dict[str, Any] | None = None


class KnowledgeAssetSpec(BaseModel):
    """Payload for add_knowledge_asset."""

    title: str
    type: AssetType
    content_text: str | None = None
    file_name: str | None = None
    file_size: int | None = None

    model_config = ConfigDict(frozen=True)


class KnowledgeAsset(BaseModel):
    """A stored knowledge asset attached to an interviewer."""

    id: str
    interviewer_id: str
    title: str
    type: AssetType
    content_text: str | None = None
    file_name: str | None = None
    file_size: int | None = None
