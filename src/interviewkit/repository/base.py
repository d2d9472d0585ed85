"""Repository base classes — abstract collaborator and errors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from interviewkit.repository.models import (
    GuideContent,
    Interviewer,
    InterviewerFields,
    InterviewGuide,
    KnowledgeAsset,
    KnowledgeAssetSpec,
)


class RepositoryError(Exception):
    """Repository access error."""

    def __init__(self, message: str) -> None:
        """Initialize RepositoryError with a message."""
        self.message = message
        super().__init__(message)


class InterviewerRepository(ABC):
    """Abstract data-access interface used by the configuration workflow.

    Transport is up to the implementation. get_interviewer returns None for a
    missing interviewer; every other failure is raised.
    """

    @abstractmethod
    async def create_interviewer(self, fields: InterviewerFields) -> Interviewer:
        """Create an interviewer and return it with its assigned id."""
        ...

    @abstractmethod
    async def update_interviewer(self, interviewer_id: str, fields: InterviewerFields) -> Interviewer:
        """Replace the core fields of an existing interviewer."""
        ...

    @abstractmethod
    async def get_interviewer(self, interviewer_id: str) -> Interviewer | None:
        """Fetch an interviewer, or None if it does not exist."""
        ...

    @abstractmethod
    async def set_guide(self, interviewer_id: str, guide: GuideContent) -> None:
        """Create or replace the interview guide."""
        ...

    @abstractmethod
    async def get_guide(self, interviewer_id: str) -> InterviewGuide | None:
        """Fetch the interview guide, or None if none was set."""
        ...

    @abstractmethod
    async def add_knowledge_asset(
        self, interviewer_id: str, spec: KnowledgeAssetSpec
    ) -> KnowledgeAsset:
        """Attach a knowledge asset."""
        ...

    @abstractmethod
    async def get_knowledge_assets(self, interviewer_id: str) -> list[KnowledgeAsset]:
        """List knowledge assets attached to an interviewer."""
        ...

    @abstractmethod
    async def provision_contact(self, interviewer_id: str) -> None:
        """Assign contact details so the interviewer can be reached."""
        ...
