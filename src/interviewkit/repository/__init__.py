"""interviewkit repository — data-access interface for interviewer configurations.

Public API:
    Base: InterviewerRepository, RepositoryError
    Models: Interviewer, InterviewerFields, InterviewGuide, GuideContent,
            KnowledgeAsset, KnowledgeAssetSpec, Contact
    Enums: Archetype, Channel, InterviewerStatus, AssetType
    Implementations: LocalRepository
"""

from interviewkit.repository.base import InterviewerRepository, RepositoryError
from interviewkit.repository.local import LocalRepository
from interviewkit.repository.models import (
    LOCKED_STATUSES,
    Archetype,
    AssetType,
    Channel,
    Contact,
    GuideContent,
    Interviewer,
    InterviewerFields,
    InterviewerStatus,
    InterviewGuide,
    KnowledgeAsset,
    KnowledgeAssetSpec,
)

__all__ = [
    "LOCKED_STATUSES",
    "Archetype",
    "AssetType",
    "Channel",
    "Contact",
    "GuideContent",
    "InterviewGuide",
    "Interviewer",
    "InterviewerFields",
    "InterviewerRepository",
    "InterviewerStatus",
    "KnowledgeAsset",
    "KnowledgeAssetSpec",
    "LocalRepository",
    "RepositoryError",
]
