"""LocalRepository — JSON-backed interviewer repository."""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path

from pydantic import TypeAdapter

from interviewkit.repository.base import InterviewerRepository, RepositoryError
from interviewkit.repository.models import (
    Contact,
    GuideContent,
    Interviewer,
    InterviewerFields,
    InterviewerStatus,
    InterviewGuide,
    KnowledgeAsset,
    KnowledgeAssetSpec,
)

logger = logging.getLogger(__name__)

_ASSET_LIST = TypeAdapter(list[KnowledgeAsset])


class LocalRepository(InterviewerRepository):
    """Stores interviewers, guides, and knowledge assets as JSON files.

    Layout under root:
        interviewers/{id}.json
        guides/{id}.json
        knowledge/{id}.json   (list of assets)
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self._interviewers_dir = root / "interviewers"
        self._guides_dir = root / "guides"
        self._knowledge_dir = root / "knowledge"

    def _interviewer_path(self, interviewer_id: str) -> Path:
        return self._interviewers_dir / f"{interviewer_id}.json"

    def _write_interviewer(self, interviewer: Interviewer) -> None:
        self._interviewers_dir.mkdir(parents=True, exist_ok=True)
        path = self._interviewer_path(interviewer.id)
        path.write_text(interviewer.model_dump_json(indent=2), encoding="utf-8")

    def _require(self, interviewer_id: str) -> Interviewer:
        interviewer = self._read_interviewer(interviewer_id)
        if interviewer is None:
            raise RepositoryError(f"Interviewer not found: {interviewer_id}")
        return interviewer

    def _read_interviewer(self, interviewer_id: str) -> Interviewer | None:
        path = self._interviewer_path(interviewer_id)
        if not path.exists():
            return None
        try:
            return Interviewer.model_validate_json(path.read_text(encoding="utf-8"))
        except Exception as e:
            raise RepositoryError(f"Corrupt interviewer record {interviewer_id}: {e}") from e

    async def create_interviewer(self, fields: InterviewerFields) -> Interviewer:
        """Create an interviewer with a fresh id and status ready_to_test."""
        data = fields.model_dump(exclude_none=True)
        interviewer = Interviewer(
            id=f"interviewer-{secrets.token_hex(6)}",
            status=InterviewerStatus.ready_to_test,
            **data,
        )
        self._write_interviewer(interviewer)
        logger.debug("Created interviewer %s", interviewer.id)
        return interviewer

    async def update_interviewer(self, interviewer_id: str, fields: InterviewerFields) -> Interviewer:
        """Merge fields into the stored interviewer."""
        current = self._require(interviewer_id)
        updated = current.model_copy(update=fields.model_dump(exclude_none=True))
        self._write_interviewer(updated)
        return updated

    async def get_interviewer(self, interviewer_id: str) -> Interviewer | None:
        """Load an interviewer, or None if no record exists."""
        return self._read_interviewer(interviewer_id)

    async def set_guide(self, interviewer_id: str, guide: GuideContent) -> None:
        """Write the guide, keeping the stored structure when none is given."""
        self._require(interviewer_id)
        existing = await self.get_guide(interviewer_id)
        structured = guide.structured
        if structured is None and existing is not None:
            structured = existing.structured
        stored = InterviewGuide(
            interviewer_id=interviewer_id,
            raw_text=guide.guide_content,
            structured=structured,
        )
        self._guides_dir.mkdir(parents=True, exist_ok=True)
        path = self._guides_dir / f"{interviewer_id}.json"
        path.write_text(stored.model_dump_json(indent=2), encoding="utf-8")

    async def get_guide(self, interviewer_id: str) -> InterviewGuide | None:
        """Load the guide, or None if none was set."""
        path = self._guides_dir / f"{interviewer_id}.json"
        if not path.exists():
            return None
        return InterviewGuide.model_validate_json(path.read_text(encoding="utf-8"))

    async def add_knowledge_asset(
        self, interviewer_id: str, spec: KnowledgeAssetSpec
    ) -> KnowledgeAsset:
        """Append an asset to the interviewer's knowledge list."""
        self._require(interviewer_id)
        assets = await self.get_knowledge_assets(interviewer_id)
        asset = KnowledgeAsset(
            id=f"knowledge-{secrets.token_hex(6)}",
            interviewer_id=interviewer_id,
            **spec.model_dump(),
        )
        assets.append(asset)
        self._knowledge_dir.mkdir(parents=True, exist_ok=True)
        path = self._knowledge_dir / f"{interviewer_id}.json"
        path.write_bytes(_ASSET_LIST.dump_json(assets, indent=2))
        return asset

    async def get_knowledge_assets(self, interviewer_id: str) -> list[KnowledgeAsset]:
        """Load the knowledge list; empty if none was stored."""
        path = self._knowledge_dir / f"{interviewer_id}.json"
        if not path.exists():
            return []
        return _ASSET_LIST.validate_json(path.read_text(encoding="utf-8"))

    async def provision_contact(self, interviewer_id: str) -> None:
        """Assign a short link id."""
        interviewer = self._require(interviewer_id)
        contact = Contact(link_id=secrets.token_urlsafe(6))
        self._write_interviewer(interviewer.model_copy(update={"contact": contact}))

    async def archive_interviewer(self, interviewer_id: str) -> Interviewer:
        """Move an interviewer to the archived status."""
        interviewer = self._require(interviewer_id)
        archived = interviewer.model_copy(update={"status": InterviewerStatus.archived})
        self._write_interviewer(archived)
        return archived

    def list_interviewers(self) -> list[Interviewer]:
        """Return all stored interviewers."""
        if not self._interviewers_dir.exists():
            return []
        interviewers: list[Interviewer] = []
        for json_file in sorted(self._interviewers_dir.glob("*.json")):
            data = json.loads(json_file.read_text(encoding="utf-8"))
            interviewers.append(Interviewer.model_validate(data))
        return interviewers
