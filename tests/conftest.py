"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from interviewkit.repository.base import InterviewerRepository
from interviewkit.repository.models import (
    Archetype,
    Contact,
    GuideContent,
    Interviewer,
    InterviewerFields,
    InterviewerStatus,
    InterviewGuide,
    KnowledgeAsset,
    KnowledgeAssetSpec,
)
from interviewkit.wizard.models import FormState


def make_valid_form(**overrides: object) -> FormState:
    """A form that passes steps 0-2 (the happy-path create example)."""
    values: dict[str, object] = {
        "title": "EU Battery Market Research",
        "archetype": Archetype.diagnostic,
        "name": "Sam",
        "target_duration": "20",
        "enable_screener": False,
        "introduction_questions": "Tell me about your role.",
        "interview_guide": "1. Background\n2. Challenges",
        "case_code": "BCG-2024-0001",
    }
    values.update(overrides)
    return FormState.model_validate(values)


class FakeRepository(InterviewerRepository):
    """In-memory repository that records calls and tracks concurrency.

    Methods named in fail_on raise RuntimeError.
    Each call yields to the event loop so overlapping calls would be visible
    in max_in_flight.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.fail_on: set[str] = set()
        self.in_flight = 0
        self.max_in_flight = 0
        self.interviewers: dict[str, Interviewer] = {}
        self.guides: dict[str, InterviewGuide] = {}
        self.knowledge: dict[str, list[KnowledgeAsset]] = {}
        self._counter = 0

    async def _enter(self, name: str) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if name in self.fail_on:
                raise RuntimeError(f"{name} failed")
        finally:
            self.in_flight -= 1
        self.calls.append(name)

    async def create_interviewer(self, fields: InterviewerFields) -> Interviewer:
        await self._enter("create_interviewer")
        self._counter += 1
        interviewer = Interviewer(
            id=f"interviewer-{self._counter}",
            status=InterviewerStatus.ready_to_test,
            **fields.model_dump(exclude_none=True),
        )
        self.interviewers[interviewer.id] = interviewer
        return interviewer

    async def update_interviewer(self, interviewer_id: str, fields: InterviewerFields) -> Interviewer:
        await self._enter("update_interviewer")
        updated = self.interviewers[interviewer_id].model_copy(
            update=fields.model_dump(exclude_none=True)
        )
        self.interviewers[interviewer_id] = updated
        return updated

    async def get_interviewer(self, interviewer_id: str) -> Interviewer | None:
        await self._enter("get_interviewer")
        return self.interviewers.get(interviewer_id)

    async def set_guide(self, interviewer_id: str, guide: GuideContent) -> None:
        await self._enter("set_guide")
        self.guides[interviewer_id] = InterviewGuide(
            interviewer_id=interviewer_id, raw_text=guide.guide_content, structured=guide.structured
        )

    async def get_guide(self, interviewer_id: str) -> InterviewGuide | None:
        await self._enter("get_guide")
        return self.guides.get(interviewer_id)

    async def add_knowledge_asset(
        self, interviewer_id: str, spec: KnowledgeAssetSpec
    ) -> KnowledgeAsset:
        await self._enter("add_knowledge_asset")
        asset = KnowledgeAsset(
            id=f"knowledge-{len(self.knowledge.get(interviewer_id, [])) + 1}",
            interviewer_id=interviewer_id,
            **spec.model_dump(),
        )
        self.knowledge.setdefault(interviewer_id, []).append(asset)
        return asset

    async def get_knowledge_assets(self, interviewer_id: str) -> list[KnowledgeAsset]:
        await self._enter("get_knowledge_assets")
        return list(self.knowledge.get(interviewer_id, []))

    async def provision_contact(self, interviewer_id: str) -> None:
        await self._enter("provision_contact")
        self.interviewers[interviewer_id] = self.interviewers[interviewer_id].model_copy(
            update={"contact": Contact(link_id="abc123")}
        )


@pytest.fixture
def valid_form() -> FormState:
    return make_valid_form()


@pytest.fixture
def make_form() -> Callable[..., FormState]:
    return make_valid_form


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def stored_interviewer(repository: FakeRepository) -> Interviewer:
    """An existing interviewer with a guide and a text knowledge asset."""
    interviewer = Interviewer(
        id="interviewer-42",
        name="Sam",
        title="EU Battery Market Research",
        description="Market sizing interviews",
        archetype=Archetype.diagnostic,
        status=InterviewerStatus.published,
        target_duration=25,
        introduction_questions="Tell me about your role.",
    )
    repository.interviewers[interviewer.id] = interviewer
    repository.guides[interviewer.id] = InterviewGuide(
        interviewer_id=interviewer.id, raw_text="1. Background\n2. Challenges"
    )
    repository.knowledge[interviewer.id] = [
        KnowledgeAsset(
            id="knowledge-file",
            interviewer_id=interviewer.id,
            title="Deck",
            type="file",
            file_name="deck.pdf",
        ),
        KnowledgeAsset(
            id="knowledge-text",
            interviewer_id=interviewer.id,
            title="Knowledge Base",
            type="text",
            content_text="Battery chemistries overview",
        ),
    ]
    return interviewer
