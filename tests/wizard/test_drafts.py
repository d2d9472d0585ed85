"""Tests for draft persistence."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from interviewkit.wizard.drafts import (
    DraftStore,
    FileDraftStore,
    MemoryDraftStore,
    discard_draft,
    load_draft,
    save_draft,
)
from interviewkit.wizard.initializers import CreateInitializer
from interviewkit.wizard.models import DRAFT_KEY, FormState
from interviewkit.wizard.session import WizardSession


class FailingDraftStore(MemoryDraftStore):
    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


@pytest.fixture(params=["memory", "file"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> DraftStore:
    if request.param == "memory":
        return MemoryDraftStore()
    return FileDraftStore(tmp_path)


@pytest.fixture
def session_for(make_form: Callable[..., FormState]) -> Callable[..., WizardSession]:
    def _build(**overrides: object) -> WizardSession:
        session = CreateInitializer().start()
        session.update(**make_form(**overrides).model_dump())
        return session

    return _build


class TestStores:
    def test_set_get_delete(self, store: DraftStore) -> None:
        assert store.get("k") is None
        store.set("k", "v1")
        store.set("k", "v2")
        assert store.get("k") == "v2"
        assert store.delete("k")
        assert not store.delete("k")
        assert store.get("k") is None

    def test_file_store_layout(self, tmp_path: Path) -> None:
        FileDraftStore(tmp_path).set(DRAFT_KEY, "{}")
        assert (tmp_path / "drafts" / "agent_draft.json").read_text(encoding="utf-8") == "{}"


class TestSaveDraft:
    def test_saves_and_reloads(
        self, store: DraftStore, session_for: Callable[..., WizardSession]
    ) -> None:
        session = session_for()
        session.next()
        notification = save_draft(session, store)

        assert notification.title == "Draft saved"
        assert not notification.is_error
        record = load_draft(store)
        assert record is not None
        assert record.form.model_dump() == session.form.model_dump()
        assert record.completed_steps == [0]
        assert record.current_step == 1

    def test_refused_without_project_details(
        self, store: DraftStore, session_for: Callable[..., WizardSession]
    ) -> None:
        notification = save_draft(session_for(title=""), store)

        assert notification.title == "Cannot save draft"
        assert notification.description == "Please complete the project details first."
        assert notification.is_error
        assert store.get(DRAFT_KEY) is None

    def test_later_save_overwrites(
        self, store: DraftStore, session_for: Callable[..., WizardSession]
    ) -> None:
        save_draft(session_for(title="First project"), store)
        save_draft(session_for(title="Second project"), store)
        record = load_draft(store)
        assert record is not None
        assert record.form.title == "Second project"

    def test_store_failure_is_reported(self, session_for: Callable[..., WizardSession]) -> None:
        notification = save_draft(session_for(), FailingDraftStore())
        assert notification.title == "Error"
        assert notification.description == "Failed to save draft."
        assert notification.is_error


class TestLoadDraft:
    def test_missing(self, store: DraftStore) -> None:
        assert load_draft(store) is None

    def test_unreadable_is_ignored(self, store: DraftStore) -> None:
        store.set(DRAFT_KEY, "{not json")
        assert load_draft(store) is None

    def test_wrong_shape_is_ignored(self, store: DraftStore) -> None:
        store.set(DRAFT_KEY, '{"form": {"enable_screener": "maybe"}}')
        assert load_draft(store) is None

    def test_resume_from_saved_draft(
        self, store: DraftStore, session_for: Callable[..., WizardSession]
    ) -> None:
        session = session_for()
        session.next()
        session.next()
        save_draft(session, store)

        record = load_draft(store)
        assert record is not None
        resumed = CreateInitializer().resume(record)
        assert resumed.current_step == 2
        assert resumed.progress.completed_steps == {0, 1}


class TestDiscardDraft:
    def test_discard(self, store: DraftStore, session_for: Callable[..., WizardSession]) -> None:
        save_draft(session_for(), store)
        assert discard_draft(store)
        assert load_draft(store) is None
        assert not discard_draft(store)
