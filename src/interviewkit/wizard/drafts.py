"""Draft persistence — save and restore the in-progress create flow.

The store is any key-value surface. One draft is kept at a time under
DRAFT_KEY; a later save overwrites the earlier one.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from interviewkit.wizard.gate import validate_step
from interviewkit.wizard.models import (
    DRAFT_KEY,
    DraftRecord,
    Notification,
    NotificationVariant,
    Step,
)
from interviewkit.wizard.session import WizardSession

logger = logging.getLogger(__name__)


class DraftStore(ABC):
    """Key-value surface that drafts are written to."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None."""
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a value. Returns True if it existed."""
        ...


class MemoryDraftStore(DraftStore):
    """Dict-backed store."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None


class FileDraftStore(DraftStore):
    """Stores each key as drafts/{key}.json under a data directory."""

    def __init__(self, data_dir: Path) -> None:
        self._drafts_dir = data_dir / "drafts"

    def _path(self, key: str) -> Path:
        return self._drafts_dir / f"{key}.json"

    def set(self, key: str, value: str) -> None:
        self._drafts_dir.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True


def save_draft(session: WizardSession, store: DraftStore) -> Notification:
    """Write the session's form and progress as the current draft.

    Refused until the project details step validates.
    """
    if not validate_step(Step.IDENTITY, session.form):
        return Notification(
            title="Cannot save draft",
            description="Please complete the project details first.",
            variant=NotificationVariant.destructive,
        )
    try:
        store.set(DRAFT_KEY, session.to_draft().model_dump_json())
    except OSError as e:
        logger.error("Failed to save draft: %s", e)
        return Notification(
            title="Error",
            description="Failed to save draft.",
            variant=NotificationVariant.destructive,
        )
    return Notification(title="Draft saved", description="Your progress has been saved.")


def load_draft(store: DraftStore) -> DraftRecord | None:
    """Read the current draft. Missing or unreadable drafts return None."""
    raw = store.get(DRAFT_KEY)
    if raw is None:
        return None
    try:
        return DraftRecord.model_validate_json(raw)
    except ValueError as e:
        logger.warning("Ignoring unreadable draft: %s", e)
        return None


def discard_draft(store: DraftStore) -> bool:
    return store.delete(DRAFT_KEY)
