"""WizardSession — the live form, its field errors, and navigation.

All form mutation goes through the session setters, which re-run the
field's validator. Unsaved changes are computed against the baseline on
demand, so no setter can leave the comparison stale.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from interviewkit.wizard.gate import get_validation_message, validate_step
from interviewkit.wizard.machine import WizardStateMachine
from interviewkit.wizard.models import DraftRecord, FormState, KnowledgeFile, WizardProgress
from interviewkit.wizard.validators import validate_field

logger = logging.getLogger(__name__)


class WizardSession:
    """One run of the configuration wizard, in create or edit mode.

    Both modes share this shape; the initializers decide the starting form,
    the starting progress, and the baseline. interviewer_id is set only
    when an existing interviewer is being edited.
    """

    def __init__(
        self,
        form: FormState,
        machine: WizardStateMachine,
        baseline: FormState,
        interviewer_id: str | None = None,
    ) -> None:
        self.form = form
        self.machine = machine
        self.interviewer_id = interviewer_id
        self.errors: dict[str, str] = {}
        self.leave_pending = False
        self._baseline = baseline.model_copy(deep=True)

    @property
    def is_edit(self) -> bool:
        return self.interviewer_id is not None

    @property
    def baseline(self) -> FormState:
        """Copy of the snapshot taken when the session started."""
        return self._baseline.model_copy(deep=True)

    @property
    def current_step(self) -> int:
        return self.machine.current_step

    @property
    def progress(self) -> WizardProgress:
        return self.machine.progress

    # --- Field setters ---

    def set_field(self, field: str, value: Any) -> str:
        """Assign a form field and re-run its validator.

        Returns:
            The field's error message ("" if valid).

        Raises:
            KeyError: If the form has no such field.
            ValueError: If the value cannot be coerced to the field's type.
        """
        if field not in FormState.model_fields:
            raise KeyError(f"Unknown form field: {field}")
        setattr(self.form, field, value)
        error = validate_field(field, getattr(self.form, field))
        self.errors[field] = error
        return error

    def update(self, **values: Any) -> dict[str, str]:
        """Assign several fields; returns the errors of the assigned fields."""
        return {field: self.set_field(field, value) for field, value in values.items()}

    def set_screener_enabled(self, enabled: bool) -> None:
        """Switch which question set is required. Stored text is kept.

        The error map follows the toggle: only the now-required question
        field carries an entry.
        """
        self.set_field("enable_screener", enabled)
        active = self.form.active_question_field
        inactive = "introduction_questions" if active == "screener_questions" else "screener_questions"
        self.errors.pop(inactive, None)
        self.errors[active] = validate_field(active, getattr(self.form, active))

    def attach_files(self, files: Iterable[KnowledgeFile]) -> list[KnowledgeFile]:
        """Attach knowledge files, dropping unsupported types.

        Returns:
            The files that were accepted.
        """
        accepted = [f for f in files if f.is_supported]
        if accepted:
            self.set_field("knowledge_files", [*self.form.knowledge_files, *accepted])
        return accepted

    def remove_file(self, index: int) -> None:
        files = list(self.form.knowledge_files)
        if 0 <= index < len(files):
            del files[index]
            self.set_field("knowledge_files", files)

    # --- Validation ---

    def is_step_valid(self, step: int | None = None) -> bool:
        return validate_step(self.current_step if step is None else step, self.form)

    def validation_message(self, step: int | None = None) -> str:
        """First failing message of a step (default: the current step)."""
        return get_validation_message(self.current_step if step is None else step, self.form)

    # --- Navigation ---

    def next(self) -> bool:
        return self.machine.next(self.form)

    def prev(self) -> bool:
        return self.machine.prev()

    def go_to(self, step: int) -> bool:
        return self.machine.go_to(step)

    # --- Unsaved changes ---

    def has_unsaved_changes(self) -> bool:
        """Structural comparison of the form against the baseline."""
        return self.form.model_dump() != self._baseline.model_dump()

    def changed_fields(self) -> list[str]:
        """Names of the fields that differ from the baseline."""
        current = self.form.model_dump()
        baseline = self._baseline.model_dump()
        return [field for field in current if current[field] != baseline[field]]

    def request_leave(self) -> bool:
        """Ask to navigate away from the workflow.

        Returns:
            True if the caller may leave now. False means a discard
            confirmation is pending; answer it with confirm_leave or cancel_leave.
        """
        if self.has_unsaved_changes():
            self.leave_pending = True
            return False
        return True

    def confirm_leave(self) -> None:
        """Discard the edits and allow leaving."""
        logger.debug("Discarding unsaved changes")
        self.form = self._baseline.model_copy(deep=True)
        self.errors = {}
        self.leave_pending = False

    def cancel_leave(self) -> None:
        """Stay in the workflow with the edited form."""
        self.leave_pending = False

    # --- Drafts ---

    def to_draft(self) -> DraftRecord:
        return DraftRecord(
            form=self.form.model_copy(deep=True),
            completed_steps=sorted(self.machine.completed_steps),
            current_step=self.current_step,
        )
