"""WizardStateMachine — step index and completed-step bookkeeping.

Pure state and transition logic, no I/O. Every transition either fully
applies or leaves the state untouched, and reports which happened.
"""

from __future__ import annotations

from interviewkit.wizard.gate import validate_step
from interviewkit.wizard.models import EDITABLE_STEPS, STEPS, FormState, Step, WizardProgress


class WizardStateMachine:
    """Navigation rules of the configuration wizard.

    next: advance only when the current step validates; records it as completed.
    prev: step back; completed steps are kept.
    go_to: jump only to a completed step, or to review once steps 0-2 are completed.
    """

    def __init__(
        self,
        current_step: int = 0,
        completed_steps: set[int] | None = None,
        step_count: int = len(STEPS),
    ) -> None:
        if step_count <= 0:
            raise ValueError("step_count must be positive")
        if not 0 <= current_step < step_count:
            raise ValueError(f"current_step must be in [0, {step_count})")
        self.step_count = step_count
        self._current = current_step
        self._completed: set[int] = set(completed_steps or ())

    @classmethod
    def for_create(cls) -> WizardStateMachine:
        """Fresh wizard: first step, nothing completed."""
        return cls()

    @classmethod
    def for_edit(cls) -> WizardStateMachine:
        """Existing interviewer: land on review with steps 0-2 completed."""
        return cls(current_step=int(Step.REVIEW), completed_steps={int(s) for s in EDITABLE_STEPS})

    @classmethod
    def from_progress(cls, progress: WizardProgress) -> WizardStateMachine:
        return cls(current_step=progress.current_step, completed_steps=progress.completed_steps)

    @property
    def current_step(self) -> int:
        return self._current

    @property
    def completed_steps(self) -> frozenset[int]:
        return frozenset(self._completed)

    @property
    def is_last_step(self) -> bool:
        return self._current == self.step_count - 1

    @property
    def progress(self) -> WizardProgress:
        """Snapshot of the current state."""
        return WizardProgress(current_step=self._current, completed_steps=set(self._completed))

    def can_advance(self, form: FormState) -> bool:
        return self._current < self.step_count - 1 and validate_step(self._current, form)

    def next(self, form: FormState) -> bool:
        """Advance one step if the current step validates.

        Returns:
            True if the state changed.
        """
        if not self.can_advance(form):
            return False
        self._completed.add(self._current)
        self._current += 1
        return True

    def prev(self) -> bool:
        """Go back one step. Returns True if the state changed."""
        if self._current <= 0:
            return False
        self._current -= 1
        return True

    def can_go_to(self, step: int) -> bool:
        if not 0 <= step < self.step_count:
            return False
        if step in self._completed:
            return True
        # Review is reachable once every editable step is done
        return step == Step.REVIEW and EDITABLE_STEPS <= self._completed

    def go_to(self, step: int) -> bool:
        """Jump to a step allowed by the gating rules.

        Returns:
            True if the state changed.
        """
        if not self.can_go_to(step) or step == self._current:
            return False
        self._current = step
        return True
