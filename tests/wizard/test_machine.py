"""Tests for wizard navigation."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from interviewkit.wizard.machine import WizardStateMachine
from interviewkit.wizard.models import FormState, Step, WizardProgress


class TestConstruction:
    def test_create_starts_at_first_step(self) -> None:
        machine = WizardStateMachine.for_create()
        assert machine.current_step == 0
        assert machine.completed_steps == frozenset()

    def test_edit_starts_at_review(self) -> None:
        machine = WizardStateMachine.for_edit()
        assert machine.current_step == 3
        assert machine.completed_steps == {0, 1, 2}

    def test_rejects_out_of_range_step(self) -> None:
        with pytest.raises(ValueError):
            WizardStateMachine(current_step=6)

    def test_rejects_empty_wizard(self) -> None:
        with pytest.raises(ValueError):
            WizardStateMachine(step_count=0)

    def test_from_progress(self) -> None:
        machine = WizardStateMachine.from_progress(WizardProgress(current_step=2, completed_steps={0, 1}))
        assert machine.progress == WizardProgress(current_step=2, completed_steps={0, 1})


class TestNext:
    def test_advances_when_valid(self, valid_form: FormState) -> None:
        machine = WizardStateMachine()
        assert machine.next(valid_form)
        assert machine.current_step == 1
        assert machine.completed_steps == {0}

    def test_blocked_when_invalid(self, make_form: Callable[..., FormState]) -> None:
        machine = WizardStateMachine()
        assert not machine.next(make_form(title=""))
        assert machine.current_step == 0
        assert machine.completed_steps == frozenset()

    def test_walks_to_last_step(self, valid_form: FormState) -> None:
        machine = WizardStateMachine()
        while machine.next(valid_form):
            pass
        assert machine.is_last_step
        assert machine.current_step == 5
        assert machine.completed_steps == {0, 1, 2, 3, 4}

    def test_no_advance_past_last_step(self, valid_form: FormState) -> None:
        machine = WizardStateMachine(current_step=5, completed_steps={0, 1, 2, 3, 4})
        assert not machine.next(valid_form)
        assert machine.current_step == 5
        assert 5 not in machine.completed_steps

    def test_completed_implies_reached(self, valid_form: FormState) -> None:
        machine = WizardStateMachine()
        for _ in range(4):
            machine.next(valid_form)
            assert all(s < machine.current_step for s in machine.completed_steps)


class TestPrev:
    def test_keeps_completed_steps(self, valid_form: FormState) -> None:
        machine = WizardStateMachine()
        machine.next(valid_form)
        machine.next(valid_form)
        assert machine.prev()
        assert machine.current_step == 1
        assert machine.completed_steps == {0, 1}

    def test_noop_at_first_step(self) -> None:
        machine = WizardStateMachine()
        assert not machine.prev()
        assert machine.current_step == 0

    def test_prev_does_not_validate(self) -> None:
        machine = WizardStateMachine(current_step=2, completed_steps={0, 1})
        assert machine.prev()
        assert machine.current_step == 1


class TestGoTo:
    def test_jump_to_completed_step(self) -> None:
        machine = WizardStateMachine(current_step=2, completed_steps={0, 1})
        assert machine.go_to(0)
        assert machine.current_step == 0

    def test_blocked_to_unvisited_step(self) -> None:
        machine = WizardStateMachine(current_step=1, completed_steps={0})
        assert not machine.go_to(3)
        assert machine.current_step == 1

    def test_review_reachable_once_editable_steps_completed(self) -> None:
        machine = WizardStateMachine(current_step=0, completed_steps={0, 1, 2})
        assert machine.go_to(Step.REVIEW)
        assert machine.current_step == 3

    def test_review_blocked_when_content_incomplete(self) -> None:
        machine = WizardStateMachine(current_step=0, completed_steps={0, 1})
        assert not machine.go_to(Step.REVIEW)

    def test_test_step_needs_completion(self) -> None:
        machine = WizardStateMachine(current_step=3, completed_steps={0, 1, 2})
        assert not machine.go_to(Step.TEST)

    def test_same_step_is_noop(self) -> None:
        machine = WizardStateMachine(current_step=1, completed_steps={0, 1})
        assert not machine.go_to(1)

    @pytest.mark.parametrize("step", [-1, 6, 100])
    def test_out_of_range(self, step: int) -> None:
        machine = WizardStateMachine(current_step=3, completed_steps={0, 1, 2, 3, 4, 5})
        assert not machine.go_to(step)
        assert machine.current_step == 3

    def test_go_to_does_not_change_completed(self) -> None:
        machine = WizardStateMachine.for_edit()
        machine.go_to(1)
        assert machine.completed_steps == {0, 1, 2}


class TestEditNavigation:
    def test_edit_can_revisit_any_editable_step(self) -> None:
        machine = WizardStateMachine.for_edit()
        for step in (0, 1, 2):
            assert machine.go_to(step)
            assert machine.go_to(Step.REVIEW)

    def test_edit_advances_from_review(self, valid_form: FormState) -> None:
        machine = WizardStateMachine.for_edit()
        assert machine.next(valid_form)
        assert machine.current_step == 4
        assert machine.completed_steps == {0, 1, 2, 3}
