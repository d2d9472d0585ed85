"""Wizard errors.

Validation problems are never raised; they live in the field error map.
These exceptions cover the async operations and are converted into a single
Notification at the boundary of the operation that raised them.
"""

from __future__ import annotations


class WizardError(Exception):
    """Base error for wizard operations."""

    def __init__(self, message: str) -> None:
        """Initialize WizardError with a message."""
        self.message = message
        super().__init__(message)


class FetchError(WizardError):
    """The interviewer being edited could not be loaded."""

    def __init__(self, message: str, not_found: bool = False) -> None:
        """Initialize FetchError; not_found marks a lookup that returned nothing."""
        self.not_found = not_found
        super().__init__(message)


class LockedStateError(WizardError):
    """The interviewer is in a lifecycle state that forbids editing."""


class SubmissionError(WizardError):
    """A create or update call failed part-way through submission."""

    def __init__(self, message: str, call: str) -> None:
        """Initialize SubmissionError with the name of the failing call."""
        self.call = call
        super().__init__(message)
