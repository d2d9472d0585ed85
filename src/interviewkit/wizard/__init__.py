"""interviewkit wizard — step-based configuration workflow for interviewers.

Validators and the step gate are pure; the state machine owns navigation;
initializers build create and edit sessions; the submission controller
sequences repository calls; drafts persist the in-progress create flow.

Public API:
    Models: FormState, StepDefinition, WizardProgress, DraftRecord,
            KnowledgeFile, Notification, Step, STEPS
    Validation: validate_field, validate_step, get_validation_message, step_errors
    Flow: WizardStateMachine, WizardSession, CreateInitializer, EditInitializer,
          BootstrapResult, SubmissionController, SubmissionResult
    Drafts: DraftStore, MemoryDraftStore, FileDraftStore, save_draft, load_draft,
            discard_draft
    Errors: WizardError, FetchError, LockedStateError, SubmissionError
"""

from interviewkit.wizard.drafts import (
    DraftStore,
    FileDraftStore,
    MemoryDraftStore,
    discard_draft,
    load_draft,
    save_draft,
)
from interviewkit.wizard.errors import FetchError, LockedStateError, SubmissionError, WizardError
from interviewkit.wizard.gate import get_validation_message, step_errors, validate_step
from interviewkit.wizard.initializers import (
    BootstrapOutcome,
    BootstrapResult,
    CreateInitializer,
    EditInitializer,
)
from interviewkit.wizard.machine import WizardStateMachine
from interviewkit.wizard.models import (
    DRAFT_KEY,
    STEPS,
    DraftRecord,
    FormState,
    KnowledgeFile,
    Notification,
    NotificationVariant,
    Step,
    StepDefinition,
    WizardProgress,
)
from interviewkit.wizard.session import WizardSession
from interviewkit.wizard.submission import SubmissionController, SubmissionOutcome, SubmissionResult
from interviewkit.wizard.validators import FIELD_VALIDATORS, validate_field

__all__ = [
    "DRAFT_KEY",
    "FIELD_VALIDATORS",
    "STEPS",
    "BootstrapOutcome",
    "BootstrapResult",
    "CreateInitializer",
    "DraftRecord",
    "DraftStore",
    "EditInitializer",
    "FetchError",
    "FileDraftStore",
    "FormState",
    "KnowledgeFile",
    "LockedStateError",
    "MemoryDraftStore",
    "Notification",
    "NotificationVariant",
    "Step",
    "StepDefinition",
    "SubmissionController",
    "SubmissionError",
    "SubmissionOutcome",
    "SubmissionResult",
    "WizardError",
    "WizardProgress",
    "WizardSession",
    "WizardStateMachine",
    "discard_draft",
    "get_validation_message",
    "load_draft",
    "save_draft",
    "step_errors",
    "validate_field",
    "validate_step",
]
