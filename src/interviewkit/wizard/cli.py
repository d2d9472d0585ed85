"""CLI commands for the interviewer configuration wizard."""

import asyncio
import json
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from interviewkit.config import WizardSettings
from interviewkit.repository.local import LocalRepository
from interviewkit.wizard.drafts import FileDraftStore, discard_draft, load_draft, save_draft
from interviewkit.wizard.gate import get_validation_message, step_errors, validate_step
from interviewkit.wizard.initializers import CreateInitializer, EditInitializer
from interviewkit.wizard.models import EDITABLE_STEPS, STEPS, FormState, Notification, Step
from interviewkit.wizard.session import WizardSession
from interviewkit.wizard.submission import SubmissionController

console = Console()


def load_form_file(path: Path) -> FormState:
    """Read a wizard form from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or doesn't match the form schema.
    """
    if not path.exists():
        raise FileNotFoundError(f"Form file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in form file: {e}") from e

    try:
        return FormState.model_validate(data)
    except Exception as e:
        raise ValueError(f"Form file doesn't match the wizard form schema: {e}") from e


def _session_from_form(form: FormState, settings: WizardSettings) -> WizardSession:
    """Start a create session and enter the form through the field setters."""
    session = CreateInitializer(settings).start()
    session.update(**{field: getattr(form, field) for field in form.model_fields_set})
    return session


def _print_error(message: str, format: str) -> None:
    if format == "human":
        console.print(f"[red]Error:[/red] {message}")
    else:
        print(json.dumps({"error": message}))


def _print_notification(notification: Notification | None) -> None:
    if notification is None:
        return
    style = "red" if notification.is_error else "green"
    console.print(
        Panel(notification.description or notification.title, title=notification.title, border_style=style)
    )


def validate_command(form_file: Path, step: int | None = None, format: str = "human") -> int:
    """Report step validation for a form file.

    Args:
        form_file: Path to the form JSON file.
        step: Report only this step's fields (default: every step).
        format: Output format: "human", "json", or "jsonl".

    Returns:
        Exit code (0 = steps pass, 1 = a step fails or error).
    """
    try:
        form = load_form_file(form_file)
    except (FileNotFoundError, ValueError) as e:
        _print_error(str(e), format)
        return 1

    steps = [STEPS[step]] if step is not None else list(STEPS)
    report = [
        {
            "step": s.ordinal,
            "id": s.id,
            "passed": validate_step(s.ordinal, form),
            "message": get_validation_message(s.ordinal, form),
            "errors": {k: v for k, v in step_errors(s.ordinal, form).items() if v},
        }
        for s in steps
    ]

    if format == "json":
        print(json.dumps(report, indent=2))
    elif format == "jsonl":
        for entry in report:
            print(json.dumps(entry))
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Step", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Message")
        for s, entry in zip(steps, report, strict=True):
            status = "[green]✓ pass[/green]" if entry["passed"] else "[red]✗ fail[/red]"
            table.add_row(f"{s.ordinal}. {s.title}", status, str(entry["message"]))
        console.print(table)

    if step is not None:
        return 0 if report[0]["passed"] else 1
    submittable = all(validate_step(s, form) for s in EDITABLE_STEPS)
    return 0 if submittable else 1


def create_command(form_file: Path, settings: WizardSettings, format: str = "human") -> int:
    """Create an interviewer from a form file in the local repository.

    Returns:
        Exit code (0 = created, 1 = rejected, failed, or error).
    """
    try:
        form = load_form_file(form_file)
    except (FileNotFoundError, ValueError) as e:
        _print_error(str(e), format)
        return 1

    session = _session_from_form(form, settings)
    while session.current_step < Step.REVIEW and session.next():
        pass

    controller = SubmissionController(LocalRepository(settings.data_dir))
    result = asyncio.run(controller.submit(session))

    if format == "human":
        _print_notification(result.notification)
        if result.interviewer_id:
            console.print(f"Interviewer: [cyan]{result.interviewer_id}[/cyan]")
    else:
        print(result.model_dump_json(indent=2 if format == "json" else None))
    return 0 if result.succeeded else 1


def _parse_assignments(assignments: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for assignment in assignments:
        field, sep, value = assignment.partition("=")
        if not sep or not field.strip():
            raise ValueError(f"Expected field=value, got: {assignment}")
        values[field.strip()] = value
    return values


def edit_command(
    interviewer_id: str,
    assignments: list[str],
    settings: WizardSettings,
    discard: bool = False,
    format: str = "human",
) -> int:
    """Load an interviewer, apply field changes, and save them.

    Args:
        interviewer_id: Interviewer to edit.
        assignments: field=value pairs applied through the form setters.
        settings: Wizard settings (data directory).
        discard: Walk away from the edits instead of saving them.
        format: Output format: "human", "json", or "jsonl".

    Returns:
        Exit code (0 = saved, discarded, or unchanged; 1 = failure).
    """
    repository = LocalRepository(settings.data_dir)
    loaded = asyncio.run(EditInitializer(repository, settings).load(interviewer_id))
    if not loaded.is_ready or loaded.session is None:
        if format == "human":
            _print_notification(loaded.notification)
        else:
            print(loaded.model_dump_json(exclude={"session"}))
        return 1

    session = loaded.session
    try:
        errors = session.update(**_parse_assignments(assignments))
    except (KeyError, ValueError) as e:
        _print_error(str(e), format)
        return 1

    changed = session.changed_fields()
    if not changed:
        if format == "human":
            console.print("[dim]No changes to save.[/dim]")
        else:
            print(json.dumps({"changed": []}))
        return 0

    if discard:
        if not session.request_leave():
            session.confirm_leave()
        if format == "human":
            console.print(f"[yellow]Discarded {len(changed)} unsaved change(s).[/yellow]")
        else:
            print(json.dumps({"discarded": changed}))
        return 0

    result = asyncio.run(SubmissionController(repository).submit(session))
    if format == "human":
        for field, error in errors.items():
            if error:
                console.print(f"[red]{field}:[/red] {error}")
        console.print(f"Changed: {', '.join(changed)}")
        _print_notification(result.notification)
    else:
        print(result.model_dump_json(indent=2 if format == "json" else None))
    return 0 if result.succeeded else 1


def archive_command(interviewer_id: str, settings: WizardSettings, format: str = "human") -> int:
    """Archive an interviewer so it can no longer be edited."""
    repository = LocalRepository(settings.data_dir)
    try:
        archived = asyncio.run(repository.archive_interviewer(interviewer_id))
    except Exception as e:
        _print_error(str(e), format)
        return 1
    if format == "human":
        console.print(f"[green]✓[/green] Archived [cyan]{archived.id}[/cyan]")
    else:
        print(archived.model_dump_json())
    return 0


def list_command(settings: WizardSettings, format: str = "human") -> int:
    """List interviewers in the local repository."""
    interviewers = LocalRepository(settings.data_dir).list_interviewers()
    if format != "human":
        print(json.dumps([i.model_dump(mode="json") for i in interviewers], indent=2))
        return 0
    if not interviewers:
        console.print("[dim]No interviewers yet.[/dim]")
        return 0
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Archetype")
    table.add_column("Status")
    for interviewer in interviewers:
        table.add_row(
            interviewer.id,
            interviewer.title,
            interviewer.archetype.value if interviewer.archetype else "-",
            interviewer.status.value,
        )
    console.print(table)
    return 0


def draft_save_command(form_file: Path, settings: WizardSettings, format: str = "human") -> int:
    """Save a form file as the current draft."""
    try:
        form = load_form_file(form_file)
    except (FileNotFoundError, ValueError) as e:
        _print_error(str(e), format)
        return 1

    session = _session_from_form(form, settings)
    while session.current_step < Step.REVIEW and session.next():
        pass
    notification = save_draft(session, FileDraftStore(settings.data_dir))
    if format == "human":
        _print_notification(notification)
    else:
        print(notification.model_dump_json())
    return 1 if notification.is_error else 0


def draft_show_command(settings: WizardSettings, format: str = "human") -> int:
    """Show the saved draft and where it would resume."""
    record = load_draft(FileDraftStore(settings.data_dir))
    if record is None:
        if format == "human":
            console.print("[dim]No draft saved.[/dim]")
        else:
            print(json.dumps({"draft": None}))
        return 1

    session = CreateInitializer(settings).resume(record)
    if format != "human":
        print(session.to_draft().model_dump_json(indent=2 if format == "json" else None))
        return 0

    step = STEPS[session.current_step]
    completed = ", ".join(STEPS[s].title for s in sorted(session.machine.completed_steps)) or "none"
    lines = [
        f"Title: {record.form.title or '-'}",
        f"Resumes at: {step.ordinal}. {step.title}",
        f"Completed: {completed}",
    ]
    if message := session.validation_message():
        lines.append(f"[yellow]{message}[/yellow]")
    console.print(Panel("\n".join(lines), title="Draft", border_style="blue"))
    return 0


def draft_discard_command(settings: WizardSettings, format: str = "human") -> int:
    """Delete the saved draft."""
    removed = discard_draft(FileDraftStore(settings.data_dir))
    if format == "human":
        console.print("[green]Draft discarded.[/green]" if removed else "[dim]No draft saved.[/dim]")
    else:
        print(json.dumps({"discarded": removed}))
    return 0
