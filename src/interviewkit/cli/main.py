"""interviewkit CLI application."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Annotated

import typer
from rich import print as rprint

import interviewkit as interviewkit_pkg

if TYPE_CHECKING:
    from interviewkit.config import WizardSettings


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    human = "human"
    json = "json"
    jsonl = "jsonl"


app = typer.Typer(
    name="interviewkit",
    help="Configure AI interviewers through a step-based wizard.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        rprint(f"interviewkit {interviewkit_pkg.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log workflow details to stderr."),
    ] = False,
) -> None:
    """interviewkit — configure AI interviewers through a step-based wizard."""
    from dotenv import load_dotenv
    from rich.logging import RichHandler

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _settings(data_dir: str | None) -> WizardSettings:
    from pathlib import Path

    from interviewkit.config import load_settings

    settings = load_settings()
    if data_dir:
        settings = settings.model_copy(update={"data_dir": Path(data_dir)})
    return settings


DataDirOption = Annotated[
    str | None,
    typer.Option("--data-dir", "-d", help="Data directory (default: $INTERVIEWKIT_HOME or .interviewkit)"),
]
FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Output format"),
]


@app.command("validate")
def validate(
    form_file: Annotated[str, typer.Argument(help="Path to the form JSON file")],
    step: Annotated[
        int | None,
        typer.Option("--step", "-s", min=0, max=5, help="Only report this step"),
    ] = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Validate a wizard form step by step."""
    from pathlib import Path

    from interviewkit.wizard.cli import validate_command

    exit_code = validate_command(form_file=Path(form_file), step=step, format=format.value)
    raise typer.Exit(exit_code)


@app.command("create")
def create(
    form_file: Annotated[str, typer.Argument(help="Path to the form JSON file")],
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Create an interviewer from a form file."""
    from pathlib import Path

    from interviewkit.wizard.cli import create_command

    exit_code = create_command(
        form_file=Path(form_file), settings=_settings(data_dir), format=format.value
    )
    raise typer.Exit(exit_code)


@app.command("edit")
def edit(
    interviewer_id: Annotated[str, typer.Argument(help="Interviewer to edit")],
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", help="field=value to change (repeatable)"),
    ] = None,
    discard: Annotated[
        bool,
        typer.Option("--discard", help="Discard the changes instead of saving"),
    ] = False,
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Edit an existing interviewer."""
    from interviewkit.wizard.cli import edit_command

    exit_code = edit_command(
        interviewer_id=interviewer_id,
        assignments=assignments or [],
        settings=_settings(data_dir),
        discard=discard,
        format=format.value,
    )
    raise typer.Exit(exit_code)


@app.command("archive")
def archive(
    interviewer_id: Annotated[str, typer.Argument(help="Interviewer to archive")],
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Archive an interviewer (locks it against editing)."""
    from interviewkit.wizard.cli import archive_command

    raise typer.Exit(archive_command(interviewer_id, settings=_settings(data_dir), format=format.value))


@app.command("list")
def list_interviewers(
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """List interviewers."""
    from interviewkit.wizard.cli import list_command

    raise typer.Exit(list_command(settings=_settings(data_dir), format=format.value))


draft_app = typer.Typer(help="Save, inspect, and discard the wizard draft.")
app.add_typer(draft_app, name="draft")


@draft_app.callback(invoke_without_command=True)
def draft(ctx: typer.Context) -> None:
    """Draft persistence tools."""
    if ctx.invoked_subcommand is None:
        rprint("Use [bold]interviewkit draft save|show|discard[/bold].")
        raise typer.Exit(0)


@draft_app.command("save")
def draft_save(
    form_file: Annotated[str, typer.Argument(help="Path to the form JSON file")],
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Save a form as the current draft."""
    from pathlib import Path

    from interviewkit.wizard.cli import draft_save_command

    exit_code = draft_save_command(
        form_file=Path(form_file), settings=_settings(data_dir), format=format.value
    )
    raise typer.Exit(exit_code)


@draft_app.command("show")
def draft_show(
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Show the current draft."""
    from interviewkit.wizard.cli import draft_show_command

    raise typer.Exit(draft_show_command(settings=_settings(data_dir), format=format.value))


@draft_app.command("discard")
def draft_discard(
    data_dir: DataDirOption = None,
    format: FormatOption = OutputFormat.human,
) -> None:
    """Delete the current draft."""
    from interviewkit.wizard.cli import draft_discard_command

    raise typer.Exit(draft_discard_command(settings=_settings(data_dir), format=format.value))
