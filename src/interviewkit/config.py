"""Workflow configuration.

Uses BaseModel (not BaseSettings), populated from environment variables by
load_settings(). The CLI loads a .env file before calling it.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_DATA_DIR = ".interviewkit"


class WizardSettings(BaseModel):
    """Settings for the configuration wizard and its local stores.

    data_dir holds the local repository and the draft store. The defaults
    seed every freshly started create flow.
    """

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    default_language: str = "en"
    default_voice: str = "alloy"
    default_duration: int = Field(default=20, ge=3, le=60)


def load_settings(root: Path | None = None) -> WizardSettings:
    """Build settings from INTERVIEWKIT_* environment variables.

    Args:
        root: Directory that a relative data_dir is resolved against
            (default: current working directory).

    Returns:
        WizardSettings with environment overrides applied.

    Raises:
        ValueError: If INTERVIEWKIT_DEFAULT_DURATION is not a valid duration.
    """
    base = root if root else Path.cwd()
    data_dir = Path(os.environ.get("INTERVIEWKIT_HOME", DEFAULT_DATA_DIR))
    if not data_dir.is_absolute():
        data_dir = base / data_dir

    values: dict[str, object] = {"data_dir": data_dir}
    if language := os.environ.get("INTERVIEWKIT_DEFAULT_LANGUAGE"):
        values["default_language"] = language
    if voice := os.environ.get("INTERVIEWKIT_DEFAULT_VOICE"):
        values["default_voice"] = voice
    if duration := os.environ.get("INTERVIEWKIT_DEFAULT_DURATION"):
        values["default_duration"] = duration

    try:
        return WizardSettings.model_validate(values)
    except Exception as e:
        raise ValueError(f"Invalid interviewkit settings: {e}") from e
