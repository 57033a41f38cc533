"""Load recordings files from a local file or stdin.

A recordings file is JSON or YAML whose top level is either a list of
serialised :class:`~apidox.models.Interaction` objects or a mapping with an
``interactions`` list (the shape written by
:meth:`~apidox.recorder.Recorder.dump_interactions`). The format is detected
from the file extension, falling back to trying JSON and then YAML.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from apidox.exceptions import RecordingParseError
from apidox.models import Interaction


def load_recordings(source: str) -> list[Interaction]:
    """Load and validate the interactions stored in *source*.

    Args:
        source: A file path, or ``-`` for stdin.

    Returns:
        The interactions in file order.

    Raises:
        RecordingParseError: If the source cannot be read, parsed, or
            validated.
    """
    if source == "-":
        raw = _load_from_stdin()
    else:
        raw = _load_from_file(source)
    return parse_interactions(raw)


def parse_interactions(raw: Any) -> list[Interaction]:
    """Validate already-parsed recordings data into :class:`Interaction` objects.

    Raises:
        RecordingParseError: If *raw* has the wrong shape or an entry fails
            validation. The message names the offending entry's index.
    """
    if isinstance(raw, dict):
        raw = raw.get("interactions")
    if not isinstance(raw, list):
        raise RecordingParseError(
            "Recordings must be a list of interactions or an object with an 'interactions' list"
        )

    interactions: list[Interaction] = []
    for index, entry in enumerate(raw):
        try:
            interactions.append(Interaction.model_validate(entry))
        except ValidationError as exc:
            raise RecordingParseError(f"Invalid interaction at index {index}: {exc}") from exc
    return interactions


def _load_from_stdin() -> Any:
    """Read recordings from stdin.

    Raises:
        RecordingParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise RecordingParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise RecordingParseError("No input received from stdin")

    return _parse_content(content)


def _load_from_file(path: str) -> Any:
    """Load recordings from a local file.

    Raises:
        RecordingParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise RecordingParseError(f"Recordings file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordingParseError(f"Failed to read recordings file {path}: {exc}") from exc

    if not content.strip():
        raise RecordingParseError(f"Recordings file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> Any:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        RecordingParseError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise RecordingParseError(f"Invalid JSON: {exc}") from exc

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse recordings as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise RecordingParseError(msg)
