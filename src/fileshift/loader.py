# src/fileshift/loader.py
import json
from pathlib import Path
from typing import Any, List, Union

import yaml

from fileshift.errors import ChangeFileError
from fileshift.models import FileChange

YAML_EXTENSIONS = {".yaml", ".yml"}


def _parse(path: Path, force_yaml: bool) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ChangeFileError(f"Failed to read change file {path}: {e}") from e

    extension = path.suffix.lower()
    try:
        if force_yaml or extension in YAML_EXTENSIONS:
            return yaml.safe_load(text)
        if extension == ".json":
            return json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ChangeFileError(f"Failed to parse {extension or 'change'} file: {e}") from e

    raise ChangeFileError(
        f"Unsupported file format: {extension or '(none)'}. Supported formats: .json, .yaml, .yml"
    )


def load_changes(file_path: Union[str, Path], *, force_yaml: bool = False) -> List[FileChange]:
    """
    Loads the change list from a JSON or YAML file.

    The document is either a list of change records or a mapping with a
    "files" list (the shape agents return). Only the structure is checked
    here; missing content is left for the engine to skip.
    """
    path = Path(file_path).expanduser().resolve()
    if not path.is_file():
        raise ChangeFileError(f"Change file not found: {path}")

    data = _parse(path, force_yaml)

    if isinstance(data, dict):
        if "files" not in data:
            raise ChangeFileError('Change file must contain a "files" array')
        data = data["files"]
    if not isinstance(data, list):
        raise ChangeFileError('Change file must contain a "files" array')

    changes: List[FileChange] = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ChangeFileError(f"Change #{index} must be a mapping, got {type(record).__name__}")
        for key in ("path", "action"):
            if not isinstance(record.get(key), str):
                raise ChangeFileError(f'Change #{index} must contain a string "{key}" field')
        changes.append(FileChange.from_dict(record))
    return changes
