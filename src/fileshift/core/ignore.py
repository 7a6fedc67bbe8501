# src/fileshift/core/ignore.py
from pathlib import Path
from typing import List, Optional

import pathspec

from fileshift.core.sandbox import to_posix_path
from fileshift.errors import ChangeFileError


def load_protect_spec(ignore_file: Optional[Path], extra_patterns: Optional[List[str]] = None) -> pathspec.PathSpec:
    """
    Loads protected-path rules from an ignore file and creates a PathSpec object.
    A missing file is not an error: only the extra patterns apply then.
    """
    lines: List[str] = []

    if ignore_file is not None and ignore_file.exists():
        with open(ignore_file, "r", encoding="utf-8") as f:
            lines = f.readlines()

    if extra_patterns:
        lines.extend(extra_patterns)

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception as e:
        # pathspec raises plain ValueError/TypeError subclasses for bad patterns
        source = ignore_file.name if ignore_file is not None else "extra patterns"
        raise ChangeFileError(f"Error parsing ignore rules in {source}: {e}") from e


def is_path_protected(spec: pathspec.PathSpec, relative_path: str) -> bool:
    """Matches the change path, separator-normalized and without a leading './'."""
    normalized = to_posix_path(relative_path)
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return spec.match_file(normalized)
