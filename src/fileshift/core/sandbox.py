# src/fileshift/core/sandbox.py
import os
from pathlib import Path
from typing import Union

from fileshift.errors import InvalidPathError


def to_posix_path(file_path: str) -> str:
    """Converts Windows-style separators so both conventions behave the same on any host."""
    return file_path.replace("\\", "/")


def canonical_root(root_dir: Union[str, Path]) -> Path:
    return Path(root_dir).expanduser().resolve()


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def resolve_project_path(root_dir: Union[str, Path], relative_path: str) -> Path:
    """
    Resolves a project-relative path to an absolute path inside root_dir.

    '.' and '..' are collapsed lexically, so the returned path still names a
    symlink rather than its target: 'a/../b.txt' and '..file.txt' stay inside
    the root, while '../x', 'a/../../b' and '/etc/passwd' raise
    InvalidPathError. The path is also checked once symlinks are followed,
    which rejects links that lead out of the root. The root itself is accepted.
    """
    root = canonical_root(root_dir)
    try:
        candidate = Path(os.path.normpath(root / to_posix_path(relative_path)))
        followed = candidate.resolve()
    except (ValueError, OSError, RuntimeError) as e:
        # e.g. embedded null bytes, symlink loops
        raise InvalidPathError(relative_path, root) from e

    if not _is_within(candidate, root) or not _is_within(followed, root):
        raise InvalidPathError(relative_path, root)
    return candidate
