# src/fileshift/core/filesystem.py
from pathlib import Path

from fileshift.errors import FileSystemOperationError


def ensure_directory_exists(file_path: Path) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)


def write_file_safe(file_path: Path, content: str) -> None:
    """Writes the full content, creating parent directories and overwriting any existing file."""
    try:
        ensure_directory_exists(file_path)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FileSystemOperationError(file_path, "write") from e


def delete_file_safe(file_path: Path) -> None:
    """Removes the file. A file that is already gone counts as deleted."""
    try:
        file_path.unlink()
    except FileNotFoundError:
        return
    except OSError as e:
        raise FileSystemOperationError(file_path, "delete") from e
