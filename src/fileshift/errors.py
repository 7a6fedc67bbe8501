# src/fileshift/errors.py
from pathlib import Path
from typing import Optional, Union


class FileEngineError(Exception):
    """Base class for every failure raised by fileshift."""


class InvalidPathError(FileEngineError):
    """A change targets a path outside of the project root."""

    def __init__(self, path: str, root_dir: Optional[Union[str, Path]] = None):
        self.path = path
        self.root_dir = root_dir
        super().__init__(f"File path is invalid or out of project root: {path}")


class FileSystemOperationError(FileEngineError):
    """A write or delete failed for a reason other than a missing file on delete."""

    def __init__(self, path: Union[str, Path], operation: str):
        self.path = Path(path)
        self.operation = operation
        super().__init__(f"Failed to {operation} file: {path}")

    @property
    def cause(self) -> Optional[BaseException]:
        # Set by `raise ... from exc` at the filesystem seam
        return self.__cause__


class ChangeFileError(FileEngineError):
    """A change file could not be loaded or has the wrong shape."""
