# src/fileshift/core/engine.py
import logging
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Union

import pathspec

from fileshift.core.filesystem import delete_file_safe, write_file_safe
from fileshift.core.ignore import is_path_protected
from fileshift.core.sandbox import canonical_root, resolve_project_path
from fileshift.models import ApplySummary, FileChange, FileOperationResult

logger = logging.getLogger(__name__)

EventCallback = Callable[[str], None]

MISSING_CONTENT = "missing_content"
PROTECTED = "protected"
WRITE = "write"
DELETE = "delete"
NOOP = "noop"

# outcome -> (status or None to use the requested action, dry-run message, write message)
OUTCOMES = {
    MISSING_CONTENT: ("skipped", "Missing content for create/update action.", "Missing content for create/update action."),
    PROTECTED: ("skipped", "Path is protected by ignore rules.", "Path is protected by ignore rules."),
    WRITE: (None, "Dry-run: file would be written.", "File written successfully."),
    DELETE: ("deleted", "Dry-run: file would be deleted.", "File deleted (or already absent)."),
    NOOP: ("skipped", "No action (noop).", "No action (noop)."),
}

WRITE_STATUSES = {"create": "created", "update": "updated"}


def classify(change: FileChange, protected: bool = False) -> str:
    """Maps a change and its preconditions to one of the OUTCOMES keys."""
    if change.action in WRITE_STATUSES and not isinstance(change.content, str):
        return MISSING_CONTENT
    if protected:
        return PROTECTED
    if change.action in WRITE_STATUSES:
        return WRITE
    if change.action == "delete":
        return DELETE
    return NOOP


class ChangeApplier:
    """Applies (or simulates) a batch of changes against one project root."""

    def __init__(
        self,
        root_dir: Union[str, Path],
        dry_run: bool = False,
        on_event: Optional[EventCallback] = None,
        protect: Optional[pathspec.PathSpec] = None,
    ):
        self.root_dir = canonical_root(root_dir)
        self.dry_run = dry_run
        self.on_event = on_event
        self.protect = protect

    def _emit(self, message: str) -> None:
        logger.debug(message)
        if self.on_event is not None:
            self.on_event(message)

    def _result(self, change: FileChange, outcome: str) -> FileOperationResult:
        status, dry_message, write_message = OUTCOMES[outcome]
        if status is None:
            status = WRITE_STATUSES[change.action]
        return FileOperationResult(
            change=change,
            status=status,
            message=dry_message if self.dry_run else write_message,
        )

    def apply_one(self, change: FileChange) -> FileOperationResult:
        # Missing content is decided before the path is even looked at
        if classify(change) == MISSING_CONTENT:
            return self._result(change, MISSING_CONTENT)

        target = resolve_project_path(self.root_dir, change.path)
        protected = self.protect is not None and is_path_protected(
            self.protect, target.relative_to(self.root_dir).as_posix()
        )
        outcome = classify(change, protected)

        if outcome == WRITE:
            if not self.dry_run:
                write_file_safe(target, change.content)
            self._emit(f"{change.action.upper()}: {change.path}")
        elif outcome == DELETE:
            if not self.dry_run:
                delete_file_safe(target)
            self._emit(f"DELETE: {change.path}")
        elif outcome == PROTECTED:
            self._emit(f"SKIP (protected): {change.path}")
        else:
            self._emit(f"SKIP (noop): {change.path}")

        return self._result(change, outcome)

    def apply(self, changes: Iterable[Union[FileChange, Mapping]]) -> ApplySummary:
        operations = []
        for change in changes:
            if not isinstance(change, FileChange):
                change = FileChange.from_dict(change)
            operations.append(self.apply_one(change))
        return ApplySummary.from_operations(operations, dry_run=self.dry_run)


def apply_changes(
    changes: Iterable[Union[FileChange, Mapping]],
    root_dir: Union[str, Path],
    *,
    dry_run: bool = False,
    on_event: Optional[EventCallback] = None,
    protect: Optional[pathspec.PathSpec] = None,
) -> ApplySummary:
    """
    Applies the changes in input order and returns the summary.

    InvalidPathError and FileSystemOperationError propagate and abort the
    whole batch; no partial summary is returned. Changes already written
    before the failure stay on disk.
    """
    applier = ChangeApplier(root_dir, dry_run=dry_run, on_event=on_event, protect=protect)
    return applier.apply(changes)
