# src/fileshift/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from fileshift.config import STATUSES

_KNOWN_FIELDS = ("path", "action", "content")


@dataclass(frozen=True)
class FileChange:
    """A single requested change, as produced by the upstream planner.

    ``content`` is ``None`` when the record carried no content at all; an
    empty string is real content. Fields the engine does not know about are
    kept in ``extra`` and handed back untouched by ``to_dict``.
    """
    path: str
    action: str
    content: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileChange":
        extra = {k: v for k, v in data.items() if k not in _KNOWN_FIELDS}
        return cls(
            path=data["path"],
            action=data["action"],
            content=data.get("content"),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path, "action": self.action}
        if self.content is not None:
            data["content"] = self.content
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class FileOperationResult:
    """Outcome decided by the engine for one change."""
    change: FileChange
    status: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"change": self.change.to_dict(), "status": self.status, "message": self.message}


@dataclass(frozen=True)
class ApplySummary:
    operations: Tuple[FileOperationResult, ...]
    dry_run: bool
    counts: Dict[str, int]

    @classmethod
    def from_operations(cls, operations, dry_run: bool) -> "ApplySummary":
        counts = {status: 0 for status in STATUSES}
        for op in operations:
            counts[op.status] += 1
        return cls(operations=tuple(operations), dry_run=dry_run, counts=counts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operations": [op.to_dict() for op in self.operations],
            "dryRun": self.dry_run,
            "counts": dict(self.counts),
        }
