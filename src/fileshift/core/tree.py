# src/fileshift/core/tree.py
import posixpath
from typing import Dict, Iterable
from pathlib import PurePosixPath

from fileshift.core.sandbox import to_posix_path
from fileshift.models import FileOperationResult


def generate_change_tree(operations: Iterable[FileOperationResult], root_name: str) -> str:
    """Generates a tree of the touched paths, each file tagged with its status."""
    tree_dict: Dict = {}
    statuses: Dict[tuple, str] = {}
    for op in operations:
        parts = PurePosixPath(posixpath.normpath(to_posix_path(op.change.path))).parts
        if not parts:
            continue
        current_level = tree_dict
        for part in parts:
            current_level = current_level.setdefault(part, {})
        # Later changes to the same path win, matching the order they ran in
        statuses[parts] = op.status

    lines = [f"{root_name}/"]

    def _generate_lines_recursive(subtree: Dict, prefix: str, trail: tuple):
        entries = sorted(subtree.items())
        for i, (name, content) in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            key = trail + (name,)
            label = f"{name} [{statuses[key]}]" if key in statuses else name
            lines.append(f"{prefix}{connector}{label}")

            if content:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(content, new_prefix, key)

    _generate_lines_recursive(tree_dict, "", ())
    return "\n".join(lines) + "\n"
