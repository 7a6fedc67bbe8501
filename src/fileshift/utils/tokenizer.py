# src/fileshift/utils/tokenizer.py
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

import tiktoken

from fileshift.models import FileOperationResult

WRITE_STATUSES = ("created", "updated")


@lru_cache(maxsize=1)
def get_encoding() -> Optional["tiktoken.Encoding"]:
    """Loads the BPE encoding once. None when it cannot be fetched (offline runs)."""
    for name in ("cl100k_base", "p50k_base"):
        try:
            return tiktoken.get_encoding(name)
        except (OSError, ValueError):
            # network failures surface as OSError, unknown or corrupt encodings as ValueError
            continue
    return None


def estimate_tokens(text: str) -> int:
    encoding = get_encoding()
    if encoding is None:
        return len(text) // 4
    return len(encoding.encode(text))


def rank_writes(operations: Iterable[FileOperationResult]) -> List[Tuple[int, FileOperationResult]]:
    """Pairs every create/update result with its content size, largest first."""
    sized = [
        (estimate_tokens(op.change.content), op)
        for op in operations
        if op.status in WRITE_STATUSES
    ]
    sized.sort(key=lambda x: x[0], reverse=True)
    return sized
