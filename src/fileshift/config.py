# src/fileshift/config.py

ACTIONS = ("create", "update", "delete", "noop")

STATUSES = ("created", "updated", "deleted", "skipped")

IGNORE_FILENAME = ".applyignore"

DEFAULT_PROTECTED_PATTERNS = [
    "# Default protected patterns",
    ".git/",
    IGNORE_FILENAME,
]

REPORT_INDENT = 2

# Rows shown in the CLI review table
REVIEW_TABLE_SIZE = 10
