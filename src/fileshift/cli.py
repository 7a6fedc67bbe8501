# src/fileshift/cli.py
import sys
import argparse
import json
import logging
import os
from pathlib import Path

# Module imports
from fileshift.config import DEFAULT_PROTECTED_PATTERNS, IGNORE_FILENAME, REPORT_INDENT, REVIEW_TABLE_SIZE
from fileshift.core.engine import apply_changes
from fileshift.core.ignore import load_protect_spec
from fileshift.core.tree import generate_change_tree
from fileshift.errors import FileEngineError, FileSystemOperationError, InvalidPathError
from fileshift.loader import load_changes
from fileshift.logging_setup import configure_logging
from fileshift.models import ApplySummary
from fileshift.utils.tokenizer import rank_writes


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="fileshift",
        description="Apply an agent's declarative file changes to a project, safely sandboxed to its root."
    )
    parser.add_argument("changes_file", type=str, help="Change file (JSON or YAML)")
    parser.add_argument("-r", "--root", type=str, default=os.getcwd(), help="Project root directory")
    parser.add_argument("-w", "--write", action="store_true", help="Apply changes (default: dry-run mode)")
    parser.add_argument("--no-trace", dest="trace", action="store_false", help="Suppress per-change output")
    parser.add_argument("--yaml", action="store_true", help="Parse the change file as YAML whatever its extension")
    parser.add_argument(
        "--ignore-file",
        type=str,
        default=None,
        help=f"Protected-path rules (default: {{root}}/{IGNORE_FILENAME})"
    )
    parser.add_argument("--no-protect", dest="protect", action="store_false", help="Do not apply any protected-path rules")
    parser.add_argument("--report", type=str, default=None, help="Write the JSON summary to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_review_table(summary: ApplySummary) -> None:
    """Lists the largest writes by estimated tokens."""
    sized = rank_writes(summary.operations)
    if not sized:
        return

    print(f"\n--- Top {REVIEW_TABLE_SIZE} Largest Writes (Est. Tokens) ---")
    print(f"{'Rank':<5} | {'Tokens':<10} | {'Status':<8} | {'File Path'}")
    print("-" * 60)
    for i, (tokens, op) in enumerate(sized[:REVIEW_TABLE_SIZE]):
        print(f"{i+1:<5} | {tokens:<10} | {op.status:<8} | {op.change.path}")
    print("-" * 60)
    print(f"Total tokens: {sum(tokens for tokens, _ in sized)}")


def print_summary(summary: ApplySummary, root_dir: Path) -> None:
    counts = summary.counts
    mode_label = "DRY-RUN (no files written)" if summary.dry_run else "WRITE MODE (changes applied)"

    print(f"Mode: {mode_label}")
    print(
        f"File operations - created: {counts['created']}, updated: {counts['updated']}, "
        f"deleted: {counts['deleted']}, skipped: {counts['skipped']}"
    )

    if not summary.operations:
        print("No file operations in change file.")
        return

    print_review_table(summary)
    print()
    print(generate_change_tree(summary.operations, root_dir.name or "project"), end="")

    if summary.dry_run:
        print("\nRe-run with --write to apply these changes.")


def write_report(report_path: Path, summary: ApplySummary) -> None:
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(summary.to_dict(), f, indent=REPORT_INDENT, ensure_ascii=False)
        f.write("\n")


def main(argv=None) -> int:
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)

        configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

        root_dir = Path(args.root).expanduser().resolve()
        if not root_dir.is_dir():
            print(f"Error: Invalid directory '{root_dir}'", file=sys.stderr)
            return 1

        print(f"--- fileshift ---")
        print(f"Change file:    {args.changes_file}")
        print(f"Root directory: {root_dir}")
        print(f"Write mode:     {'enabled' if args.write else 'disabled (dry-run)'}")
        print(f"Trace output:   {'enabled' if args.trace else 'disabled'}")
        print()

        # 2. Inputs
        changes = load_changes(args.changes_file, force_yaml=args.yaml)

        protect = None
        if args.protect:
            ignore_file = Path(args.ignore_file) if args.ignore_file else root_dir / IGNORE_FILENAME
            protect = load_protect_spec(ignore_file, extra_patterns=list(DEFAULT_PROTECTED_PATTERNS))

        # 3. Apply
        print("=== APPLYING FILE CHANGES ===")
        on_event = print if args.trace else None
        summary = apply_changes(
            changes,
            root_dir,
            dry_run=not args.write,
            on_event=on_event,
            protect=protect,
        )

        # 4. Report
        print_summary(summary, root_dir)

        if args.report:
            try:
                write_report(Path(args.report), summary)
                print(f"\nReport written to: {args.report}")
            except OSError as e:
                print(f"Error writing report: {e}", file=sys.stderr)
                return 1

        return 0

    except KeyboardInterrupt:
        print("\nCancelled.")
        return 1

    except InvalidPathError as e:
        print(f"Error: [invalid path] {e}", file=sys.stderr)
        return 1

    except FileSystemOperationError as e:
        print(f"Error: [filesystem] {e} ({e.cause})", file=sys.stderr)
        return 1

    except FileEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
