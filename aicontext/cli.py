"""CLI entrypoint for aicontext."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .builder import generate_context
from .config import ConfigError, load_config
from .dependencies import ManifestError
from .logging import configure_logging
from .paths import PathListNotFoundError
from .reporter import build_report, format_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aicontext",
        description="Aggregate project and vendored sources into context files for LLM chats.",
    )
    parser.add_argument(
        "paths_file",
        nargs="?",
        default=None,
        help="Optional text file listing extra files or directories, one per line.",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--only-listed",
        action="store_true",
        help="Scan only the paths named in PATHS_FILE instead of the default roots.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log every skipped, truncated and written file.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and skip the completion summary.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a debug-level log of the run to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for aicontext."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.only_listed and not args.paths_file:
        parser.error("--only-listed requires PATHS_FILE")

    root = Path(args.root).expanduser()
    if not root.is_dir():
        parser.exit(1, f"Project root is not a directory: {args.root}\n")

    try:
        config = load_config(root)
        result = generate_context(config, args.paths_file, only_listed=bool(args.only_listed))
    except PathListNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ManifestError) as exc:
        parser.exit(1, f"aicontext failed: {exc}\nRun with --verbose for more details.\n")

    if args.quiet:
        return
    report = build_report(result.primary_outputs, result.dependency_outputs, result.block_counts)
    print()
    print(format_report(report))


if __name__ == "__main__":
    main(sys.argv[1:])
