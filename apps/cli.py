"""Command-line entry point for sanitize-fs.

Installed as the ``sanitize-fs`` console script, with shell auto-completion
via ``argcomplete``.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import argcomplete

from common.base.logging import get_logger, normalize_use_rich, setup_logging
from common.shared.loader import load_task_config
from sanitize import sanitize_paths

TASK_NAME = "sanitize_fs"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DESCRIPTION = """\
Sanitize file and directory names recursively, according to UNIX and URL standards.
Give it a PATH, a RELATIVE PATH or an INDIVIDUAL FILE.
Names become lowercase letters, digits and single underscores; file extensions are kept as is.
Use the dry run to see how the names would change.
SYSTEM files and DOTFILES are protected."""

EXAMPLES = """\
examples:
  %(prog)s EXAMPLE_DIR
  %(prog)s --dry-run "/home/username/EXAMPLE DIR"
  %(prog)s "VIDEO FILE.mkv" "PICTURE.jpg" "DIRECTORY"
  %(prog)s --config sanitize.yaml"""

log = get_logger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sanitize-fs",
        description=DESCRIPTION,
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Directories or files to sanitize.")
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Print the renames that would happen and exit. Do not rename anything.",
    )
    parser.add_argument("-c", "--config", help="Path to an optional YAML configuration.")
    parser.add_argument(
        "-w",
        "--workers",
        type=_positive_int,
        help="Number of rename workers (defaults to the number of CPUs).",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while scanning.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity on stderr (default: WARNING).",
    )
    argcomplete.autocomplete(parser)
    return parser


def is_superuser() -> bool:
    getuid = getattr(os, "getuid", None)
    return getuid is not None and getuid() == 0


def _load_task_payload(
    parser: argparse.ArgumentParser,
    config_arg: Optional[str],
) -> tuple[Dict[str, Any], Dict[str, Any]]:
    if not config_arg:
        return {}, {}
    try:
        raw = load_task_config(TASK_NAME, Path(config_arg).expanduser())
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    payload: Dict[str, Any] = dict(raw)
    logging_cfg = payload.pop("__logging__", {}) or {}
    return payload, logging_cfg


def _configure_logging(logging_cfg: Dict[str, Any], level_override: Optional[str]) -> None:
    setup_logging(
        level=level_override or logging_cfg.get("level"),
        use_rich=normalize_use_rich(logging_cfg.get("use_rich")),
        log_dir=logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )


def cli_sanitize_fs(argv: Optional[Iterable[str]] = None) -> int:
    if is_superuser():
        print("No root usage.", file=sys.stderr)
        return 1

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    cfg, logging_cfg = _load_task_payload(parser, args.config)
    _configure_logging(logging_cfg, args.log_level)

    paths: List[str] = list(args.paths) or list(cfg.get("roots") or [])
    if not paths:
        parser.print_help()
        return 0

    dry_run = args.dry_run or bool(cfg.get("dry_run", False))
    workers = args.workers or cfg.get("workers")
    include_progress = args.progress or bool(cfg.get("progress", False))

    log.debug(f"Arguments: {args}")
    sanitize_paths(
        paths,
        dry_run=dry_run,
        workers=workers,
        include_progress=include_progress,
    )
    return 0


def main() -> None:
    try:
        exit_code = cli_sanitize_fs()
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
