"""Command-line front door for hotmanim.

Parses CLI options, resolves the directory to watch, loads config, and sets
up logging before dispatching into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .errors import WatchError
from .runtime import run_app
from .runtime.config import load_config
from .runtime.logs import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hm",
        description="Re-render manim scenes on save and show the renderer output live.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory to watch for .py changes. Defaults to current directory.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Minimum level written to the log file.",
    )
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the watcher UI on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    if default_path is None:
        default_path = Path.cwd()
    directory = Path(args.directory or default_path).expanduser().resolve()
    if not directory.exists():
        raise SystemExit(f"Path not found: {directory}")
    if not directory.is_dir():
        raise SystemExit(f"Not a directory: {directory}")

    configure_logging(args.log_file, args.log_level)
    config = load_config(args.config)
    logging.getLogger(__name__).debug("loaded config %s", config)
    try:
        run_app(directory, config)
    except WatchError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
