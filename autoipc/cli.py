"""CLI entrypoints for autoipc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .validators import ValidationError


def _add_verbose_option(parser: argparse.ArgumentParser, *, subcommand: bool = False) -> None:
    # On subcommands the flag must not reset a -v given before the command name.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if subcommand else False,
        help="Log debug output, including per-module extraction counts.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path inside the Electron project (defaults to current directory).",
    )


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug-level logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoipc",
        description="Generate Electron IPC bindings from channel declarations.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write main.ts, preload.ts and window.d.ts from the schema.",
    )
    _add_verbose_option(generate_parser, subcommand=True)
    _add_path_argument(generate_parser)

    check_parser = subparsers.add_parser(
        "check",
        help="Validate the schema and report artifacts that are out of date.",
    )
    _add_verbose_option(check_parser, subcommand=True)
    _add_path_argument(check_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for autoipc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    try:
        if args.command == "generate":
            report = orchestrator.run(args.path)
        elif args.command == "check":
            report = orchestrator.check(args.path)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ValidationError, ConfigError) as exc:
        parser.exit(1, f"{exc}\n")
    except Exception as exc:  # pragma: no cover - defensive guard
        parser.exit(1, f"autoipc {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    if args.command == "generate":
        for path in report.written:
            print(f"Wrote {_relativize(path)}")
    elif report.stale:
        for path in report.stale:
            print(f"Out of date: {_relativize(path)}")
        parser.exit(1, "Run `autoipc generate` to refresh the bindings.\n")
    else:
        print("IPC bindings are up to date")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
