"""safe-router CLI — safe-router generate.

Entry point for the ``safe-router`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from safe_router._errors import SafeRouterError
from safe_router._types import EMIT_MODES, PROJECT_TYPES

if TYPE_CHECKING:
    from safe_router.config import GeneratorConfig
    from safe_router.observability import EventLog


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the safe-router CLI."""
    parser = argparse.ArgumentParser(
        prog="safe-router",
        description="Generate TypeScript route types from a file-routing project.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # safe-router generate
    # Defaults are None so that values from safe-router.yaml/.toml win
    # over unset flags; GeneratorConfig supplies the real defaults.
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate the route types file",
    )
    gen_parser.add_argument("--root", "-r", default=".", help="Project root directory")
    gen_parser.add_argument(
        "--type", "-t", dest="project_type", choices=PROJECT_TYPES, default=None,
        help="File-routing convention (default: react)",
    )
    gen_parser.add_argument(
        "--out", "-o", default=None,
        help="Output file (default: ./generated/routes.d.ts)",
    )
    gen_parser.add_argument(
        "--mode", "-m", choices=EMIT_MODES, default=None,
        help="Emission shape (default: hierarchy)",
    )
    gen_parser.add_argument(
        "--watch", "-w", action="store_true", default=None,
        help="Regenerate when route sources change",
    )
    gen_parser.add_argument(
        "--routes-dir", default=None,
        help="Routes directory (or routes file for react), relative to the root",
    )
    gen_parser.add_argument(
        "--debounce", dest="debounce_ms", type=int, default=None,
        help="Watch debounce interval in milliseconds (default: 150)",
    )
    gen_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from safe_router import __version__

    return __version__


_HANDLER_NAME = "safe-router-cli"


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("safe_router")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("  %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


async def _watch(config: GeneratorConfig, event_log: EventLog) -> None:
    from safe_router.app import watch
    from safe_router.banner import print_outcome

    async for outcome in watch(config=config, log=event_log):
        print_outcome(outcome)


def _generate(args: argparse.Namespace) -> None:
    from safe_router.app import generate
    from safe_router.banner import print_banner, print_outcome, print_session
    from safe_router.config_loader import load_config
    from safe_router.observability import EventLog

    config = load_config(
        Path(args.root),
        project_type=args.project_type,
        out=args.out,
        mode=args.mode,
        watch=args.watch,
        routes_dir=args.routes_dir,
        debounce_ms=args.debounce_ms,
    )

    if config.watch:
        event_log = EventLog()
        print_banner(config, "watch")
        try:
            asyncio.run(_watch(config, event_log))
        except KeyboardInterrupt:
            print("", file=sys.stderr)
        print_session(event_log)
        return

    print_banner(config, "generate")
    print_outcome(generate(config=config))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    if args.command == "generate":
        try:
            _generate(args)
        except SafeRouterError as exc:
            print(f"safe-router: error: {exc}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
