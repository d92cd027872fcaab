"""Run banner and pass summaries for the command line.

Prints a short header describing the run, then one line per generation
pass.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from safe_router.app import PassOutcome
    from safe_router.config import GeneratorConfig
    from safe_router.observability.log import EventLog


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "generate": (_GREEN, "generate"),
    "watch": (_CYAN, "watch"),
}

_STATUS_STYLES: dict[str, tuple[str, str]] = {
    "written": (_GREEN, "✓"),
    "unchanged": (_DIM, "="),
    "failed": (_RED, "✗"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _plural(count: int, word: str, plural: str | None = None) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {plural or word + 's'}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(config: GeneratorConfig, mode: str) -> None:
    """Print the run header to stderr.

    Args:
        config: Resolved GeneratorConfig.
        mode: ``"generate"`` or ``"watch"``.

    """
    from safe_router import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}safe-router{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} convention: {config.project_type}",
        f"  {_DIM}├─{_RESET} routes: {_DIM}{config.routes_path}{_RESET}",
        f"  {_DIM}├─{_RESET} shape: {config.mode}",
        f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}",
    ]
    if mode == "watch":
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes (debounce {config.debounce_ms}ms)...{_RESET}")
    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def format_outcome(outcome: PassOutcome) -> str:
    """One-line summary of a pass."""
    color, mark = _STATUS_STYLES.get(outcome.status, (_DIM, "?"))
    prefix = f"  {color}{mark}{_RESET} #{outcome.generation}"
    if outcome.status == "failed":
        return f"{prefix} {_RED}failed{_RESET}: {outcome.error}"

    timing = f" {_DIM}in {outcome.duration_ms:.0f}ms{_RESET}"
    trigger = ""
    if outcome.changed:
        trigger = f" {_DIM}({_plural(len(outcome.changed), 'change')}){_RESET}"
    return f"{prefix} {_plural(outcome.route_count, 'route')} {outcome.status}{timing}{trigger}"


def print_outcome(outcome: PassOutcome) -> None:
    """Print a pass summary line to stderr."""
    print(format_outcome(outcome), file=sys.stderr)


def format_session(log: EventLog) -> str:
    """Summary of every pass recorded in *log*, printed when a watch ends."""
    by_type = log.stats()["by_type"]
    completed = by_type.get("GenerationCompleted", 0)
    failed = by_type.get("GenerationFailed", 0)
    summary = f"  {_DIM}{_plural(completed + failed, 'pass', 'passes')}: {completed} completed"
    if failed:
        return f"{summary}, {_RESET}{_RED}{failed} failed{_RESET}"
    return f"{summary}{_RESET}"


def print_session(log: EventLog) -> None:
    """Print the watch session summary to stderr."""
    print(format_session(log), file=sys.stderr)
