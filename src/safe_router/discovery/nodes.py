"""Raw route nodes produced by convention adapters.

A node is the unnormalized view of one discovered file: where it lives and
the path tokens exactly as they appear on disk, bracket and group markers
included.  Nodes are transient, produced and consumed within one scan pass.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Protocol

from safe_router._errors import ScanError


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A discovered route source.

    Attributes:
        source: Filesystem path of the leaf or structural file (the routes
            file itself for the ``react`` convention).
        tokens: Raw path tokens, outermost first (e.g.
            ``("(shop)", "user", "[id]")``).
        routable: True for addressable leaves (pages, route handlers),
            False for structural files such as layouts.
        locator: Position inside *source* when one file declares many
            routes (e.g. ``"routes[2].children[0]"``), else empty.

    """

    source: Path
    tokens: tuple[str, ...]
    routable: bool = True
    locator: str = ""

    @property
    def location(self) -> str:
        """Human-readable source location for diagnostics."""
        if self.locator:
            return f"{self.source} ({self.locator})"
        return str(self.source)


class ConventionAdapter(Protocol):
    """A restartable, lazily-walked sequence of RouteNode objects.

    Each ``iter()`` performs one full walk of the routes root.
    """

    convention: ClassVar[str]
    expects_file: ClassVar[bool]

    def __init__(self, routes_root: Path) -> None: ...

    @property
    def routes_root(self) -> Path: ...

    def __iter__(self) -> Iterator[RouteNode]: ...


# Skipped everywhere: VCS metadata, dependency trees, hidden folders
_IGNORED_DIRS: frozenset[str] = frozenset({"node_modules", "__pycache__"})


def is_ignored_dir(name: str) -> bool:
    """Return True for directory names no convention ever routes through."""
    return name in _IGNORED_DIRS or name.startswith((".", "_"))


def list_dir(directory: Path) -> list[Path]:
    """Return the entries of *directory* sorted by name.

    Raises:
        ScanError: If the directory vanished or cannot be read.

    """
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise ScanError(directory, exc.strerror or str(exc)) from exc
