"""Route table builder — fold normalized entries into one table.

The table is keyed by the stringified canonical pattern and preserves
insertion order, which the emitter relies on for stable output.

Besides identical patterns, the builder rejects patterns that cannot be
told apart at navigation time::

    user/[id]          vs  user/[slug]            same shape, different names
    docs/[...a]        vs  docs/[[...b]]          catch-all vs optional catch-all
    docs               vs  docs/[[...rest]]       optional catch-all also matches /docs
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from safe_router._errors import ConflictingRoute
from safe_router.routes.segments import OptionalCatchAll, RouteEntry


class RouteTable:
    """Ordered mapping of canonical path pattern to RouteEntry."""

    __slots__ = ("_entries", "_shapes")

    def __init__(self) -> None:
        self._entries: dict[str, RouteEntry] = {}
        # shape key -> entry that claimed it
        self._shapes: dict[str, RouteEntry] = {}

    def add(self, entry: RouteEntry) -> None:
        """Insert *entry*.

        Raises:
            ConflictingRoute: If the pattern, or a pattern indistinguishable
                from it, is already in the table.

        """
        path = entry.path
        existing = self._entries.get(path)
        if existing is not None:
            raise ConflictingRoute(path, existing.location, entry.location)

        shapes = _shape_keys(entry)
        for shape in shapes:
            other = self._shapes.get(shape)
            if other is not None:
                raise ConflictingRoute(
                    path, other.location, entry.location, ambiguous_with=other.path,
                )

        for shape in shapes:
            self._shapes[shape] = entry
        self._entries[path] = entry

    def get(self, path: str) -> RouteEntry | None:
        return self._entries.get(path)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return tuple(self._entries.values())

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __repr__(self) -> str:
        return f"RouteTable({list(self._entries)!r})"


def _shape_keys(entry: RouteEntry) -> tuple[str, ...]:
    """Shapes an entry occupies: its own, plus its parent's for optional catch-alls."""
    shape = entry.shape
    if entry.pattern and isinstance(entry.pattern[-1], OptionalCatchAll):
        parent = "/" + "/".join(seg.shape for seg in entry.pattern[:-1])
        return (shape, parent)
    return (shape,)


def build(entries: Iterable[RouteEntry | None]) -> RouteTable:
    """Build a RouteTable from normalized entries.

    ``None`` items (structural nodes filtered by the normalizer) are skipped,
    so the output of ``normalize`` can be fed in directly.

    Raises:
        ConflictingRoute: On the first duplicate or ambiguous pattern.

    """
    table = RouteTable()
    for entry in entries:
        if entry is not None:
            table.add(entry)
    return table
