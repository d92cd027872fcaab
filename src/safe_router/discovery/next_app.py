"""``next-app`` convention — Next.js App Router directory trees.

Every directory is a potential path segment; a directory becomes routable
when it holds a ``page`` (or ``route`` handler) file::

    app/page.tsx                        -> /
    app/dashboard/page.tsx              -> /dashboard
    app/(shop)/cart/page.tsx            -> /cart        (route group)
    app/user/[id]/page.tsx              -> /user/[id]
    app/docs/[...slug]/page.tsx         -> /docs/[...slug]
    app/user/layout.tsx                 -> structural node, no route

Directories starting with ``_`` (private folders), ``.`` or ``@``
(parallel-route slots) are skipped.  Symlinked directories are followed,
but a directory already on the current walk stack is never re-entered.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from safe_router.discovery.nodes import RouteNode, is_ignored_dir, list_dir

# Leaf file stems that make their directory addressable
_ROUTABLE_STEMS: frozenset[str] = frozenset({"page", "route"})

# Leaf file stems that only shape the tree (no addressable path)
_STRUCTURAL_STEMS: frozenset[str] = frozenset({
    "layout",
    "template",
    "loading",
    "error",
    "not-found",
    "default",
})

PAGE_EXTENSIONS: frozenset[str] = frozenset({"", ".tsx", ".ts", ".jsx", ".js", ".mdx", ".md"})


class NextAppAdapter:
    """Walks an App Router ``app/`` directory."""

    convention: ClassVar[str] = "next-app"
    expects_file: ClassVar[bool] = False

    def __init__(self, routes_root: Path) -> None:
        self._root = routes_root

    @property
    def routes_root(self) -> Path:
        return self._root

    def __iter__(self) -> Iterator[RouteNode]:
        return self._walk(self._root, tokens=(), stack=frozenset())

    def _walk(
        self,
        directory: Path,
        *,
        tokens: tuple[str, ...],
        stack: frozenset[Path],
    ) -> Iterator[RouteNode]:
        real = directory.resolve()
        if real in stack:
            return
        stack = stack | {real}

        items = list_dir(directory)

        # Leaf files at this level first, then subdirectories
        for item in items:
            if not item.is_file() or item.suffix not in PAGE_EXTENSIONS:
                continue
            if item.stem in _ROUTABLE_STEMS:
                yield RouteNode(source=item, tokens=tokens, routable=True)
            elif item.stem in _STRUCTURAL_STEMS:
                yield RouteNode(source=item, tokens=tokens, routable=False)

        for item in items:
            if not item.is_dir():
                continue
            if is_ignored_dir(item.name) or item.name.startswith("@"):
                continue
            yield from self._walk(item, tokens=(*tokens, item.name), stack=stack)
