"""``next-page`` convention — Next.js Pages Router file trees.

Each page file maps one-to-one to a route::

    pages/index.tsx              -> /
    pages/about.tsx              -> /about
    pages/blog/index.tsx         -> /blog
    pages/blog/[slug].tsx        -> /blog/[slug]
    pages/docs/[[...path]].tsx   -> /docs/[[...path]]
    pages/_app.tsx               -> structural node, no route
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from safe_router.discovery.nodes import RouteNode, is_ignored_dir, list_dir

PAGE_EXTENSIONS: frozenset[str] = frozenset({".tsx", ".ts", ".jsx", ".js", ".mdx"})

_INDEX_STEM = "index"


class NextPageAdapter:
    """Walks a Pages Router ``pages/`` directory."""

    convention: ClassVar[str] = "next-page"
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

        for item in items:
            if not item.is_file() or item.suffix not in PAGE_EXTENSIONS:
                continue
            # Type declarations are not pages
            if item.name.endswith(".d.ts"):
                continue
            if item.name.startswith("_"):
                yield RouteNode(source=item, tokens=tokens, routable=False)
            elif item.stem == _INDEX_STEM:
                yield RouteNode(source=item, tokens=tokens)
            else:
                yield RouteNode(source=item, tokens=(*tokens, item.stem))

        for item in items:
            if not item.is_dir() or is_ignored_dir(item.name):
                continue
            yield from self._walk(item, tokens=(*tokens, item.name), stack=stack)
