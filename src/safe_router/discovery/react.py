"""``react`` convention — declarative route lists (react-router style).

Routes are declared in a single JSON or YAML file rather than a directory
tree.  The file holds a list of route objects, or a mapping with a
``routes`` list::

    [
      {"path": "/dashboard"},
      {"path": "/user/:id", "params": ["id"]},
      {"path": "/files/*path"},
      {"path": "/shop", "children": [
        {"index": true},
        {"path": ":itemId"}
      ]}
    ]

Segment syntax is translated to bracket tokens so every convention feeds
the normalizer the same shape:

    :name   -> [name]
    *name   -> [...name]
    *       -> [...splat]

Bracket tokens (``[id]``, ``[[...rest]]``) pass through unchanged.  Route
objects with ``children`` are layouts: they contribute their path prefix
and a structural node, while the children are the addressable routes (use
``{"index": true}`` to address the parent path itself).
An absolute child path must repeat its parent's path, as in react-router
(``/shop`` may nest ``/shop/item`` but not ``/cart``).
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any, ClassVar

import yaml

from safe_router._errors import ConfigError
from safe_router.discovery.nodes import RouteNode

_SPLAT_PARAM = "splat"


class ReactRoutesAdapter:
    """Reads a declarative routes file."""

    convention: ClassVar[str] = "react"
    expects_file: ClassVar[bool] = True

    def __init__(self, routes_root: Path) -> None:
        self._root = routes_root

    @property
    def routes_root(self) -> Path:
        return self._root

    def __iter__(self) -> Iterator[RouteNode]:
        routes = _load_route_list(self._root)
        return self._walk(routes, prefix=(), locator="routes")

    def _walk(
        self,
        routes: list[Any],
        *,
        prefix: tuple[str, ...],
        locator: str,
    ) -> Iterator[RouteNode]:
        for index, route in enumerate(routes):
            here = f"{locator}[{index}]"
            if not isinstance(route, dict):
                msg = f"Route {here} in {self._root} must be a mapping, got {type(route).__name__}"
                raise ConfigError(msg)

            tokens = _route_tokens(route, prefix, here, self._root)
            _check_declared_params(route, tokens, here, self._root)

            children = route.get("children")
            if children is None:
                if "path" in route or route.get("index"):
                    yield RouteNode(source=self._root, tokens=tokens, locator=here)
                else:
                    yield RouteNode(source=self._root, tokens=tokens, routable=False, locator=here)
                continue

            if not isinstance(children, list):
                msg = f"Route {here} in {self._root}: 'children' must be a list"
                raise ConfigError(msg)
            yield RouteNode(source=self._root, tokens=tokens, routable=False, locator=here)
            yield from self._walk(children, prefix=tokens, locator=f"{here}.children")


def _load_route_list(path: Path) -> list[Any]:
    """Parse the routes file and return its list of route objects."""
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        msg = f"Failed to read routes file {path}: {exc}"
        raise ConfigError(msg) from exc

    if isinstance(data, dict):
        data = data.get("routes")
    if data is None:
        return []
    if not isinstance(data, list):
        msg = f"Routes file {path} must contain a list of routes"
        raise ConfigError(msg)
    return data


def _path_tokens(route: dict[str, Any], locator: str, source: Path) -> tuple[str, ...]:
    path = route.get("path", "")
    if path is None:
        path = ""
    if not isinstance(path, str):
        msg = f"Route {locator} in {source}: 'path' must be a str, got {type(path).__name__}"
        raise ConfigError(msg)
    return tuple(_translate_segment(part) for part in path.split("/") if part)


def _route_tokens(
    route: dict[str, Any],
    prefix: tuple[str, ...],
    locator: str,
    source: Path,
) -> tuple[str, ...]:
    """Return the full tokens of *route* nested under *prefix*.

    A relative path extends the parent prefix.  An absolute child path
    already spells out the full path, so it must start with the prefix.
    """
    tokens = _path_tokens(route, locator, source)
    path = route.get("path") or ""
    if not path.startswith("/"):
        return (*prefix, *tokens)
    if tokens[: len(prefix)] != prefix:
        parent = "/" + "/".join(prefix)
        msg = (
            f"Route {locator} in {source}: absolute path {path!r} "
            f"is not nested under its parent path {parent!r}"
        )
        raise ConfigError(msg)
    return tokens


def _translate_segment(part: str) -> str:
    """Translate react-router segment syntax into bracket tokens."""
    if part == "*":
        return f"[...{_SPLAT_PARAM}]"
    if part.startswith("*") and len(part) > 1:
        return f"[...{part[1:]}]"
    if part.startswith(":") and len(part) > 1:
        return f"[{part[1:]}]"
    return part


def _check_declared_params(
    route: dict[str, Any],
    tokens: tuple[str, ...],
    locator: str,
    source: Path,
) -> None:
    """Every name listed in ``params`` must be bound by the route's path."""
    declared = route.get("params")
    if declared is None:
        return
    if not isinstance(declared, list) or not all(isinstance(n, str) for n in declared):
        msg = f"Route {locator} in {source}: 'params' must be a list of names"
        raise ConfigError(msg)

    bound = set()
    for token in tokens:
        if token.startswith("[") and token.endswith("]"):
            bound.add(token.strip("[]").removeprefix("..."))
    missing = [name for name in declared if name not in bound]
    if missing:
        msg = (
            f"Route {locator} in {source} declares params {missing} "
            f"that its path does not bind"
        )
        raise ConfigError(msg)
