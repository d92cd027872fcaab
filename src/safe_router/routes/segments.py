"""Segment normalizer — raw route nodes to canonical route entries.

Classifies each raw token by bracket syntax::

    "user"          -> Static("user")
    "(marketing)"   -> Group("(marketing)")     elided from the path
    "[id]"          -> Dynamic("id")            $id: string
    "[...slug]"     -> CatchAll("slug")         $slug: string[]
    "[[...slug]]"   -> OptionalCatchAll("slug") $slug?: string[]
    "[not valid]"   -> Static("[not valid]")    unrecognized, kept literally

Normalization is pure: it never touches the filesystem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from safe_router._errors import DuplicateParam, MisplacedCatchAll, ReservedCharacter

if TYPE_CHECKING:
    from pathlib import Path

    from safe_router._types import ParamKind
    from safe_router.discovery.nodes import RouteNode

_DYNAMIC_RE = re.compile(r"^\[(\w+)\]$")
_CATCH_ALL_RE = re.compile(r"^\[\.\.\.(\w+)\]$")
_OPTIONAL_CATCH_ALL_RE = re.compile(r"^\[\[\.\.\.(\w+)\]\]$")
_GROUP_RE = re.compile(r"^\(.+\)$")

PLACEHOLDER_PREFIX = "$"


@dataclass(frozen=True, slots=True)
class Static:
    """A fixed path segment."""

    name: str

    @property
    def token(self) -> str:
        return self.name

    @property
    def rendered(self) -> str:
        return self.name

    @property
    def shape(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Dynamic:
    """A segment bound to exactly one parameter value."""

    param: str

    @property
    def kind(self) -> ParamKind:
        return "string"

    @property
    def token(self) -> str:
        return f"[{self.param}]"

    @property
    def rendered(self) -> str:
        return PLACEHOLDER_PREFIX + self.param

    @property
    def shape(self) -> str:
        return "[]"


@dataclass(frozen=True, slots=True)
class CatchAll:
    """A trailing segment bound to one or more remaining path parts."""

    param: str

    @property
    def kind(self) -> ParamKind:
        return "string[]"

    @property
    def token(self) -> str:
        return f"[...{self.param}]"

    @property
    def rendered(self) -> str:
        return PLACEHOLDER_PREFIX + self.param

    @property
    def shape(self) -> str:
        return "[...]"


@dataclass(frozen=True, slots=True)
class OptionalCatchAll:
    """A trailing segment bound to zero or more remaining path parts."""

    param: str

    @property
    def kind(self) -> ParamKind:
        return "string[] | undefined"

    @property
    def token(self) -> str:
        return f"[[...{self.param}]]"

    @property
    def rendered(self) -> str:
        return PLACEHOLDER_PREFIX + self.param

    @property
    def shape(self) -> str:
        # Matches everything a catch-all at the same position matches
        return "[...]"


@dataclass(frozen=True, slots=True)
class Group:
    """A route group: contributes nesting, never a path segment."""

    name: str


Segment: TypeAlias = Static | Dynamic | CatchAll | OptionalCatchAll


@dataclass(frozen=True, slots=True)
class Param:
    """One slot of a route's parameter schema."""

    name: str
    kind: ParamKind

    @property
    def optional(self) -> bool:
        return self.kind == "string[] | undefined"

    @property
    def is_list(self) -> bool:
        return self.kind != "string"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A normalized route.

    Attributes:
        pattern: Canonical path pattern, route groups elided.
        params: Parameter schema in left-to-right order (names unique).
        source: File the route was discovered in.
        nesting: Group and static folder names enclosing the route, used
            only for hierarchy emission.
        locator: Position inside *source* for multi-route files.

    """

    pattern: tuple[Segment, ...]
    params: tuple[Param, ...]
    source: Path
    nesting: tuple[str, ...] = ()
    locator: str = ""

    @property
    def path(self) -> str:
        """Pattern with ``$name`` placeholders, e.g. ``/user/$id``."""
        return format_pattern(self.pattern)

    @property
    def shape(self) -> str:
        """Pattern with parameter names erased, for ambiguity checks."""
        return "/" + "/".join(seg.shape for seg in self.pattern)

    @property
    def location(self) -> str:
        if self.locator:
            return f"{self.source} ({self.locator})"
        return str(self.source)

    def param(self, name: str) -> Param | None:
        for p in self.params:
            if p.name == name:
                return p
        return None


def format_pattern(pattern: tuple[Segment, ...]) -> str:
    """Render a pattern as a path string with ``$name`` placeholders."""
    return "/" + "/".join(seg.rendered for seg in pattern)


def classify(token: str) -> Segment | Group:
    """Classify one raw path token by its bracket syntax."""
    if match := _OPTIONAL_CATCH_ALL_RE.match(token):
        return OptionalCatchAll(match.group(1))
    if match := _CATCH_ALL_RE.match(token):
        return CatchAll(match.group(1))
    if match := _DYNAMIC_RE.match(token):
        return Dynamic(match.group(1))
    if _GROUP_RE.match(token):
        return Group(token)
    return Static(token)


def normalize(node: RouteNode) -> RouteEntry | None:
    """Turn a raw node into a RouteEntry.

    Returns None for structural nodes (layouts and the like).

    Raises:
        DuplicateParam: If two segments bind the same parameter name.
        MisplacedCatchAll: If a catch-all segment is not the last segment.
        ReservedCharacter: If a static segment contains ``$``.

    """
    if not node.routable:
        return None

    pattern: list[Segment] = []
    params: list[Param] = []
    seen: set[str] = set()
    nesting: list[str] = []

    last = len(node.tokens) - 1
    for index, token in enumerate(node.tokens):
        segment = classify(token)

        if index < last and isinstance(segment, (Group, Static)):
            nesting.append(token)

        if isinstance(segment, Group):
            continue

        if pattern and isinstance(pattern[-1], (CatchAll, OptionalCatchAll)):
            raise MisplacedCatchAll(pattern[-1].token, node.location)

        if isinstance(segment, Static):
            if PLACEHOLDER_PREFIX in segment.name:
                raise ReservedCharacter(segment.name, node.location)
        else:
            if segment.param in seen:
                raise DuplicateParam(segment.param, node.location)
            seen.add(segment.param)
            params.append(Param(segment.param, segment.kind))

        pattern.append(segment)

    return RouteEntry(
        pattern=tuple(pattern),
        params=tuple(params),
        source=node.source,
        nesting=tuple(nesting),
        locator=node.locator,
    )
