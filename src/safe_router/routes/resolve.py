"""Placeholder resolution — the path-building half of the navigation contract.

The generated artifact writes every dynamic segment as ``$name``.  The
navigation helper turns a ``{path, params}`` argument into a concrete URL
by substituting each placeholder segment with its value::

    resolve_path("/user/$id/posts/$postId", {"id": 7, "postId": "a b"})
    -> "/user/7/posts/a%20b"

    resolve_path("/docs/$slug", {"slug": ["guide", "install"]})
    -> "/docs/guide/install"

Substitution is per whole segment, so ``$id`` never clobbers ``$idx``.
Values are percent-encoded, which keeps ``match_path`` an exact inverse.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeAlias
from urllib.parse import quote, unquote

from safe_router._errors import InvalidRouteArgument
from safe_router.routes.segments import (
    PLACEHOLDER_PREFIX,
    CatchAll,
    Dynamic,
    OptionalCatchAll,
    RouteEntry,
    Static,
)

ParamValue: TypeAlias = str | int | float | Sequence[str | int | float] | None


def resolve_path(path: str, params: Mapping[str, ParamValue] | None = None) -> str:
    """Substitute ``$name`` placeholder segments of *path* with *params*.

    List values (catch-alls) expand to several segments.  ``None`` or an
    empty list drops the segment (an omitted optional catch-all).

    Raises:
        InvalidRouteArgument: If a placeholder has no value, or *params*
            names a parameter the path does not declare.

    """
    params = dict(params or {})
    used: set[str] = set()
    parts: list[str] = []

    for segment in path.strip("/").split("/"):
        if not segment:
            continue
        if not segment.startswith(PLACEHOLDER_PREFIX):
            parts.append(segment)
            continue

        name = segment[len(PLACEHOLDER_PREFIX):]
        if name not in params:
            msg = f"Missing value for parameter {name!r} of {path!r}"
            raise InvalidRouteArgument(msg)
        used.add(name)
        parts.extend(_encode(params[name]))

    extra = sorted(set(params) - used)
    if extra:
        msg = f"Unknown parameters {extra} for {path!r}"
        raise InvalidRouteArgument(msg)

    return "/" + "/".join(parts)


def resolve_entry(entry: RouteEntry, params: Mapping[str, ParamValue] | None = None) -> str:
    """Resolve *entry*'s path after checking *params* against its schema.

    Raises:
        InvalidRouteArgument: On missing required parameters, unknown
            parameters, empty values, or a list/scalar mismatch.

    """
    params = dict(params or {})
    for p in entry.params:
        value = params.get(p.name)
        if value is None:
            if not p.optional:
                msg = f"Missing value for parameter {p.name!r} of {entry.path!r}"
                raise InvalidRouteArgument(msg)
            params[p.name] = None
            continue
        is_list = isinstance(value, Sequence) and not isinstance(value, str)
        if is_list != p.is_list:
            expected = "a list of strings" if p.is_list else "a single value"
            msg = f"Parameter {p.name!r} of {entry.path!r} expects {expected}"
            raise InvalidRouteArgument(msg)
        if p.kind == "string[]" and not value:
            msg = f"Catch-all parameter {p.name!r} of {entry.path!r} needs at least one part"
            raise InvalidRouteArgument(msg)
        # An empty segment would address a different route
        parts = value if is_list else (value,)
        if any(str(part) == "" for part in parts):
            msg = f"Parameter {p.name!r} of {entry.path!r} has an empty value"
            raise InvalidRouteArgument(msg)
    return resolve_path(entry.path, params)


def match_path(entry: RouteEntry, url: str) -> dict[str, str | list[str]] | None:
    """Match a concrete *url* against *entry*'s pattern.

    Returns the decoded parameter values, or None when *url* does not match.
    An omitted optional catch-all is absent from the result.
    """
    parts = [unquote(p) for p in url.split("?", 1)[0].strip("/").split("/") if p]
    values: dict[str, str | list[str]] = {}
    index = 0

    for segment in entry.pattern:
        if isinstance(segment, Static):
            if index >= len(parts) or parts[index] != segment.name:
                return None
            index += 1
        elif isinstance(segment, Dynamic):
            if index >= len(parts):
                return None
            values[segment.param] = parts[index]
            index += 1
        elif isinstance(segment, CatchAll):
            if index >= len(parts):
                return None
            values[segment.param] = parts[index:]
            index = len(parts)
        elif isinstance(segment, OptionalCatchAll):
            if index < len(parts):
                values[segment.param] = parts[index:]
            index = len(parts)

    if index != len(parts):
        return None
    return values


def _encode(value: ParamValue) -> list[str]:
    if value is None:
        return []
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [quote(str(v), safe="") for v in value]
    return [quote(str(value), safe="")]
