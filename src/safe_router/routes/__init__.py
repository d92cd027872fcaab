"""Route normalization, table building, and placeholder resolution.

Public API::

    from safe_router.routes import build, normalize

    table = build(normalize(node) for node in nodes)
    for entry in table:
        print(entry.path, entry.params)
"""

from safe_router.routes.resolve import match_path, resolve_entry, resolve_path
from safe_router.routes.segments import (
    CatchAll,
    Dynamic,
    Group,
    OptionalCatchAll,
    Param,
    RouteEntry,
    Segment,
    Static,
    classify,
    format_pattern,
    normalize,
)
from safe_router.routes.table import RouteTable, build

__all__ = [
    "CatchAll",
    "Dynamic",
    "Group",
    "OptionalCatchAll",
    "Param",
    "RouteEntry",
    "RouteTable",
    "Segment",
    "Static",
    "build",
    "classify",
    "format_pattern",
    "match_path",
    "normalize",
    "resolve_entry",
    "resolve_path",
]
