"""Type emitter — render a RouteTable as a TypeScript declaration file.

Flat mode emits one union of ``{ path, params }`` route types::

    export type Routes =
      | { path: "/dashboard" }
      | { path: "/user/$id"; params: { id: string } };

    export type RoutePath = Routes["path"];

Hierarchy mode additionally emits ``RouteTree``, an interface whose nested
object types mirror the folder nesting of the source tree (route keys are
their path strings, group keys are folder names), followed by the same
``Routes`` union so the navigation helper keeps a single source of truth.

Rendering is deterministic: equal tables and modes give byte-identical text.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from safe_router._types import EmitMode
    from safe_router.routes.segments import Param, RouteEntry
    from safe_router.routes.table import RouteTable

HEADER = (
    "// This file is generated by safe-router. Do not edit it by hand.\n"
    "// Regenerate with: safe-router generate"
)

_INDENT = "  "
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def render(table: RouteTable, mode: EmitMode) -> str:
    """Render *table* in *mode* (``flat`` or ``hierarchy``)."""
    blocks = [HEADER]
    if mode == "hierarchy":
        blocks.append(_render_tree(table))
    blocks.append(_render_union(table))
    return "\n\n".join(blocks) + "\n"


def route_type(entry: RouteEntry) -> str:
    """TypeScript object type for one route."""
    path = _literal(entry.path)
    if not entry.params:
        return f"{{ path: {path} }}"
    fields = "; ".join(_param_field(p) for p in entry.params)
    return f"{{ path: {path}; params: {{ {fields} }} }}"


def _param_field(param: Param) -> str:
    key = _key(param.name)
    if param.optional:
        return f"{key}?: string[]"
    return f"{key}: {param.kind}"


def _render_union(table: RouteTable) -> str:
    if not len(table):
        lines = ["export type Routes = never;"]
    else:
        lines = ["export type Routes ="]
        lines.extend(f"{_INDENT}| {route_type(entry)}" for entry in table)
        lines[-1] += ";"
    lines.append("")
    lines.append('export type RoutePath = Routes["path"];')
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


class _TreeNode:
    """Ordered children of one nesting level: route entries and sub-groups."""

    __slots__ = ("items",)

    def __init__(self) -> None:
        self.items: dict[str, RouteEntry | _TreeNode] = {}

    def group(self, name: str) -> _TreeNode:
        child = self.items.get(name)
        if not isinstance(child, _TreeNode):
            child = _TreeNode()
            self.items[name] = child
        return child


def build_tree(table: RouteTable) -> _TreeNode:
    """Arrange entries by their recorded nesting, in table order.

    Route keys start with ``/`` and folder names never contain one, so the
    two kinds of key cannot collide within a level.
    """
    root = _TreeNode()
    for entry in table:
        node = root
        for name in entry.nesting:
            node = node.group(name)
        node.items[entry.path] = entry
    return root


def _render_tree(table: RouteTable) -> str:
    root = build_tree(table)
    if not root.items:
        return "export interface RouteTree {}"
    lines = ["export interface RouteTree {"]
    _render_node(root, depth=1, lines=lines)
    lines.append("}")
    return "\n".join(lines)


def _render_node(node: _TreeNode, *, depth: int, lines: list[str]) -> None:
    pad = _INDENT * depth
    for key, item in node.items.items():
        if isinstance(item, _TreeNode):
            lines.append(f"{pad}{_key(key)}: {{")
            _render_node(item, depth=depth + 1, lines=lines)
            lines.append(f"{pad}}};")
        else:
            lines.append(f"{pad}{_literal(key)}: {route_type(item)};")


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def _literal(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _key(name: str) -> str:
    if _IDENTIFIER_RE.match(name):
        return name
    return _literal(name)
