"""Type emitter — route table to TypeScript declarations, written atomically."""

from safe_router.emit.render import build_tree, render, route_type
from safe_router.emit.writer import emit, temp_prefix, write_atomic

__all__ = [
    "build_tree",
    "emit",
    "render",
    "route_type",
    "temp_prefix",
    "write_atomic",
]
