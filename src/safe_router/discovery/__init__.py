"""Route discovery — convention adapters.

Walks a project under one file-routing convention and yields raw route
nodes for the normalizer.

Public API::

    from safe_router.discovery import scan

    for node in scan(Path("my-app"), "next-app"):
        ...
"""

from safe_router.discovery.next_app import NextAppAdapter
from safe_router.discovery.next_page import NextPageAdapter
from safe_router.discovery.nodes import ConventionAdapter, RouteNode
from safe_router.discovery.react import ReactRoutesAdapter
from safe_router.discovery.scanner import ADAPTERS, scan

__all__ = [
    "ADAPTERS",
    "ConventionAdapter",
    "NextAppAdapter",
    "NextPageAdapter",
    "ReactRoutesAdapter",
    "RouteNode",
    "scan",
]
