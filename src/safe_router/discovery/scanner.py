"""Convention dispatch — pick the adapter for a project type.

The set of conventions is closed: adding one means adding an adapter class
and an entry in ``ADAPTERS``.
"""

from __future__ import annotations

from pathlib import Path

from safe_router._errors import RootNotFound, UnsupportedConvention
from safe_router.config import resolve_routes_root
from safe_router.discovery.next_app import NextAppAdapter
from safe_router.discovery.next_page import NextPageAdapter
from safe_router.discovery.nodes import ConventionAdapter
from safe_router.discovery.react import ReactRoutesAdapter

ADAPTERS: dict[str, type[ConventionAdapter]] = {
    NextAppAdapter.convention: NextAppAdapter,
    NextPageAdapter.convention: NextPageAdapter,
    ReactRoutesAdapter.convention: ReactRoutesAdapter,
}


def scan(root: Path, project_type: str, routes_dir: str | None = None) -> ConventionAdapter:
    """Return the adapter that walks *root* under *project_type*'s convention.

    The returned object is a lazy, restartable iterable of RouteNode
    objects; the filesystem is only walked when it is iterated.  Missing
    roots are reported eagerly.

    Raises:
        UnsupportedConvention: If *project_type* has no adapter.
        RootNotFound: If *root* or the routes root does not exist.

    """
    adapter_cls = ADAPTERS.get(project_type)
    if adapter_cls is None:
        raise UnsupportedConvention(project_type, tuple(ADAPTERS))

    if not root.is_dir():
        raise RootNotFound(root)

    routes_root = resolve_routes_root(root, project_type, routes_dir)
    present = routes_root.is_file() if adapter_cls.expects_file else routes_root.is_dir()
    if not present:
        raise RootNotFound(routes_root, "Routes root")

    return adapter_cls(routes_root)
