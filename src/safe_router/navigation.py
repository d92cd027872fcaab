"""Navigation helper — typed ``{path, params}`` routing over a host router.

A route argument is a mapping shaped like one member of the generated
``Routes`` union::

    {"path": "/user/$id", "params": {"id": "42"}}

The environment (``server``, ``app``, ``pages`` or ``unknown``) is resolved
once by the caller with :func:`detect_env` and passed to
:func:`create_safe_router`.  Client environments get a router that resolves
the argument and forwards the concrete URL to the host navigator; server
and unknown environments get a fallback whose navigation calls only log a
warning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

from safe_router._errors import InvalidRouteArgument
from safe_router.routes.resolve import resolve_entry, resolve_path

if TYPE_CHECKING:
    from safe_router._types import RouterEnv
    from safe_router.routes.table import RouteTable

logger = logging.getLogger(__name__)

RouteArg: TypeAlias = Mapping[str, Any]

_UNAVAILABLE = "SafeRouter is only available in app/page routers"


class Navigator(Protocol):
    """The host router the helper drives (e.g. a framework's router object)."""

    def push(self, url: str) -> None: ...

    def replace(self, url: str) -> None: ...

    def back(self) -> None: ...


def detect_env(
    *,
    is_server: bool,
    has_app_router: bool = False,
    has_pages_router: bool = False,
) -> RouterEnv:
    """Resolve the navigation environment.

    Server rendering wins; otherwise the app router is preferred over the
    pages router.
    """
    if is_server:
        return "server"
    if has_app_router:
        return "app"
    if has_pages_router:
        return "pages"
    return "unknown"


def href(route: RouteArg, *, table: RouteTable | None = None) -> str:
    """Resolve a route argument to a concrete URL.

    With a *table*, the path must be a known route and the params are
    checked against its schema.

    Raises:
        InvalidRouteArgument: If the argument does not fit the route.

    """
    path = route.get("path")
    if not isinstance(path, str):
        msg = f"Route argument needs a 'path' string, got {path!r}"
        raise InvalidRouteArgument(msg)
    params = route.get("params")

    if table is None:
        return resolve_path(path, params)
    entry = table.get(path)
    if entry is None:
        msg = f"Unknown route {path!r}"
        raise InvalidRouteArgument(msg)
    return resolve_entry(entry, params)


class SafeRouter:
    """Typed navigation over a host :class:`Navigator`."""

    __slots__ = ("_navigator", "_table")

    def __init__(self, navigator: Navigator, *, table: RouteTable | None = None) -> None:
        self._navigator = navigator
        self._table = table

    def href(self, route: RouteArg) -> str:
        return href(route, table=self._table)

    def push(self, route: RouteArg) -> None:
        self._navigator.push(self.href(route))

    def replace(self, route: RouteArg) -> None:
        self._navigator.replace(self.href(route))

    def back(self) -> None:
        self._navigator.back()


class FallbackRouter:
    """Router for environments without client navigation.

    Navigation calls log a warning and do nothing.  ``href`` still
    resolves, so links can be rendered anywhere.
    """

    __slots__ = ("_table",)

    def __init__(self, *, table: RouteTable | None = None) -> None:
        self._table = table

    def href(self, route: RouteArg) -> str:
        return href(route, table=self._table)

    def push(self, route: RouteArg) -> None:  # noqa: ARG002
        logger.warning(_UNAVAILABLE)

    def replace(self, route: RouteArg) -> None:  # noqa: ARG002
        logger.warning(_UNAVAILABLE)

    def back(self) -> None:
        pass


def create_safe_router(
    env: RouterEnv,
    navigator: Navigator | None = None,
    *,
    table: RouteTable | None = None,
) -> SafeRouter | FallbackRouter:
    """Create the router for *env*.

    Args:
        env: Environment tag from :func:`detect_env`.
        navigator: Host router; required for ``app`` and ``pages``.
        table: Optional route table used to validate route arguments.

    """
    if env in ("app", "pages"):
        if navigator is None:
            msg = f"A navigator is required for the {env!r} environment"
            raise ValueError(msg)
        return SafeRouter(navigator, table=table)
    return FallbackRouter(table=table)


def safe_redirect(
    redirect: Callable[[str], Any],
    *,
    table: RouteTable | None = None,
) -> Callable[[RouteArg], Any]:
    """Wrap a host ``redirect(url)`` function to take route arguments."""

    def redirect_route(route: RouteArg) -> Any:
        return redirect(href(route, table=table))

    return redirect_route
