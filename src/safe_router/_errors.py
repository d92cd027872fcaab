"""safe-router error hierarchy.

All safe-router errors inherit from SafeRouterError for easy catching.
Errors that point at route sources carry the offending paths as attributes
so callers can report them without parsing the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class SafeRouterError(Exception):
    """Base error for all safe-router operations."""


class ConfigError(SafeRouterError):
    """Invalid or missing configuration (config file, routes file, CLI value)."""


class RootNotFound(SafeRouterError):  # noqa: N818
    """The project root or the convention's routes root does not exist."""

    def __init__(self, path: Path, what: str = "Project root") -> None:
        self.path = path
        super().__init__(f"{what} not found: {path}")


class UnsupportedConvention(SafeRouterError):  # noqa: N818
    """The requested project type has no convention adapter."""

    def __init__(self, project_type: str, supported: tuple[str, ...]) -> None:
        self.project_type = project_type
        self.supported = supported
        super().__init__(
            f"Unsupported project type {project_type!r} "
            f"(expected one of: {', '.join(supported)})"
        )


class NormalizationError(SafeRouterError):
    """A discovered route cannot be turned into a canonical pattern."""

    def __init__(self, message: str, source: Path | str) -> None:
        self.source = source
        super().__init__(f"{message} (in {source})")


class DuplicateParam(NormalizationError):  # noqa: N818
    """Two dynamic segments of one route bind the same parameter name."""

    def __init__(self, name: str, source: Path | str) -> None:
        self.name = name
        super().__init__(f"Parameter {name!r} is bound more than once", source)


class MisplacedCatchAll(NormalizationError):  # noqa: N818
    """A catch-all segment is followed by further path segments."""

    def __init__(self, token: str, source: Path | str) -> None:
        self.token = token
        super().__init__(f"Catch-all segment {token!r} must be the last segment", source)


class ReservedCharacter(NormalizationError):  # noqa: N818
    """A static segment contains ``$``, which introduces placeholders."""

    def __init__(self, token: str, source: Path | str) -> None:
        self.token = token
        super().__init__(
            f"Static segment {token!r} contains '$', which is reserved for placeholders",
            source,
        )


class ConflictingRoute(SafeRouterError):  # noqa: N818
    """Two sources normalize to the same (or an indistinguishable) pattern."""

    def __init__(
        self,
        pattern: str,
        first: Path | str,
        second: Path | str,
        *,
        ambiguous_with: str | None = None,
    ) -> None:
        self.pattern = pattern
        self.first = first
        self.second = second
        self.ambiguous_with = ambiguous_with
        detail = f" (indistinguishable from {ambiguous_with!r})" if ambiguous_with else ""
        super().__init__(
            f"Conflicting route {pattern!r}{detail}: defined in {first} and {second}"
        )


class InvalidRouteArgument(SafeRouterError):  # noqa: N818
    """A ``{path, params}`` argument does not satisfy the route's schema."""


class WriteFailure(SafeRouterError):  # noqa: N818
    """The output artifact could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class ScanError(SafeRouterError):
    """A directory under the routes root could not be read mid-scan.

    Usually a directory removed while a pass walks the tree (a branch
    switch or ``rm -rf`` during watch mode); the next pass sees the
    settled tree.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to scan {path}: {reason}")
