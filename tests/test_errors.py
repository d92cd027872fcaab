"""Tests for safe_router._errors."""

from pathlib import Path

import pytest

from safe_router._errors import (
    ConfigError,
    ConflictingRoute,
    DuplicateParam,
    InvalidRouteArgument,
    MisplacedCatchAll,
    NormalizationError,
    ReservedCharacter,
    RootNotFound,
    SafeRouterError,
    ScanError,
    UnsupportedConvention,
    WriteFailure,
)


class TestErrorHierarchy:
    """All safe-router errors inherit from SafeRouterError."""

    def test_base_is_exception(self) -> None:
        assert issubclass(SafeRouterError, Exception)

    @pytest.mark.parametrize(
        "error_cls",
        [
            ConfigError,
            RootNotFound,
            UnsupportedConvention,
            NormalizationError,
            ConflictingRoute,
            InvalidRouteArgument,
            WriteFailure,
            ScanError,
        ],
    )
    def test_direct_subclasses(self, error_cls: type) -> None:
        assert issubclass(error_cls, SafeRouterError)

    @pytest.mark.parametrize("error_cls", [DuplicateParam, MisplacedCatchAll, ReservedCharacter])
    def test_normalization_errors(self, error_cls: type) -> None:
        assert issubclass(error_cls, NormalizationError)


class TestErrorMessages:
    """Messages name the offending sources."""

    def test_root_not_found(self) -> None:
        err = RootNotFound(Path("/nope"))
        assert err.path == Path("/nope")
        assert "Project root not found" in str(err)
        assert "/nope" in str(err)

    def test_routes_root_not_found(self) -> None:
        err = RootNotFound(Path("/proj/app"), "Routes root")
        assert str(err).startswith("Routes root not found")

    def test_unsupported_convention_lists_supported(self) -> None:
        err = UnsupportedConvention("vue", ("react", "next-app"))
        assert err.project_type == "vue"
        assert "'vue'" in str(err)
        assert "react, next-app" in str(err)

    def test_normalization_error_carries_source(self) -> None:
        err = MisplacedCatchAll("[...slug]", "/proj/app/[...slug]/edit/page.tsx")
        assert err.source == "/proj/app/[...slug]/edit/page.tsx"
        assert err.token == "[...slug]"
        assert "/proj/app/[...slug]/edit/page.tsx" in str(err)

    def test_duplicate_param(self) -> None:
        err = DuplicateParam("id", "/proj/app/[id]/x/[id]/page.tsx")
        assert err.name == "id"
        assert "'id'" in str(err)

    def test_conflicting_route_names_both_sources(self) -> None:
        err = ConflictingRoute("/user/$id", "/a/page.tsx", "/b/page.tsx")
        assert err.pattern == "/user/$id"
        assert err.first == "/a/page.tsx"
        assert err.second == "/b/page.tsx"
        assert err.ambiguous_with is None
        assert "/a/page.tsx" in str(err)
        assert "/b/page.tsx" in str(err)

    def test_conflicting_route_ambiguity(self) -> None:
        err = ConflictingRoute("/user/$slug", "a", "b", ambiguous_with="/user/$id")
        assert "indistinguishable from '/user/$id'" in str(err)

    def test_write_failure(self) -> None:
        err = WriteFailure(Path("/ro/routes.d.ts"), "Permission denied")
        assert err.path == Path("/ro/routes.d.ts")
        assert "Permission denied" in str(err)

    def test_scan_error(self) -> None:
        err = ScanError(Path("/proj/app/user"), "No such file or directory")
        assert err.path == Path("/proj/app/user")
        assert str(err) == "Failed to scan /proj/app/user: No such file or directory"

    def test_catch_all_safe_router_errors(self) -> None:
        with pytest.raises(SafeRouterError):
            raise ReservedCharacter("a$b", "x")
