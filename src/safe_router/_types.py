"""Shared type definitions for safe-router."""

from typing import Literal, TypeAlias

# File-routing convention of the target project
ProjectType: TypeAlias = Literal["react", "next-app", "next-page"]

# Shape of the generated artifact
EmitMode: TypeAlias = Literal["flat", "hierarchy"]

# TypeScript type of a route parameter
ParamKind: TypeAlias = Literal["string", "string[]", "string[] | undefined"]

# Navigation environment, resolved once by the caller
RouterEnv: TypeAlias = Literal["server", "app", "pages", "unknown"]

# Outcome status of one regeneration pass
PassStatus: TypeAlias = Literal["written", "unchanged", "failed"]

# Route URL pattern with ``$param`` placeholders (e.g., "/user/$id")
RoutePath: TypeAlias = str

PROJECT_TYPES: tuple[str, ...] = ("react", "next-app", "next-page")
EMIT_MODES: tuple[str, ...] = ("flat", "hierarchy")
