"""safe-router configuration.

GeneratorConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from safe_router._errors import ConfigError, UnsupportedConvention
from safe_router._types import EMIT_MODES, PROJECT_TYPES

# Candidate routes roots per convention, relative to the project root.
# The first one that exists wins; if none exists the first is reported.
ROUTES_CANDIDATES: dict[str, tuple[str, ...]] = {
    "next-app": ("app", "src/app"),
    "next-page": ("pages", "src/pages"),
    "react": (
        "routes.json",
        "routes.yaml",
        "routes.yml",
        "src/routes.json",
        "src/routes.yaml",
        "src/routes.yml",
    ),
}


def resolve_routes_root(root: Path, project_type: str, routes_dir: str | None = None) -> Path:
    """Return the routes root for *project_type* under *root*.

    An explicit *routes_dir* wins.  Otherwise the first existing default
    candidate is returned, or the first candidate when none exists (so the
    caller can report a meaningful missing path).
    """
    if routes_dir is not None:
        return root / routes_dir
    candidates = ROUTES_CANDIDATES.get(project_type, ())
    for candidate in candidates:
        path = root / candidate
        if path.exists():
            return path
    return root / candidates[0] if candidates else root


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Configuration for one generator invocation.

    Attributes:
        root: Project root directory. Always resolved to an absolute path
              on construction.
        project_type: File-routing convention (``react``, ``next-app``,
            ``next-page``).
        out: Output artifact path, relative to ``root`` unless absolute.
        mode: Emission shape (``flat`` or ``hierarchy``).
        watch: Keep regenerating as the source tree changes.
        routes_dir: Explicit routes root (directory, or the routes file for
            ``react``), relative to ``root``. ``None`` picks the
            convention default.
        debounce_ms: Quiet interval before a watch-mode regeneration.

    """

    root: Path = field(default_factory=Path.cwd)
    project_type: str = "react"
    out: Path = field(default_factory=lambda: Path("generated/routes.d.ts"))
    mode: str = "hierarchy"
    watch: bool = False
    routes_dir: str | None = None
    debounce_ms: int = 150

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.out, Path):
            object.__setattr__(self, "out", Path(str(self.out)))
        if self.project_type not in PROJECT_TYPES:
            raise UnsupportedConvention(self.project_type, PROJECT_TYPES)
        if self.mode not in EMIT_MODES:
            msg = f"Invalid mode {self.mode!r} (expected one of: {', '.join(EMIT_MODES)})"
            raise ConfigError(msg)
        # bool is an int subclass; reject it as a debounce value
        if not isinstance(self.debounce_ms, int) or isinstance(self.debounce_ms, bool):
            msg = f"debounce_ms must be an integer, got {self.debounce_ms!r}"
            raise ConfigError(msg)
        if not isinstance(self.watch, bool):
            msg = f"watch must be true or false, got {self.watch!r}"
            raise ConfigError(msg)
        if self.routes_dir is not None and not isinstance(self.routes_dir, str):
            msg = f"routes_dir must be a string, got {self.routes_dir!r}"
            raise ConfigError(msg)
        if self.debounce_ms < 0:
            msg = f"debounce_ms must be >= 0, got {self.debounce_ms}"
            raise ConfigError(msg)

    @property
    def output_path(self) -> Path:
        """Absolute path to the generated artifact."""
        if self.out.is_absolute():
            return self.out
        return self.root / self.out

    @property
    def routes_path(self) -> Path:
        """Absolute path to the routes root for the configured convention."""
        return resolve_routes_root(self.root, self.project_type, self.routes_dir)

    @property
    def debounce_seconds(self) -> float:
        """Debounce interval in seconds."""
        return self.debounce_ms / 1000
