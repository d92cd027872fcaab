"""Change filter for watch mode.

Only route sources and the project config file trigger a regeneration.
The generated artifact and the temporary files the atomic writer creates
next to it are always ignored, otherwise every write would schedule
another pass.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, DefaultFilter

from safe_router.config_loader import CONFIG_FILENAMES
from safe_router.emit.writer import temp_prefix

if TYPE_CHECKING:
    from safe_router.config import GeneratorConfig


class RouteSourceFilter(DefaultFilter):
    """watchfiles filter accepting changes that can alter the route table.

    Inherits DefaultFilter's ignore rules (``.git``, ``node_modules``,
    editor swap files, ...) and narrows the rest to the routes root and
    the config file at the project root.
    """

    def __init__(self, config: GeneratorConfig) -> None:
        super().__init__()
        self._root = config.root
        self._routes = config.routes_path
        self._output = config.output_path
        self._temp_prefix = temp_prefix(self._output)

    def __call__(self, change: Change, path: str) -> bool:
        if not super().__call__(change, path):
            return False
        return self.accepts(Path(path))

    def accepts(self, path: Path) -> bool:
        """Whether a change to *path* should schedule a regeneration."""
        if path == self._output:
            return False
        if path.parent == self._output.parent and path.name.startswith(self._temp_prefix):
            return False
        if path.parent == self._root and path.name in CONFIG_FILENAMES:
            return True
        return path == self._routes or path.is_relative_to(self._routes)
