"""Watch mode — debounced regeneration driven by filesystem changes."""

from safe_router.watcher.coordinator import CoordinatorState, WatchCoordinator
from safe_router.watcher.filters import RouteSourceFilter

__all__ = [
    "CoordinatorState",
    "RouteSourceFilter",
    "WatchCoordinator",
]
