"""Watch coordinator — debounced, single-flight regeneration.

Turns a stream of filesystem change batches into a sequence of pipeline
passes:

- ``idle``: waiting for a relevant change
- ``debouncing``: waiting for a quiet interval, restarted by every change
- ``running``: one full pass in a worker thread; changes seen meanwhile
  mark the coordinator dirty and are picked up right after the pass
- ``stopped``: the outcome stream has ended

Passes never overlap, so the artifact is only ever written by one pass at
a time.  Per-pass failures (normalization errors, conflicts, write
failures) are yielded as ``failed`` outcomes; a missing root or an
unsupported convention ends the watch.
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from safe_router.app import GenerationJob, run_pass
from safe_router.watcher.filters import RouteSourceFilter

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator, Callable

    from watchfiles import Change

    from safe_router.app import PassOutcome
    from safe_router.config import GeneratorConfig
    from safe_router.observability.log import EventLog

    ChangeBatch: TypeAlias = set[tuple[Change, str]]
    Regenerate: TypeAlias = Callable[[GeneratorConfig, GenerationJob], PassOutcome]

logger = logging.getLogger(__name__)

CoordinatorState: TypeAlias = Literal["idle", "debouncing", "running", "stopped"]


class WatchCoordinator:
    """Regenerates the artifact whenever route sources change.

    Args:
        config: Generator configuration; ``debounce_seconds`` sets the
            quiet interval.
        changes: Async iterable of change batches as yielded by
            ``watchfiles.awatch``.  Defaults to watching ``config.root``.
        regenerate: Callable running one pipeline pass.  Defaults to
            :func:`safe_router.app.run_pass`.
        log: Optional event log receiving generation events.
        initial_pass: Run one pass before waiting for changes.

    """

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        changes: AsyncIterable[ChangeBatch] | None = None,
        regenerate: Regenerate | None = None,
        log: EventLog | None = None,
        initial_pass: bool = True,
    ) -> None:
        self._config = config
        self._filter = RouteSourceFilter(config)
        self._changes = changes
        self._regenerate = regenerate or functools.partial(run_pass, log=log)
        self._initial_pass = initial_pass

        self._state: CoordinatorState = "idle"
        self._generation = 0
        self._pending: set[Path] = set()
        self._dirty = False
        self._stopping = False
        self._source_done = False
        self._signal = asyncio.Event()
        self._stop_event = asyncio.Event()

    @property
    def state(self) -> CoordinatorState:
        """Current coordinator state."""
        return self._state

    @property
    def generation(self) -> int:
        """Number of passes started so far."""
        return self._generation

    @property
    def dirty(self) -> bool:
        """Whether changes arrived while the current pass was running."""
        return self._dirty

    def stop(self) -> None:
        """End the outcome stream.

        Waiting and debouncing are cancelled immediately.  A running pass
        finishes (and its outcome is yielded) first.
        """
        self._stopping = True
        self._stop_event.set()
        self._signal.set()

    async def outcomes(self) -> AsyncIterator[PassOutcome]:
        """Yield one PassOutcome per pipeline pass until stopped."""
        pump = asyncio.create_task(self._pump(), name="safe-router-watch")
        try:
            if self._initial_pass and not self._stopping:
                yield await self._run(())

            while not self._stopping:
                if not self._pending:
                    if self._source_done:
                        return
                    self._state = "idle"
                    await self._wait_signal(None)
                    continue

                self._state = "debouncing"
                while await self._wait_signal(self._config.debounce_seconds):
                    if self._stopping or self._source_done:
                        break
                if self._stopping:
                    return

                changed = tuple(sorted(self._pending))
                self._pending.clear()
                self._dirty = False
                yield await self._run(changed)
        finally:
            self._state = "stopped"
            pump.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await pump

    async def _pump(self) -> None:
        """Feed relevant changed paths into the pending set."""
        source = self._changes if self._changes is not None else self._default_changes()
        try:
            async for batch in source:
                paths = {Path(raw) for change, raw in batch if self._filter(change, raw)}
                if not paths:
                    continue
                logger.debug("Changed: %s", ", ".join(sorted(str(p) for p in paths)))
                self._pending.update(paths)
                if self._state == "running":
                    self._dirty = True
                self._signal.set()
        finally:
            self._source_done = True
            self._signal.set()

    def _default_changes(self) -> AsyncIterable[ChangeBatch]:
        from watchfiles import awatch

        return awatch(
            self._config.root,
            watch_filter=self._filter,
            stop_event=self._stop_event,
            step=50,
        )

    async def _wait_signal(self, timeout: float | None) -> bool:
        """Wait for the change signal. Returns False on timeout."""
        try:
            await asyncio.wait_for(self._signal.wait(), timeout)
        except TimeoutError:
            return False
        self._signal.clear()
        return True

    async def _run(self, changed: tuple[Path, ...]) -> PassOutcome:
        self._state = "running"
        self._generation += 1
        job = GenerationJob(
            output=self._config.output_path,
            mode=self._config.mode,
            generation=self._generation,
            changed=changed,
        )
        task = asyncio.ensure_future(asyncio.to_thread(self._regenerate, self._config, job))
        try:
            outcome = await asyncio.shield(task)
        except asyncio.CancelledError:
            # The pass owns the output file until its write completes.
            await task
            raise
        finally:
            if self._state == "running":
                self._state = "idle"

        if outcome.status == "failed":
            logger.warning("Generation %d failed: %s", outcome.generation, outcome.error)
        else:
            logger.info(
                "Generation %d %s %s (%d routes, %.1f ms)",
                outcome.generation,
                outcome.status,
                outcome.output,
                outcome.route_count,
                outcome.duration_ms,
            )
        return outcome
