"""safe-router application — the generation pipeline and its entry points.

One pipeline pass runs Adapter -> Normalizer -> Table Builder -> Emitter
and reports a PassOutcome.  The two public functions are the entry points:

    generate(root)   one pass, raises on failure
    watch(root)      async stream of passes, one per settled change burst
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from safe_router._errors import (
    ConfigError,
    ConflictingRoute,
    NormalizationError,
    SafeRouterError,
    ScanError,
    WriteFailure,
)
from safe_router.config_loader import load_config
from safe_router.discovery import scan
from safe_router.emit import emit
from safe_router.observability.events import (
    GenerationCompleted,
    GenerationFailed,
    GenerationStarted,
    now_ns,
)
from safe_router.routes import build, normalize

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator

    from watchfiles import Change

    from safe_router._types import EmitMode, PassStatus
    from safe_router.config import GeneratorConfig
    from safe_router.observability.log import EventLog
    from safe_router.routes import RouteTable

logger = logging.getLogger(__name__)

# Errors that abort a single pass; anything else ends the invocation.
_PASS_ERRORS = (NormalizationError, ConflictingRoute, WriteFailure, ConfigError, ScanError)


@dataclass(frozen=True, slots=True)
class GenerationJob:
    """One requested regeneration of the artifact.

    Attributes:
        output: Absolute artifact path.
        mode: Emission shape.
        generation: Pass number, increasing per coordinator.
        changed: Paths whose change triggered the pass (empty for the
            initial or one-shot pass).

    """

    output: Path
    mode: EmitMode
    generation: int
    changed: tuple[Path, ...] = ()


@dataclass(frozen=True, slots=True)
class PassOutcome:
    """Result of one pipeline pass."""

    generation: int
    status: PassStatus
    output: Path
    route_count: int
    duration_ms: float
    error: SafeRouterError | None = None
    changed: tuple[Path, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status != "failed"


def build_table(config: GeneratorConfig) -> RouteTable:
    """Scan the project under *config* and build its route table.

    Raises:
        RootNotFound: If the project root or routes root is missing.
        UnsupportedConvention: If the project type has no adapter.
        NormalizationError: If a route token is malformed.
        ConflictingRoute: If two sources map to the same route.

    """
    nodes = scan(config.root, config.project_type, config.routes_dir)
    return build(normalize(node) for node in nodes)


def run_pass(
    config: GeneratorConfig,
    job: GenerationJob,
    *,
    log: EventLog | None = None,
) -> PassOutcome:
    """Run one full pipeline pass for *job*.

    Per-pass errors are captured in a ``failed`` outcome and leave the
    previous artifact untouched.  A missing root or an unsupported
    convention propagates.
    """
    t0 = time.perf_counter()
    if log is not None:
        log.append(GenerationStarted(
            generation=job.generation,
            output=str(job.output),
            trigger_count=len(job.changed),
            timestamp_ns=now_ns(),
        ))

    try:
        table = build_table(config)
        written = emit(table, job.output, job.mode)
    except _PASS_ERRORS as exc:
        duration_ms = (time.perf_counter() - t0) * 1000
        logger.debug("Pass %d aborted: %s", job.generation, exc)
        if log is not None:
            log.append(GenerationFailed(
                generation=job.generation,
                output=str(job.output),
                error_type=type(exc).__name__,
                message=str(exc),
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            ))
        return PassOutcome(
            generation=job.generation,
            status="failed",
            output=job.output,
            route_count=0,
            duration_ms=duration_ms,
            error=exc,
            changed=job.changed,
        )

    duration_ms = (time.perf_counter() - t0) * 1000
    if log is not None:
        log.append(GenerationCompleted(
            generation=job.generation,
            output=str(job.output),
            route_count=len(table),
            written=written,
            duration_ms=duration_ms,
            timestamp_ns=now_ns(),
        ))
    return PassOutcome(
        generation=job.generation,
        status="written" if written else "unchanged",
        output=job.output,
        route_count=len(table),
        duration_ms=duration_ms,
        changed=job.changed,
    )


def generate(
    root: str | Path = ".",
    *,
    config: GeneratorConfig | None = None,
    log: EventLog | None = None,
    **kwargs: object,
) -> PassOutcome:
    """Generate the route types once.

    Args:
        root: Path to the project root.
        config: Pre-loaded configuration; *root* and *kwargs* are ignored
            when given.
        log: Optional event log receiving generation events.
        **kwargs: Override GeneratorConfig fields.

    Raises:
        SafeRouterError: On any failure; the artifact is left untouched.

    """
    if config is None:
        config = load_config(Path(root), **kwargs)
    job = GenerationJob(output=config.output_path, mode=config.mode, generation=1)
    outcome = run_pass(config, job, log=log)
    if outcome.error is not None:
        raise outcome.error
    logger.info("%s %s (%d routes)", outcome.status.capitalize(), outcome.output, outcome.route_count)
    return outcome


async def watch(
    root: str | Path = ".",
    *,
    config: GeneratorConfig | None = None,
    log: EventLog | None = None,
    changes: AsyncIterable[set[tuple[Change, str]]] | None = None,
    **kwargs: object,
) -> AsyncIterator[PassOutcome]:
    """Generate the route types, then regenerate as the sources change.

    Yields one PassOutcome per pass, starting with the initial pass.
    Failed passes are yielded rather than raised.

    Args:
        root: Path to the project root.
        config: Pre-loaded configuration; *root* and *kwargs* are ignored
            when given.
        log: Optional event log receiving generation events.
        changes: Change batch source (defaults to ``watchfiles.awatch``).
        **kwargs: Override GeneratorConfig fields.

    """
    from safe_router.watcher.coordinator import WatchCoordinator

    if config is None:
        config = load_config(Path(root), **kwargs)
    coordinator = WatchCoordinator(config, changes=changes, log=log)
    async for outcome in coordinator.outcomes():
        yield outcome
