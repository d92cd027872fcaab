"""Generation event model.

Every regeneration pass records a start event and exactly one terminal
event (completed or failed).  All events are frozen dataclasses with a
monotonic nanosecond timestamp, safe to share across threads: the watch
coordinator runs passes in a worker thread while the event loop reads the
log.
"""

import time
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class GenerationStarted:
    """A pipeline pass began.

    Attributes:
        generation: Pass number (monotonically increasing per process).
        output: Artifact path being regenerated.
        trigger_count: Number of changed paths that triggered the pass
            (0 for the initial or one-shot pass).
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    generation: int
    output: str
    trigger_count: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationCompleted:
    """A pipeline pass finished and the artifact is current.

    Attributes:
        generation: Pass number.
        output: Artifact path.
        route_count: Number of routes in the emitted table.
        written: False when the artifact already held identical content.
        duration_ms: Wall-clock time of the pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    generation: int
    output: str
    route_count: int
    written: bool
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationFailed:
    """A pipeline pass aborted; the previous artifact was left untouched.

    Attributes:
        generation: Pass number.
        output: Artifact path.
        error_type: Class name of the error (e.g. ``ConflictingRoute``).
        message: Error message, naming the offending sources.
        duration_ms: Wall-clock time until the abort.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    generation: int
    output: str
    error_type: str
    message: str
    duration_ms: float
    timestamp_ns: int


GenerationEvent: TypeAlias = GenerationStarted | GenerationCompleted | GenerationFailed


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
