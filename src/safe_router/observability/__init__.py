"""Generation observability — pass events and a bounded event log.

Quick Start:
    >>> from safe_router.observability import EventLog, GenerationFailed
    >>> log = EventLog()
    >>> # run passes with run_pass(config, job, log=log)
    >>> failures = log.query(event_type=GenerationFailed)

"""

from safe_router.observability.events import (
    GenerationCompleted,
    GenerationEvent,
    GenerationFailed,
    GenerationStarted,
    now_ns,
)
from safe_router.observability.log import EventLog

__all__ = [
    "EventLog",
    "GenerationCompleted",
    "GenerationEvent",
    "GenerationFailed",
    "GenerationStarted",
    "now_ns",
]
