"""Atomic artifact writes.

The artifact is rendered in full, written to a temporary file next to the
output, flushed to disk, then moved over the output with ``os.replace``.
Readers (a type checker, a bundler) watching the output path only ever see
the old file or the complete new one.
"""

from __future__ import annotations

import contextlib
import logging
import os
import stat
import tempfile
from typing import TYPE_CHECKING

from safe_router._errors import WriteFailure
from safe_router.emit.render import render

if TYPE_CHECKING:
    from pathlib import Path

    from safe_router._types import EmitMode
    from safe_router.routes.table import RouteTable

logger = logging.getLogger(__name__)

_DEFAULT_MODE = 0o644


def temp_prefix(output: Path) -> str:
    """Name prefix of temporary files created next to *output*."""
    return f".{output.name}."


def write_atomic(output: Path, text: str) -> bool:
    """Replace *output* with *text* atomically.

    Returns False without touching the file when it already holds *text*.

    Raises:
        WriteFailure: If the directory or file cannot be written.

    """
    data = text.encode("utf-8")
    try:
        if output.is_file() and output.read_bytes() == data:
            logger.debug("Artifact unchanged: %s", output)
            return False

        output.parent.mkdir(parents=True, exist_ok=True)
        mode = stat.S_IMODE(output.stat().st_mode) if output.exists() else _DEFAULT_MODE

        fd, tmp_name = tempfile.mkstemp(
            prefix=temp_prefix(output), suffix=".tmp", dir=output.parent,
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, output)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        raise WriteFailure(output, exc.strerror or str(exc)) from exc

    logger.debug("Wrote %d bytes to %s", len(data), output)
    return True


def emit(table: RouteTable, output: Path, mode: EmitMode) -> bool:
    """Render *table* and write it to *output*. Returns True if the file changed."""
    return write_atomic(output, render(table, mode))
