"""Append-only diagnostic log shared by every scan in the process."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

logger = logging.getLogger("mobsf_mcp.diagnostic")


class DiagnosticSink(Protocol):
    """Anything that accepts one diagnostic message per call."""

    def append(self, message: str) -> None: ...


class DiagnosticLog:
    """Appends ``[<iso timestamp>] <message>`` lines to a file with file locking.

    Every message is also emitted on the ``mobsf_mcp.diagnostic`` logger,
    which :func:`mobsf_mcp.logging_config.configure_logging` routes to stderr.
    """

    def __init__(self, log_path: Path) -> None:
        self._path = Path(log_path)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, message: str) -> None:
        """Append a single line. Write failures are reported, never raised."""
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        line = f"[{timestamp}] {message}\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._append_locked(line)
        except OSError as exc:
            logger.warning("Could not write diagnostic log %s: %s", self._path, exc)
        logger.info(message)

    def read_lines(self) -> list[str]:
        """Return the logged lines, oldest first."""
        if not self._path.exists():
            return []
        return [
            raw_line
            for raw_line in self._path.read_text(encoding="utf-8").splitlines()
            if raw_line.strip()
        ]

    def _append_locked(self, line: str) -> None:
        """Append with OS-level file locking for concurrent safety."""
        fd = os.open(str(self._path), os.O_WRONLY | os.O_CREAT | os.O_APPEND)
        try:
            if sys.platform == "win32":
                import msvcrt
                msvcrt.locking(fd, msvcrt.LK_LOCK, 1)
                try:
                    os.write(fd, line.encode("utf-8"))
                finally:
                    os.lseek(fd, 0, os.SEEK_SET)
                    msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)
            else:
                import fcntl
                fcntl.flock(fd, fcntl.LOCK_EX)
                try:
                    os.write(fd, line.encode("utf-8"))
                finally:
                    fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
