"""Serialized console output shared by all concurrent probes."""

import sys
import threading
from datetime import datetime
from typing import TextIO

from dpi_probe.models.result import ProbeResult, Verdict

STATUS_SYMBOLS: dict[Verdict, str] = {
    "not_detected": "✅",
    "possibly_detected": "⚠️",
    "detected_probable": "❗",
    "detected": "❗",
    "failed": "⚠️",
}

STATUS_WIDTH = 24


def timestamp(now: datetime | None = None) -> str:
    """Format a wall-clock timestamp as ``[HH:MM:SS.mmm]``."""
    now = now or datetime.now()
    return f"[{now:%H:%M:%S}.{now.microsecond // 1000:03d}]"


def format_status(result: ProbeResult) -> str:
    """Return the status label with its symbol, truncated to fit the column."""
    status = f"{result.status} {STATUS_SYMBOLS.get(result.verdict, '?')}"
    if len(status) > STATUS_WIDTH:
        status = status[: STATUS_WIDTH - 3] + "..."
    return status


def format_result(result: ProbeResult, now: datetime | None = None) -> str:
    """Format one result as a fixed-width status line."""
    return (
        f"{timestamp(now)} {result.id:<15} {result.http_code:>4} "
        f"{result.received:>8} {result.elapsed_ms:>10.1f} ms "
        f"{format_status(result):<{STATUS_WIDTH}} {result.detail}"
    )


class ConsoleReporter:
    """Writes whole lines to one stream, never interleaving two writers.

    On a terminal, "starting" lines are drawn in place and overwritten by the
    next line; elsewhere every line is written out in full.
    """

    def __init__(self, stream: TextIO | None = None, inline: bool | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.inline = self.stream.isatty() if inline is None else inline
        self._lock = threading.Lock()

    def start(self, probe_id: str, url: str) -> None:
        """Announce that a probe is starting its request."""
        line = f"{timestamp()} {probe_id} - Starting request -> {url}"
        self._write(line, newline=not self.inline)

    def result(self, result: ProbeResult) -> None:
        """Write the status line of a completed probe."""
        self._write(format_result(result), newline=True)

    def message(self, prefix: str, text: str) -> None:
        """Write a standalone message, optionally prefixed by a probe id."""
        if prefix:
            line = f"{timestamp()} {prefix} - {text}"
        else:
            line = f"{timestamp()} {text}"
        self._write(line, newline=True)

    def _write(self, line: str, *, newline: bool) -> None:
        with self._lock:
            if self.inline:
                line = f"\r{line}\033[K"
            self.stream.write(line + "\n" if newline else line)
            self.stream.flush()
