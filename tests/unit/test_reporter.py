"""Tests for the console reporter."""

import io
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from dpi_probe.reporter import (
    ConsoleReporter,
    format_result,
    format_status,
    timestamp,
)
from dpi_probe.testing.factories import ProbeResultFactory

NOW = datetime(2026, 1, 2, 3, 4, 5, 678901)


def test_timestamp_format() -> None:
    """Formats hours, minutes, seconds and milliseconds."""
    assert timestamp(NOW) == "[03:04:05.678]"


def test_format_result_columns() -> None:
    """Formats id, status code, bytes, elapsed time, status and detail."""
    result = ProbeResultFactory.build(
        id="CF-01@2",
        http_code=200,
        received=65536,
        elapsed_ms=123.456,
        verdict="not_detected",
        status="Not detected",
        detail="Early abort: threshold reached",
    )

    line = format_result(result, NOW)

    assert line.startswith("[03:04:05.678] CF-01@2 ")
    assert " 200 " in line
    assert " 65536 " in line
    assert "123.5 ms" in line
    assert "Not detected ✅" in line
    assert line.endswith("Early abort: threshold reached")


def test_format_status_keeps_known_labels() -> None:
    """Every classifier label fits the status column untruncated."""
    for verdict, status in [
        ("not_detected", "Not detected"),
        ("possibly_detected", "Possibly detected"),
        ("detected_probable", "Detected (probable)"),
        ("detected", "Detected"),
        ("failed", "Failed to complete"),
    ]:
        result = ProbeResultFactory.build(verdict=verdict, status=status)

        assert format_status(result).startswith(status)


def test_format_status_truncates_long_labels() -> None:
    """Truncates labels wider than the status column."""
    result = ProbeResultFactory.build(status="Something much longer than the column")

    status = format_status(result)

    assert len(status) == 24
    assert status.endswith("...")


def test_result_writes_one_line() -> None:
    """Writes the formatted result followed by a newline."""
    stream = io.StringIO()
    reporter = ConsoleReporter(stream, inline=False)

    reporter.result(ProbeResultFactory.build(id="A"))

    output = stream.getvalue()
    assert output.count("\n") == 1
    assert " A " in output


def test_message_with_and_without_prefix() -> None:
    """Writes standalone messages with an optional prefix."""
    stream = io.StringIO()
    reporter = ConsoleReporter(stream, inline=False)

    reporter.message("MAIN", "All tests finished.")
    reporter.message("", "bare")

    lines = stream.getvalue().splitlines()
    assert lines[0].endswith("MAIN - All tests finished.")
    assert re.fullmatch(r"\[\d\d:\d\d:\d\d\.\d{3}\] bare", lines[1])


def test_start_line_drawn_in_place_on_terminal() -> None:
    """On a terminal the start line is redrawn in place without a newline."""
    stream = io.StringIO()
    reporter = ConsoleReporter(stream, inline=True)

    reporter.start("A", "https://probe.test/?t=1")

    output = stream.getvalue()
    assert output.startswith("\r")
    assert output.endswith("\033[K")
    assert "A - Starting request -> https://probe.test/?t=1" in output


def test_start_line_written_in_full_off_terminal() -> None:
    """Off a terminal the start line is a plain line."""
    stream = io.StringIO()
    reporter = ConsoleReporter(stream)

    reporter.start("A", "https://probe.test/")

    assert stream.getvalue().endswith("A - Starting request -> https://probe.test/\n")


def test_concurrent_writers_never_interleave() -> None:
    """Lines written from many threads stay whole."""
    stream = io.StringIO()
    reporter = ConsoleReporter(stream, inline=False)

    def write(worker: int) -> None:
        for i in range(50):
            reporter.message(f"W{worker}", f"line {i} " + "x" * 200)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(write, range(8)))

    lines = stream.getvalue().splitlines()
    assert len(lines) == 400
    pattern = re.compile(r"\[[\d:.]+\] W\d - line \d+ x{200}")
    assert all(pattern.fullmatch(line) for line in lines)
