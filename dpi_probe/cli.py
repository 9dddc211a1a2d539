"""CLI entry point for the DPI probe runner."""

import argparse
import asyncio
import logging
import sys
from collections import Counter
from collections.abc import Mapping, Sequence

from dpi_probe.builtin_suite import BUILTIN_SUITE
from dpi_probe.config import DEFAULT_TIMEOUT_MS, ProbeConfig
from dpi_probe.dispatcher import ProbeDispatcher
from dpi_probe.executor import ProbeExecutor
from dpi_probe.models.result import ProbeResult, Verdict
from dpi_probe.reporter import STATUS_SYMBOLS, ConsoleReporter
from dpi_probe.suite_loader import load_suite
from dpi_probe.transfers import AiohttpTransferEngine

VERDICT_LABELS: Mapping[Verdict, str] = {
    "not_detected": "Not detected",
    "possibly_detected": "Possibly detected",
    "detected_probable": "Detected (probable)",
    "detected": "Detected",
    "failed": "Failed to complete",
}


def parse_timeout(value: str | None) -> int:
    """Parse the timeout argument, falling back to the default when unusable."""
    if value is None:
        return DEFAULT_TIMEOUT_MS
    try:
        timeout_ms = int(value.strip())
    except ValueError:
        return DEFAULT_TIMEOUT_MS
    return timeout_ms if timeout_ms > 0 else DEFAULT_TIMEOUT_MS


def summarize(results: Sequence[ProbeResult]) -> dict[Verdict, int]:
    """Count results per verdict, listing every verdict."""
    counts = Counter(result.verdict for result in results)
    return {verdict: counts.get(verdict, 0) for verdict in VERDICT_LABELS}


def log_results_summary(log: logging.Logger, results: Sequence[ProbeResult]) -> None:
    """Log how many probes ended with each verdict."""
    log.info("=" * 60)
    log.info("Probe Results Summary (%d probe(s)):", len(results))
    log.info("=" * 60)

    for verdict, count in summarize(results).items():
        if count:
            log.info(
                "%s %s: %d", STATUS_SYMBOLS[verdict], VERDICT_LABELS[verdict], count
            )


async def run(config: ProbeConfig, reporter: ConsoleReporter) -> int:
    """Load the suite, run every probe and return the exit code."""
    log = logging.getLogger("dpi_probe")

    async with AiohttpTransferEngine.from_config(config) as engine:
        tests = await load_suite(engine, config.suite_url, BUILTIN_SUITE)
        log.info(
            "Running %d test(s) with timeout=%dms", len(tests), config.timeout_ms
        )

        executor = ProbeExecutor(engine=engine, reporter=reporter)
        results = await ProbeDispatcher(executor=executor).run(tests)

    log_results_summary(log, results)
    reporter.message("MAIN", "All tests finished.")
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Probe a list of remote targets for DPI interference"
    )
    parser.add_argument(
        "timeout_ms",
        nargs="?",
        default=None,
        help=f"Per-probe timeout in milliseconds (default: {DEFAULT_TIMEOUT_MS})",
    )

    args, _ = parser.parse_known_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = ProbeConfig(timeout_ms=parse_timeout(args.timeout_ms))
    exit_code = asyncio.run(run(config, ConsoleReporter()))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
