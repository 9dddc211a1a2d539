"""Concurrent fan-out of probe attempts."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from dpi_probe.executor import ProbeExecutor
from dpi_probe.models.result import ProbeResult
from dpi_probe.models.suite import Test

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ProbeDispatcher:
    """Starts every repetition of every test at once and waits for all of them."""

    executor: ProbeExecutor

    async def run(self, tests: Sequence[Test]) -> Sequence[ProbeResult]:
        """Run all probes of ``tests`` concurrently.

        Args:
            tests: Suite to run; each test runs ``times`` times

        Returns:
            Reported results in completion order, one per probe that could
            be started

        """
        completed: list[ProbeResult] = []

        async def probe(test: Test, index: int) -> None:
            if (result := await self.executor.run_probe(test, index)) is not None:
                completed.append(result)

        tasks = [
            asyncio.create_task(probe(test, index), name=f"probe-{test.id}-{index}")
            for test in tests
            for index in range(test.times)
        ]
        if not tasks:
            log.info("No probes to run")
            return []

        log.info("Dispatching %d probe(s) for %d test(s)...", len(tasks), len(tests))
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        for task, outcome in zip(tasks, outcomes, strict=True):
            if isinstance(outcome, Exception):
                log.error(
                    "Probe %s crashed: %s", task.get_name(), outcome, exc_info=outcome
                )

        log.info("Probe execution completed")
        return completed
