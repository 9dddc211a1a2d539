"""Execution of a single probe attempt."""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from yarl import URL

from dpi_probe.classifier import classify
from dpi_probe.meter import OK_THRESHOLD_BYTES, TransferMeter
from dpi_probe.models.result import ProbeResult
from dpi_probe.models.suite import Test
from dpi_probe.reporter import ConsoleReporter
from dpi_probe.transfers.base import TransferEngine, TransferSetupError

log = logging.getLogger(__name__)


def random_cache_buster(result_id: str) -> str:
    """Return a value unique enough to defeat intermediate caches."""
    return uuid.uuid4().hex[:16]


def probe_id(test: Test, index: int) -> str:
    """Return the per-attempt id, suffixed with the index for repeated tests."""
    return f"{test.id}@{index}" if test.times > 1 else test.id


def with_cache_buster(url: str, token: str) -> str:
    """Append the ``t`` cache-busting query parameter to ``url``.

    A URL that cannot be parsed is returned as is; the transfer reports it.
    """
    try:
        return str(URL(url).update_query(t=token))
    except (TypeError, ValueError):
        return url


@dataclass(frozen=True, kw_only=True)
class ProbeExecutor:
    """Runs probe attempts: one bounded transfer each, classified and reported."""

    engine: TransferEngine
    reporter: ConsoleReporter
    threshold: int = OK_THRESHOLD_BYTES
    cache_buster: Callable[[str], str] = field(default=random_cache_buster)

    async def run_probe(self, test: Test, index: int) -> ProbeResult | None:
        """Run attempt ``index`` of ``test`` and report its result.

        Returns:
            The reported result, or None when the transfer could not be set up.

        """
        result_id = probe_id(test, index)
        meter = TransferMeter(threshold=self.threshold)
        started = time.perf_counter()

        url = with_cache_buster(test.url, self.cache_buster(result_id))
        self.reporter.start(result_id, url)
        try:
            report = await self.engine.transfer(url, meter)
        except TransferSetupError as e:
            log.debug("Probe %s could not start: %s", result_id, e)
            self.reporter.message(result_id, f"transfer setup failed: {e}")
            return None

        elapsed_ms = (time.perf_counter() - started) * 1000
        diagnosis = classify(
            report.outcome,
            meter.received,
            meter.aborted_by_threshold,
            error=report.error,
            threshold=self.threshold,
        )

        result = ProbeResult(
            id=result_id,
            provider=test.provider,
            http_code=report.http_code,
            received=meter.received,
            verdict=diagnosis.verdict,
            status=diagnosis.status,
            detail=diagnosis.detail,
            elapsed_ms=elapsed_ms,
            aborted_by_threshold=meter.aborted_by_threshold,
        )
        self.reporter.result(result)
        return result
