"""aiohttp-backed transfer engine."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from yarl import URL

from dpi_probe.config import ProbeConfig
from dpi_probe.meter import TransferMeter
from dpi_probe.transfers.base import (
    DocumentFetchError,
    TransferEngine,
    TransferReport,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class AiohttpTransferEngine(TransferEngine):
    """Transfer engine running every request on one shared client session."""

    config: ProbeConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ProbeConfig
    ) -> AsyncGenerator["AiohttpTransferEngine", None]:
        """Create engine with managed session lifecycle.

        The connector is uncapped and never reuses connections, so every probe
        opens its own connection.
        """
        connector = aiohttp.TCPConnector(limit=0, force_close=True)
        headers = {"User-Agent": config.user_agent}
        async with aiohttp.ClientSession(
            connector=connector, headers=headers
        ) as session:
            yield cls(config=config, session=session)

    async def transfer(self, url: str, meter: TransferMeter) -> TransferReport:
        """Run one bounded GET, feeding the meter and honoring its abort."""
        try:
            target = _absolute_url(url)
        except (TypeError, ValueError) as e:
            return TransferReport(outcome="error", error=f"Malformed URL: {e}")

        timeout = aiohttp.ClientTimeout(
            total=self.config.timeout, sock_read=self.config.stall_timeout
        )
        headers = {"Accept-Encoding": self.config.accept_encoding}
        http_code = 0

        try:
            async with self.session.get(
                target, allow_redirects=False, timeout=timeout, headers=headers
            ) as response:
                http_code = response.status
                if meter.should_abort():
                    return TransferReport(outcome="aborted", http_code=http_code)

                async for chunk in response.content.iter_any():
                    meter.on_data(chunk)
                    if meter.should_abort():
                        return TransferReport(outcome="aborted", http_code=http_code)
        except TimeoutError:
            return TransferReport(outcome="timed_out", http_code=http_code)
        except aiohttp.ClientError as e:
            return TransferReport(
                outcome="error", http_code=http_code, error=_describe(e)
            )

        return TransferReport(outcome="success", http_code=http_code)

    async def fetch_text(self, url: str) -> str:
        """Fetch a document as text, following redirects."""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        try:
            async with self.session.get(
                url, allow_redirects=True, timeout=timeout
            ) as response:
                if response.status >= 400:
                    raise DocumentFetchError(
                        f"Failed to fetch {url}: HTTP {response.status}"
                    )
                return await response.text(errors="replace")
        except TimeoutError as e:
            raise DocumentFetchError(f"Timed out fetching {url}") from e
        except (aiohttp.ClientError, ValueError) as e:
            raise DocumentFetchError(f"Failed to fetch {url}: {_describe(e)}") from e


def _absolute_url(url: str) -> URL:
    target = URL(url)
    if not target.absolute or target.scheme not in {"http", "https"}:
        raise ValueError(f"Not an absolute HTTP(S) URL: {url!r}")
    return target


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__
