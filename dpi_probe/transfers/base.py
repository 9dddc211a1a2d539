"""Abstract base class for HTTP transfer engines."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, TypeAlias

from dpi_probe.meter import TransferMeter

TransferOutcome: TypeAlias = Literal["success", "timed_out", "aborted", "error"]


class TransferSetupError(Exception):
    """Raised when the transfer machinery itself cannot be set up.

    Unusable URLs are not setup failures; they end in an "error" report.
    """


class DocumentFetchError(Exception):
    """Raised when a document cannot be fetched."""


@dataclass(frozen=True, kw_only=True)
class TransferReport:
    """How a single bounded transfer ended."""

    outcome: TransferOutcome
    http_code: int = 0
    error: str | None = None


class TransferEngine(ABC):
    """Abstract HTTP transfer engine used by probes and the suite loader."""

    @abstractmethod
    async def transfer(self, url: str, meter: TransferMeter) -> TransferReport:
        """Run one bounded GET without following redirects.

        Every received chunk is fed to ``meter.on_data``; the transfer is
        terminated with outcome "aborted" as soon as ``meter.should_abort()``
        returns True.

        Args:
            url: Absolute URL to fetch
            meter: Byte counter and cancellation token of the calling probe

        Returns:
            The transfer outcome and last known HTTP status code

        Raises:
            TransferSetupError: If no transfer can be created for the request

        """

    @abstractmethod
    async def fetch_text(self, url: str) -> str:
        """Fetch a document as text, following redirects.

        Raises:
            DocumentFetchError: If the document cannot be retrieved

        """
