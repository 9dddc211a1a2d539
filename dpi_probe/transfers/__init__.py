"""Transfer engines."""

from dpi_probe.transfers.aiohttp_engine import AiohttpTransferEngine
from dpi_probe.transfers.base import (
    DocumentFetchError,
    TransferEngine,
    TransferOutcome,
    TransferReport,
    TransferSetupError,
)

__all__ = [
    "AiohttpTransferEngine",
    "DocumentFetchError",
    "TransferEngine",
    "TransferOutcome",
    "TransferReport",
    "TransferSetupError",
]
