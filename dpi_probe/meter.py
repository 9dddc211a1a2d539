"""Per-probe byte counter doubling as the transfer's cancellation token."""

from dataclasses import dataclass

OK_THRESHOLD_BYTES = 64 * 1024


@dataclass(kw_only=True)
class TransferMeter:
    """Byte counter and early-abort latch owned by exactly one probe.

    The transfer layer feeds every received chunk to ``on_data`` and asks
    ``should_abort`` on every progress tick. Once ``threshold`` bytes have
    arrived the meter latches ``aborted_by_threshold`` and requests the
    transfer to stop.
    """

    threshold: int = OK_THRESHOLD_BYTES
    received: int = 0
    aborted_by_threshold: bool = False

    def on_data(self, chunk: bytes) -> None:
        """Account for a received data chunk."""
        self.received += len(chunk)

    def should_abort(self) -> bool:
        """Return True when the transfer should be terminated early."""
        if self.received >= self.threshold:
            self.aborted_by_threshold = True
        return self.aborted_by_threshold
