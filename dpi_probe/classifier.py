"""Classification of raw transfer telemetry into an interference diagnosis."""

from dataclasses import dataclass

from dpi_probe.meter import OK_THRESHOLD_BYTES
from dpi_probe.models.result import Verdict
from dpi_probe.transfers.base import TransferOutcome


@dataclass(frozen=True, kw_only=True)
class Diagnosis:
    """Verdict with its short status label and human-readable detail."""

    verdict: Verdict
    status: str
    detail: str


NOT_DETECTED = "Not detected"
POSSIBLY_DETECTED = "Possibly detected"
DETECTED_PROBABLE = "Detected (probable)"
DETECTED = "Detected"
FAILED = "Failed to complete"


def classify(
    outcome: TransferOutcome,
    received: int,
    aborted_by_threshold: bool,
    error: str | None = None,
    threshold: int = OK_THRESHOLD_BYTES,
) -> Diagnosis:
    """Diagnose one transfer from its outcome and byte count.

    Args:
        outcome: How the transfer ended
        received: Bytes received before the transfer ended
        aborted_by_threshold: Whether the probe itself stopped the transfer
        error: Transport error description, used for the "error" outcome
        threshold: Byte count considered enough to rule out interference

    Returns:
        The diagnosis. Identical inputs always yield identical diagnoses.

    """
    match outcome:
        case "success" if received >= threshold:
            return Diagnosis(
                verdict="not_detected",
                status=NOT_DETECTED,
                detail="Received >= threshold",
            )
        case "success":
            return Diagnosis(
                verdict="possibly_detected",
                status=POSSIBLY_DETECTED,
                detail="Stream ended, data too small",
            )
        case "timed_out" if received == 0:
            return Diagnosis(
                verdict="detected_probable",
                status=DETECTED_PROBABLE,
                detail="Timeout with zero bytes (likely connection blocked)",
            )
        case "timed_out":
            return Diagnosis(
                verdict="detected",
                status=DETECTED,
                detail="Timeout after partial data (read blocked)",
            )
        case "aborted" if aborted_by_threshold:
            return Diagnosis(
                verdict="not_detected",
                status=NOT_DETECTED,
                detail="Early abort: threshold reached",
            )
        case "aborted":
            return Diagnosis(
                verdict="detected",
                status=DETECTED,
                detail="Unexpected abort before threshold",
            )
        case _:
            return Diagnosis(
                verdict="failed",
                status=FAILED,
                detail=f"transfer_error={error or 'unknown error'}",
            )
