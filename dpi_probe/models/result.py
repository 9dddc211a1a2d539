"""Models for probe results."""

from dataclasses import dataclass
from typing import Literal

Verdict = Literal[
    "not_detected",
    "possibly_detected",
    "detected_probable",
    "detected",
    "failed",
]


@dataclass(frozen=True, kw_only=True)
class ProbeResult:
    """Outcome of a single probe attempt, as handed to the reporter."""

    id: str
    provider: str
    http_code: int = 0
    received: int = 0
    verdict: Verdict
    status: str
    detail: str
    elapsed_ms: float
    aborted_by_threshold: bool = False
