"""Configuration for a probe run."""

from pydantic import BaseModel, Field

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_SUITE_URL = (
    "https://raw.githubusercontent.com/hyperion-cs/dpi-checkers"
    "/refs/heads/main/ru/tcp-16-20/suite.json"
)
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36"
)


class ProbeConfig(BaseModel):
    """Configuration shared by every probe in a run."""

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    suite_url: str = DEFAULT_SUITE_URL
    user_agent: str = DEFAULT_USER_AGENT
    # aiohttp only decodes brotli when the optional brotli package is present
    accept_encoding: str = "gzip, deflate"

    @property
    def timeout(self) -> float:
        """Total per-probe timeout in seconds."""
        return self.timeout_ms / 1000

    @property
    def stall_timeout(self) -> float | None:
        """Seconds without any received data before the transfer stalls out.

        Disabled (None) for sub-second timeouts.
        """
        seconds = self.timeout_ms // 1000
        return float(seconds) if seconds > 0 else None
