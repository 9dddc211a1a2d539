"""Models for test suite entries scraped from the published suite document."""

from pydantic import BaseModel, ConfigDict, Field


class Test(BaseModel):
    """Declarative probe target: a URL, a label and a repetition count."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Short test identifier")
    provider: str = Field(default="", description="Informational provider label")
    url: str = Field(default="", description="Absolute URL to probe")
    times: int = Field(default=0, ge=0, description="Number of repetitions")
