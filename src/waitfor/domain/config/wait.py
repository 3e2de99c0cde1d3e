"""Wait settings configuration model."""

from typing import Optional

from pydantic import BaseModel, Field


class WaitConfig(BaseModel):
    """Default wait settings for the CLI.

    Attributes:
        limit: Total time budget in seconds
        min_interval: Starting interval in seconds
        max_interval: Maximum interval in seconds
        backoff: Interval growth factor (>= 1.0)
        reports: Approximate number of progress reports (0 disables)
        description: Human description of the condition (None = derived from the probe)
        exit_on_error: Stop at the first probe error
    """

    limit: float = Field(30 * 60.0, ge=0.0)
    min_interval: float = Field(1.0, ge=0.0)
    max_interval: float = Field(60.0, ge=0.0)
    backoff: float = Field(1.02, ge=1.0, le=10.0)
    reports: int = Field(30, ge=0)
    description: Optional[str] = None
    exit_on_error: bool = False
