"""Probe configuration models."""

from typing import List

from pydantic import BaseModel, Field


class HttpProbeConfig(BaseModel):
    """Configuration for the http probe.

    Attributes:
        expected_status: Status codes that count as ready
        timeout: Per-request timeout in seconds
        verify: Verify TLS certificates
    """

    expected_status: List[int] = Field(default_factory=lambda: [200])
    timeout: float = Field(5.0, gt=0.0)
    verify: bool = True


class CommandProbeConfig(BaseModel):
    """Configuration for the command probe."""

    timeout: float = Field(60.0, gt=0.0)


class TcpProbeConfig(BaseModel):
    """Configuration for the tcp probe."""

    timeout: float = Field(5.0, gt=0.0)
