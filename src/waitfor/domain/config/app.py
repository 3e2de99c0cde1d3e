"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from waitfor.domain.config.probes import CommandProbeConfig, HttpProbeConfig, TcpProbeConfig
from waitfor.domain.config.wait import WaitConfig


class AppConfig(BaseModel):
    """Root configuration loaded from .waitfor.yml

    Attributes:
        wait: Default wait settings
        http: http probe settings
        command: command probe settings
        tcp: tcp probe settings
    """

    wait: WaitConfig = Field(default_factory=WaitConfig)
    http: HttpProbeConfig = Field(default_factory=HttpProbeConfig)
    command: CommandProbeConfig = Field(default_factory=CommandProbeConfig)
    tcp: TcpProbeConfig = Field(default_factory=TcpProbeConfig)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "wait": {
                    "limit": 300,
                    "min_interval": 1.0,
                    "max_interval": 15.0,
                    "backoff": 1.05,
                    "reports": 10,
                },
                "http": {
                    "expected_status": [200, 204],
                    "timeout": 5.0,
                    "verify": True,
                },
            }
        },
    )
