"""Configuration models with Pydantic validation."""

from waitfor.domain.config.app import AppConfig
from waitfor.domain.config.probes import CommandProbeConfig, HttpProbeConfig, TcpProbeConfig
from waitfor.domain.config.wait import WaitConfig

__all__ = [
    "AppConfig",
    "WaitConfig",
    "HttpProbeConfig",
    "CommandProbeConfig",
    "TcpProbeConfig",
]
