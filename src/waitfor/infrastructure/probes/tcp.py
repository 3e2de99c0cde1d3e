"""Probe that waits for a TCP port to accept connections"""

import logging
import socket
from typing import Any, Dict

from waitfor.infrastructure.probes.base import Probe, ProbeResult

logger = logging.getLogger(__name__)


class TcpProbe(Probe):
    """Connects to ``host:port`` and reports ready once the connection succeeds

    Config:
        host: Host name or address (required)
        port: Port number (required)
        timeout: Connect timeout in seconds (default: 5)
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.host: str = config["host"]
        self.port: int = int(config["port"])
        self.timeout = config.get("timeout", 5.0)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        if not config.get("host"):
            raise ValueError("tcp probe requires a host")
        port = config.get("port")
        if port is None or not 0 < int(port) < 65536:
            raise ValueError(f"Invalid port: {port}")

    def describe(self) -> str:
        return f"tcp {self.host}:{self.port}"

    def check(self) -> ProbeResult:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True, None
        except OSError as e:
            return False, e
