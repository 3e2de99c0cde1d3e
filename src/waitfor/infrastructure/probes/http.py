"""Probe that polls an HTTP endpoint"""

import logging
from typing import Any, Dict, List

import requests

from waitfor.domain.errors import ProbeError
from waitfor.infrastructure.probes.base import Probe, ProbeResult

logger = logging.getLogger(__name__)


class HttpProbe(Probe):
    """GETs ``url`` and reports ready when the status is expected

    Config:
        url: URL to request (required)
        expected_status: Accepted status codes (default: [200])
        timeout: Per-request timeout in seconds (default: 5)
        verify: Verify TLS certificates (default: True)
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.url: str = config["url"]
        self.expected_status: List[int] = list(config.get("expected_status") or [200])
        self.timeout = config.get("timeout", 5.0)
        self.verify = config.get("verify", True)
        self.session = requests.Session()

    def _validate_config(self, config: Dict[str, Any]) -> None:
        url = config.get("url")
        if not url:
            raise ValueError("http probe requires a url")
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Unsupported URL scheme: {url}")

    def describe(self) -> str:
        return f"{self.url} to return {'/'.join(str(s) for s in self.expected_status)}"

    def check(self) -> ProbeResult:
        logger.debug(f"HTTP GET {self.url}")
        try:
            resp = self.session.get(self.url, timeout=self.timeout, verify=self.verify)
        except requests.exceptions.RequestException as e:
            return False, e
        if resp.status_code in self.expected_status:
            return True, None
        return False, ProbeError(f"GET {self.url} returned {resp.status_code}")

    def close(self) -> None:
        self.session.close()
