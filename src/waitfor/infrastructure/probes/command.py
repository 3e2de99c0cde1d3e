"""Probe that runs a command until it exits with status 0"""

import logging
import shlex
import subprocess
from typing import Any, Dict, List

from waitfor.domain.errors import ProbeError
from waitfor.infrastructure.probes.base import Probe, ProbeResult

logger = logging.getLogger(__name__)

_OUTPUT_TAIL = 200


class CommandProbe(Probe):
    """Runs ``argv`` and reports ready on exit status 0

    Config:
        argv: Command and arguments (list of str, required)
        timeout: Seconds before a single run is killed (default: 60)
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.argv: List[str] = list(config["argv"])
        self.timeout = config.get("timeout", 60.0)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        argv = config.get("argv")
        if not argv:
            raise ValueError("command probe requires a non-empty argv")
        if "timeout" in config and config["timeout"] <= 0:
            raise ValueError("timeout must be positive")

    def describe(self) -> str:
        return f"command `{shlex.join(self.argv)}`"

    def check(self) -> ProbeResult:
        logger.debug(f"Running {self.argv}")
        try:
            proc = subprocess.run(
                self.argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return False, ProbeError(f"{self.argv[0]} timed out after {self.timeout}s")
        except FileNotFoundError as e:
            return False, e
        if proc.returncode == 0:
            return True, None
        output = (proc.stderr or proc.stdout or "").strip()[-_OUTPUT_TAIL:]
        message = f"{self.argv[0]} exited with status {proc.returncode}"
        if output:
            message = f"{message}: {output}"
        return False, ProbeError(message)
