"""Factory for creating probes"""

import logging
from typing import Any, Dict

from waitfor.infrastructure.probes.base import Probe
from waitfor.infrastructure.probes.command import CommandProbe
from waitfor.infrastructure.probes.http import HttpProbe
from waitfor.infrastructure.probes.tcp import TcpProbe

logger = logging.getLogger(__name__)


class ProbeFactory:
    """Factory for creating probe instances"""

    PROBES = {
        "command": CommandProbe,
        "http": HttpProbe,
        "tcp": TcpProbe,
    }

    @classmethod
    def create(cls, probe_type: str, config: Dict[str, Any] = None) -> Probe:
        """Create probe instance

        Args:
            probe_type: Type of probe (command, http, tcp)
            config: Probe configuration

        Raises:
            ValueError: If probe type is not supported or config is invalid
        """
        if config is None:
            config = {}

        probe_type_lower = probe_type.lower()
        if probe_type_lower not in cls.PROBES:
            available = ", ".join(cls.PROBES.keys())
            raise ValueError(f"Unknown probe: {probe_type}. Available probes: {available}")

        probe_class = cls.PROBES[probe_type_lower]
        logger.debug(f"Creating {probe_type_lower} probe")
        return probe_class(config)
