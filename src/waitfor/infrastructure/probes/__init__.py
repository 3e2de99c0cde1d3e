"""Probes: ready-made predicates for wait_for"""

from waitfor.infrastructure.probes.base import Probe
from waitfor.infrastructure.probes.command import CommandProbe
from waitfor.infrastructure.probes.factory import ProbeFactory
from waitfor.infrastructure.probes.http import HttpProbe
from waitfor.infrastructure.probes.tcp import TcpProbe

__all__ = ["Probe", "CommandProbe", "HttpProbe", "TcpProbe", "ProbeFactory"]
