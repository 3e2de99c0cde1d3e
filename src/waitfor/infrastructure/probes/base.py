"""Base probe interface"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

ProbeResult = Tuple[bool, Optional[BaseException]]


class Probe(ABC):
    """A ready-made predicate for wait_for

    Calling a probe runs one check and returns ``(ok, error)``. Expected
    failures (service down, wrong status) are returned, not raised, so the
    wait keeps retrying them.
    """

    def __init__(self, config: Dict[str, Any]):
        """Initialize probe with configuration

        Raises:
            ValueError: If configuration is invalid
        """
        self.config = config
        self._validate_config(config)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        # Override in subclasses for specific validation
        pass

    @abstractmethod
    def check(self) -> ProbeResult:
        """Run one check"""

    @abstractmethod
    def describe(self) -> str:
        """Human description used as the default wait description"""

    def close(self) -> None:
        """Release resources held between checks"""
        pass

    def __call__(self) -> ProbeResult:
        return self.check()
