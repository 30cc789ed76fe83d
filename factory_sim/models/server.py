"""Server status — the single blade-fitting machine."""

from enum import Enum


class ServerStatus(str, Enum):
    """Operational states: WORKING ↔ BROKEN_DOWN"""
    WORKING = "working"
    BROKEN_DOWN = "broken_down"

    @property
    def code(self) -> int:
        """Numeric status used in state traces: working = 0, broken down = 1."""
        return 0 if self is ServerStatus.WORKING else 1
