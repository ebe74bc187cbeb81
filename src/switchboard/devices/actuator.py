"""Actuator capability and a logging implementation."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

import structlog

log = structlog.get_logger()


class Level(str, Enum):
    """Electrical output level."""

    LOW = "low"
    HIGH = "high"


@runtime_checkable
class Actuator(Protocol):
    """Interface for the physical output driven by the shared state."""

    def apply(self, value: bool) -> None:
        """Drive the output for a logical value (True = on)."""
        ...


class LogActuator:
    """Actuator that records the level it would drive instead of touching hardware.

    With ``active_low`` (the usual built-in LED wiring) on drives LOW and
    off drives HIGH.
    """

    def __init__(self, active_low: bool = True) -> None:
        self._active_low = active_low
        self._value = False
        self._writes = 0

    @property
    def value(self) -> bool:
        """Last logical value applied."""
        return self._value

    @property
    def writes(self) -> int:
        """Number of apply() calls."""
        return self._writes

    @property
    def level(self) -> Level:
        """Electrical level for the last applied value."""
        return self.level_for(self._value)

    def level_for(self, value: bool) -> Level:
        """Electrical level that represents a logical value."""
        if self._active_low:
            return Level.LOW if value else Level.HIGH
        return Level.HIGH if value else Level.LOW

    def apply(self, value: bool) -> None:
        self._value = value
        self._writes += 1
        log.info("Actuator output", value=value, level=self.level.value)
