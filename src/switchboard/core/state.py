"""Single-writer store for the shared actuator value."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ActuatorState:
    """Snapshot of the actuator value and its version.

    Attributes:
        value: Logical actuator value (True = on)
        version: Number of successful writes since the store was created
    """

    value: bool
    version: int


StateObserver = Callable[[ActuatorState], None]


class StateStore:
    """Authoritative owner of the actuator value.

    Every ``set`` bumps the version by exactly one, even when the value is
    unchanged, and notifies observers before returning. Observers are
    external collaborators (actuator, display); their failures are logged
    and never reach the caller.

    Example:
        store = StateStore()
        store.subscribe(lambda state: print(state.value))
        store.set(True)  # prints True
    """

    def __init__(self, initial: bool = False) -> None:
        self._state = ActuatorState(value=bool(initial), version=0)
        self._observers: list[StateObserver] = []

    @property
    def value(self) -> bool:
        """Current actuator value."""
        return self._state.value

    @property
    def version(self) -> int:
        """Current version."""
        return self._state.version

    def get(self) -> ActuatorState:
        """Get the current state snapshot."""
        return self._state

    def set(self, value: bool) -> ActuatorState:
        """Write a new actuator value.

        Args:
            value: Requested actuator value

        Returns:
            The new state snapshot
        """
        self._state = ActuatorState(value=bool(value), version=self._state.version + 1)
        log.debug("Actuator state set", value=self._state.value, version=self._state.version)
        self._notify(self._state)
        return self._state

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Register a state-change observer.

        Observers run synchronously in registration order.

        Returns:
            Callable that removes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, state: ActuatorState) -> None:
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                log.warning("State observer failed", observer=repr(observer), error=str(e))
