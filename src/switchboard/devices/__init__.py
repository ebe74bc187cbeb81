"""Device collaborators notified of shared state changes.

Actuators and displays never talk to the protocol core directly; they are
attached to the state store as observers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from switchboard.devices.actuator import Actuator, Level, LogActuator
from switchboard.devices.display import Display, TextDisplay

if TYPE_CHECKING:
    from switchboard.core.state import ActuatorState, StateStore


def attach(
    store: StateStore,
    actuator: Actuator | None = None,
    display: Display | None = None,
) -> Callable[[], None]:
    """Subscribe collaborators to a state store.

    The current state is applied once immediately so the output and the
    screen match the store at startup.

    Returns:
        Callable that detaches the collaborators
    """

    def on_change(state: ActuatorState) -> None:
        if actuator is not None:
            actuator.apply(state.value)
        if display is not None:
            display.render(state.value)

    on_change(store.get())
    return store.subscribe(on_change)


__all__ = [
    "Actuator",
    "Display",
    "Level",
    "LogActuator",
    "TextDisplay",
    "attach",
]
