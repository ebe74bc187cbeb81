"""Display capability and a text status screen.

TextDisplay draws the small status screen found on typical controller boards:

    Switchboard
    -------------------
    IP : 192.168.1.20

    LED : ON
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable

RULE = "-" * 19


@runtime_checkable
class Display(Protocol):
    """Interface for a device that shows the shared state."""

    def render(self, value: bool) -> None:
        """Show the current actuator value."""
        ...


class TextDisplay:
    """Renders status screens as text lines on a stream."""

    def __init__(
        self,
        title: str = "Switchboard",
        address: str = "",
        stream: TextIO | None = None,
    ) -> None:
        self._title = title
        self._address = address
        self._stream = stream if stream is not None else sys.stdout
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Lines of the last rendered screen."""
        return list(self._lines)

    @property
    def address(self) -> str:
        return self._address

    @address.setter
    def address(self, value: str) -> None:
        self._address = value

    def connecting(self, label: str) -> None:
        """Show the startup screen while the network comes up."""
        self._show(
            [
                self._title,
                RULE,
                "Net : connecting",
                f"Host : {label}",
            ]
        )

    def render(self, value: bool) -> None:
        self._show(
            [
                self._title,
                RULE,
                f"IP : {self._address}",
                "",
                f"LED : {'ON' if value else 'OFF'}",
            ]
        )

    def _show(self, lines: list[str]) -> None:
        self._lines = lines
        self._stream.write("\n".join(lines) + "\n")
        self._stream.flush()
