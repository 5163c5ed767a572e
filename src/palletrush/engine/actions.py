from __future__ import annotations

from dataclasses import dataclass

from .topology import Coordinate, Direction


@dataclass(frozen=True)
class Action:
    """Move the top marker of `source` one cell in `direction`."""

    source: Coordinate
    direction: Direction

    def destination(self) -> Coordinate:
        return self.direction.step(self.source)

    @staticmethod
    def parse(text: str) -> Action:
        """Parse 'a1 down' style text into an Action."""
        parts = text.split()
        if len(parts) != 2:
            raise ValueError(f"Expected '<label> <direction>', got {text!r}")
        return Action(source=Coordinate.parse(parts[0]), direction=Direction(parts[1].lower()))
