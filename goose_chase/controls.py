"""Input intents delivered by the input collaborator."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from goose_chase.types import Direction

# Held directions resolve to a single step in this order.
DIRECTION_PRIORITY: tuple[Direction, ...] = (
    Direction.LEFT,
    Direction.RIGHT,
    Direction.UP,
    Direction.DOWN,
)


@dataclass
class InputState:
    """Directions currently held plus a one-shot restart request."""

    held: set[Direction] = field(default_factory=set)
    restart: bool = False

    @classmethod
    def holding(cls, *directions: Direction) -> InputState:
        return cls(held=set(directions))

    def press(self, direction: Direction) -> None:
        self.held.add(direction)

    def release(self, direction: Direction) -> None:
        self.held.discard(direction)


def resolve_direction(held: Iterable[Direction]) -> Direction | None:
    """Collapse any set of held directions into at most one move."""
    held = set(held)
    for direction in DIRECTION_PRIORITY:
        if direction in held:
            return direction
    return None
