"""Shared types, enums, and errors for goose-chase."""

from __future__ import annotations

import enum
import random as _random
from dataclasses import dataclass

Position = tuple[int, int]


class Direction(enum.Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def apply(self, pos: Position) -> Position:
        return (pos[0] + self.dx, pos[1] + self.dy)


class Status(enum.Enum):
    INITIALIZING = "initializing"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    random: _random.Random


class GooseChaseError(Exception):
    """Base class for goose-chase errors."""


class NoFreeCellError(GooseChaseError):
    """Raised when no open cell is left outside the exclusion set."""

    def __init__(self, excluded: int, message: str) -> None:
        self.excluded = excluded
        super().__init__(message)


class UnreachableGoalError(GooseChaseError):
    """Raised when no path connects the pursuer to its target."""

    def __init__(self, start: Position, goal: Position) -> None:
        self.start = start
        self.goal = goal
        super().__init__(f"No path from {start} to {goal}")


class InvalidTransitionError(GooseChaseError):
    """Raised on a stage status change the transition table does not allow."""


class ConfigError(GooseChaseError, ValueError):
    """Raised when a GameConfig is inconsistent."""
