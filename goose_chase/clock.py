"""Clock and TickContext for the fixed-timestep frame loop."""

import random

from goose_chase.types import TickContext


class Clock:
    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._tick_number = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def context(self, rng: random.Random) -> TickContext:
        return TickContext(tick_number=self._tick_number, random=rng)


def ms_to_ticks(ms: int, tps: int) -> int:
    """Convert a duration in milliseconds to whole ticks (at least one)."""
    return max(1, round(ms * tps / 1000))
