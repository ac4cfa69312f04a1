"""Simulation state and the read-only snapshot handed to renderers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from goose_chase.maze import Grid
from goose_chase.types import Position, Status


@dataclass
class Missile:
    """A missile strike: inert while warning > 0, lethal at 0."""

    pos: Position
    warning: int
    spawned_tick: int = 0

    @property
    def lethal(self) -> bool:
        return self.warning == 0


@dataclass
class SimulationState:
    """Everything one stage attempt owns. Replaced, never reused, on reset."""

    generation: int
    stage: int
    grid: Grid
    goose: Position
    wolf: Position
    pickups: set[Position]
    missiles: list[Missile] = field(default_factory=list)
    status: Status = Status.INITIALIZING
    goose_cooldown: int = 0
    wolf_timer: int = 0
    missile_timer: int = 0

    def occupied(self) -> set[Position]:
        """Cells a new missile must not land on."""
        cells = {self.goose, self.wolf}
        cells.update(self.pickups)
        cells.update(m.pos for m in self.missiles)
        return cells

    def lethal_missile_at(self, pos: Position) -> Missile | None:
        for missile in self.missiles:
            if missile.lethal and missile.pos == pos:
                return missile
        return None


@dataclass(frozen=True)
class WorldSnapshot:
    tick: int
    generation: int
    stage: int
    status: Status
    grid: Grid
    goose: Position
    wolf: Position
    pickups: tuple[Position, ...]
    missiles: tuple[tuple[Position, int], ...]
    complete: bool = False

    @classmethod
    def capture(cls, state: SimulationState, tick: int, complete: bool = False) -> WorldSnapshot:
        return cls(
            tick=tick,
            generation=state.generation,
            stage=state.stage,
            status=state.status,
            grid=state.grid,
            goose=state.goose,
            wolf=state.wolf,
            pickups=tuple(sorted(state.pickups)),
            missiles=tuple((m.pos, m.warning) for m in state.missiles),
            complete=complete,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "generation": self.generation,
            "stage": self.stage,
            "status": self.status.value,
            "grid": self.grid.to_rows(),
            "goose": list(self.goose),
            "wolf": list(self.wolf),
            "pickups": [list(p) for p in self.pickups],
            "missiles": [
                {"pos": list(pos), "warning": warning}
                for pos, warning in self.missiles
            ],
            "complete": self.complete,
        }
