"""Game configuration dataclass."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from goose_chase.clock import ms_to_ticks
from goose_chase.types import ConfigError

PURSUIT_KINDS = ("shortest", "greedy")


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for one game session.

    Durations are in milliseconds and converted to ticks at ``tps``.
    Stage-scaled intervals follow ``max(base - stage * step, floor)``.

    Attributes:
        grid_size: Side of the square maze. Must be odd and at least 5.
        max_stage: Last stage; winning it completes the game.
        pickup_count: Cabanos placed per stage.
        extra_openings: Loop-opening attempts made after carving.
        tps: Ticks per second of the frame clock.
        goose_move_ms: Cooldown between goose steps while a key is held.
        wolf_interval_ms: Base delay between wolf steps.
        missile_interval_ms: Base delay between missile spawns.
        missile_warning_ms: Warning phase before a missile hits.
        restart_delay_ms: Delay before the next stage or restart is built.
        pursuit: ``"shortest"`` (BFS) or ``"greedy"`` (local heuristic).
    """

    grid_size: int = 21
    max_stage: int = 40
    pickup_count: int = 4
    extra_openings: int = 40
    tps: int = 20
    goose_move_ms: int = 150
    wolf_interval_ms: int = 500
    wolf_interval_step_ms: int = 10
    wolf_interval_floor_ms: int = 150
    missile_interval_ms: int = 6000
    missile_interval_step_ms: int = 100
    missile_interval_floor_ms: int = 1000
    missile_warning_ms: int = 2000
    restart_delay_ms: int = 1000
    pursuit: str = "shortest"

    def __post_init__(self) -> None:
        if self.grid_size < 5 or self.grid_size % 2 == 0:
            raise ConfigError(f"grid_size must be odd and >= 5, got {self.grid_size}")
        if self.max_stage < 1:
            raise ConfigError(f"max_stage must be >= 1, got {self.max_stage}")
        if self.pickup_count < 1:
            raise ConfigError(f"pickup_count must be >= 1, got {self.pickup_count}")
        if self.tps <= 0:
            raise ConfigError(f"tps must be positive, got {self.tps}")
        if self.extra_openings < 0:
            raise ConfigError(f"extra_openings must be >= 0, got {self.extra_openings}")
        if self.pursuit not in PURSUIT_KINDS:
            raise ConfigError(
                f"pursuit must be one of {PURSUIT_KINDS}, got {self.pursuit!r}"
            )
        # Goose, wolf and every pickup need a distinct cell even in the
        # sparsest carve (a spanning tree over the odd lattice).
        if self.min_open_cells <= 2 + self.pickup_count:
            raise ConfigError(
                f"grid_size {self.grid_size} leaves {self.min_open_cells} open cells, "
                f"need more than {2 + self.pickup_count}"
            )

    @property
    def min_open_cells(self) -> int:
        k = (self.grid_size - 1) // 2
        return 2 * k * k - 1

    def replace(self, **overrides: Any) -> GameConfig:
        return dataclasses.replace(self, **overrides)

    def ticks(self, ms: int) -> int:
        return ms_to_ticks(ms, self.tps)

    @property
    def goose_cooldown(self) -> int:
        return self.ticks(self.goose_move_ms)

    @property
    def missile_warning(self) -> int:
        return self.ticks(self.missile_warning_ms)

    @property
    def restart_delay(self) -> int:
        return self.ticks(self.restart_delay_ms)

    def wolf_interval(self, stage: int) -> int:
        """Ticks between wolf steps; shrinks with stage down to the floor."""
        ms = max(
            self.wolf_interval_ms - stage * self.wolf_interval_step_ms,
            self.wolf_interval_floor_ms,
        )
        return self.ticks(ms)

    def missile_interval(self, stage: int) -> int:
        """Ticks between missile spawns; shrinks with stage down to the floor."""
        ms = max(
            self.missile_interval_ms - stage * self.missile_interval_step_ms,
            self.missile_interval_floor_ms,
        )
        return self.ticks(ms)
