"""Occupancy sampling - random free cells for entity placement."""
from __future__ import annotations

import random as _random_mod
from typing import Collection

from goose_chase.maze import Grid
from goose_chase.types import NoFreeCellError, Position


def sample_free_cell(
    grid: Grid,
    exclude: Collection[Position],
    rng: _random_mod.Random,
) -> Position:
    """Pick a uniformly random interior open cell not in ``exclude``.

    Raises NoFreeCellError instead of retrying when every candidate is
    excluded.
    """
    candidates = [pos for pos in grid.interior_open_cells() if pos not in exclude]
    if not candidates:
        raise NoFreeCellError(
            len(exclude),
            f"No free interior cell on {grid!r} with {len(exclude)} cells excluded",
        )
    return rng.choice(candidates)


def place_entities(
    grid: Grid,
    count: int,
    rng: _random_mod.Random,
    exclude: Collection[Position] = (),
) -> list[Position]:
    """Sample ``count`` distinct free cells, each excluding the ones before it."""
    taken = set(exclude)
    placed: list[Position] = []
    for _ in range(count):
        pos = sample_free_cell(grid, taken, rng)
        taken.add(pos)
        placed.append(pos)
    return placed
