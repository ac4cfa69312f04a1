"""Pursuit planning over a Grid: BFS shortest path and greedy local steps."""
from __future__ import annotations

import logging
import random as _random_mod
from collections import deque
from typing import Callable

from goose_chase.maze import Grid
from goose_chase.types import Position, UnreachableGoalError

logger = logging.getLogger(__name__)

Planner = Callable[[Grid, Position, Position, _random_mod.Random], Position]


def bfs_path(
    grid: Grid,
    start: Position,
    goal: Position,
    walkable: Callable[[Position], bool] | None = None,
) -> list[Position] | None:
    """Breadth-first shortest path from ``start`` to ``goal``, both inclusive.

    Neighbors are expanded in ``Grid.neighbors`` order, so ties between
    equally short routes always resolve the same way. ``walkable`` can
    exclude further open cells. Returns None when the goal cannot be
    reached.
    """
    if not grid.passable(start) or not grid.passable(goal):
        return None
    if walkable is not None and not walkable(goal):
        return None

    came_from: dict[Position, Position | None] = {start: None}
    queue: deque[Position] = deque([start])

    while queue:
        current = queue.popleft()
        if current == goal:
            path: list[Position] = []
            node: Position | None = current
            while node is not None:
                path.append(node)
                node = came_from[node]
            path.reverse()
            return path

        for neighbor in grid.neighbors(current):
            if walkable is not None and not walkable(neighbor):
                continue
            if neighbor not in came_from:
                came_from[neighbor] = current
                queue.append(neighbor)

    return None


def shortest_path_step(grid: Grid, start: Position, goal: Position) -> Position:
    """First step along the shortest route. Stays put when already there."""
    path = bfs_path(grid, start, goal)
    if path is None:
        raise UnreachableGoalError(start, goal)
    if len(path) < 2:
        return start
    return path[1]


def greedy_step(
    grid: Grid,
    start: Position,
    goal: Position,
    rng: _random_mod.Random,
) -> Position:
    """Step to a random open neighbor that closes the gap on its own axis.

    Only looks one cell ahead, so it can stall in dead ends.
    """
    x, y = start
    gx, gy = goal
    candidates: list[Position] = []
    if gx > x:
        candidates.append((x + 1, y))
    if gx < x:
        candidates.append((x - 1, y))
    if gy > y:
        candidates.append((x, y + 1))
    if gy < y:
        candidates.append((x, y - 1))
    candidates = [c for c in candidates if grid.passable(c)]
    if not candidates:
        return start
    return rng.choice(candidates)


def _shortest_planner(
    grid: Grid,
    start: Position,
    goal: Position,
    rng: _random_mod.Random,
) -> Position:
    try:
        return shortest_path_step(grid, start, goal)
    except UnreachableGoalError as exc:
        logger.debug("Pursuer holds position: %s", exc)
        return start


_PLANNERS: dict[str, Planner] = {
    "shortest": _shortest_planner,
    "greedy": greedy_step,
}


def make_planner(kind: str) -> Planner:
    """Return the pursuit planner registered under ``kind``."""
    try:
        return _PLANNERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown pursuit planner {kind!r}, expected one of {sorted(_PLANNERS)}"
        ) from None
