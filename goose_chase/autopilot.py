"""Autopilot - a headless input collaborator that plays the goose."""
from __future__ import annotations

from typing import Callable

from goose_chase.controls import InputState
from goose_chase.pathfind import bfs_path
from goose_chase.state import WorldSnapshot
from goose_chase.types import Direction, Position, Status

_DELTAS: dict[Position, Direction] = {d.value: d for d in Direction}


class Autopilot:
    """Steers toward the nearest cabanos by BFS.

    Cells next to the wolf and under any missile are avoided when a route
    around them exists; otherwise the plain shortest route is taken, unless
    its first step lands on the wolf or a lethal missile, in which case the
    goose holds still.
    """

    def __call__(self, snapshot: WorldSnapshot) -> InputState:
        if snapshot.status is not Status.PLAYING or not snapshot.pickups:
            return InputState()
        path = self.route(snapshot)
        if path is None or len(path) < 2:
            return InputState()
        (x0, y0), (x1, y1) = path[0], path[1]
        return InputState.holding(_DELTAS[(x1 - x0, y1 - y0)])

    def route(self, snapshot: WorldSnapshot) -> list[Position] | None:
        danger = self._danger(snapshot)
        path = self._nearest(snapshot, lambda pos: pos not in danger)
        if path is not None:
            return path
        path = self._nearest(snapshot, None)
        if path is None or len(path) < 2:
            return path
        step = path[1]
        if step == snapshot.wolf or (step, 0) in snapshot.missiles:
            return None
        return path

    @staticmethod
    def _danger(snapshot: WorldSnapshot) -> set[Position]:
        cells = {snapshot.wolf}
        cells.update(snapshot.grid.neighbors(snapshot.wolf))
        cells.update(pos for pos, _ in snapshot.missiles)
        return cells

    @staticmethod
    def _nearest(
        snapshot: WorldSnapshot,
        walkable: Callable[[Position], bool] | None,
    ) -> list[Position] | None:
        best: list[Position] | None = None
        for pickup in snapshot.pickups:
            path = bfs_path(snapshot.grid, snapshot.goose, pickup, walkable)
            if path is not None and (best is None or len(path) < len(best)):
                best = path
        return best
