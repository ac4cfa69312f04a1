"""Grid - immutable maze of open and wall cells, plus the carve generator."""
from __future__ import annotations

import enum
import logging
import random as _random_mod
from collections import deque
from typing import Iterable, Iterator

from goose_chase.types import Position

logger = logging.getLogger(__name__)

# Neighbor visitation order; fixes which shortest path BFS picks.
NEIGHBOR_OFFSETS: tuple[Position, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

_CARVE_STEPS: tuple[Position, ...] = ((0, -2), (0, 2), (-2, 0), (2, 0))


class Cell(enum.Enum):
    OPEN = "."
    WALL = "#"

    @property
    def passable(self) -> bool:
        return self is Cell.OPEN


class Grid:
    """Rectangular cell map indexed by ``(x, y)``."""

    def __init__(self, cells: Iterable[Iterable[Cell]]) -> None:
        rows = tuple(tuple(row) for row in cells)
        if not rows or not rows[0]:
            raise ValueError("Grid needs at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same width")
        self._rows = rows
        self._width = width
        self._height = len(rows)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> Grid:
        """Build a grid from strings where ``#`` is wall and ``.`` is open."""
        return cls([[Cell(ch) for ch in row] for row in rows])

    def to_rows(self) -> list[str]:
        return ["".join(cell.value for cell in row) for row in self._rows]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self._width and 0 <= y < self._height

    def at(self, pos: Position) -> Cell:
        if not self.in_bounds(pos):
            raise ValueError(
                f"{pos} out of bounds for {self._width}x{self._height} grid"
            )
        x, y = pos
        return self._rows[y][x]

    def passable(self, pos: Position) -> bool:
        """Open and in bounds. Out-of-bounds cells count as walls."""
        return self.in_bounds(pos) and self.at(pos).passable

    def is_interior(self, pos: Position) -> bool:
        x, y = pos
        return 0 < x < self._width - 1 and 0 < y < self._height - 1

    def neighbors(self, pos: Position) -> list[Position]:
        x, y = pos
        result: list[Position] = []
        for dx, dy in NEIGHBOR_OFFSETS:
            n = (x + dx, y + dy)
            if self.passable(n):
                result.append(n)
        return result

    def open_cells(self) -> Iterator[Position]:
        for y, row in enumerate(self._rows):
            for x, cell in enumerate(row):
                if cell.passable:
                    yield (x, y)

    def interior_open_cells(self) -> list[Position]:
        return [pos for pos in self.open_cells() if self.is_interior(pos)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"


def generate_maze(
    size: int,
    rng: _random_mod.Random,
    extra_openings: int = 40,
    start: Position = (1, 1),
) -> Grid:
    """Carve a maze on a ``size`` x ``size`` grid.

    Passages are carved depth-first from ``start`` at a stride of two
    cells, so walls stay on the even lattice and every carved cell is
    reached from ``start``. Afterwards ``extra_openings`` random interior
    walls on an odd row or column are knocked out to add loops; those
    always sit between two carved cells and never disconnect anything.
    """
    if size < 3:
        raise ValueError(f"Maze size must be >= 3, got {size}")
    sx, sy = start
    if not (0 < sx < size - 1 and 0 < sy < size - 1):
        raise ValueError(f"Start {start} must be inside the border")

    cells = [[Cell.WALL] * size for _ in range(size)]

    def _shuffled_steps() -> Iterator[Position]:
        steps = list(_CARVE_STEPS)
        rng.shuffle(steps)
        return iter(steps)

    cells[sy][sx] = Cell.OPEN
    stack: list[tuple[int, int, Iterator[Position]]] = [(sx, sy, _shuffled_steps())]
    while stack:
        x, y, steps = stack[-1]
        for dx, dy in steps:
            nx, ny = x + dx, y + dy
            if 0 < nx < size - 1 and 0 < ny < size - 1 and cells[ny][nx] is Cell.WALL:
                cells[y + dy // 2][x + dx // 2] = Cell.OPEN
                cells[ny][nx] = Cell.OPEN
                stack.append((nx, ny, _shuffled_steps()))
                break
        else:
            stack.pop()

    opened = 0
    for _ in range(extra_openings):
        x = rng.randrange(1, size - 1)
        y = rng.randrange(1, size - 1)
        if cells[y][x] is Cell.WALL and (x % 2 == 1 or y % 2 == 1):
            cells[y][x] = Cell.OPEN
            opened += 1

    grid = Grid(cells)
    logger.debug("Carved %dx%d maze from %s, %d extra openings", size, size, start, opened)
    return grid


def reachable_from(grid: Grid, start: Position) -> set[Position]:
    """Flood-fill the open cells reachable from ``start``."""
    if not grid.passable(start):
        return set()
    seen: set[Position] = {start}
    queue: deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        for n in grid.neighbors(current):
            if n not in seen:
                seen.add(n)
                queue.append(n)
    return seen
