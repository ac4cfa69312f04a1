"""
Test suite for pursuit planning.

Tests cover:
- BFS path structure and deterministic tie-breaking
- Unreachable and colocated goals
- Greedy local steps and dead ends
- Planner registry
"""

import random

import pytest
from goose_chase.maze import Grid
from goose_chase.pathfind import (
    bfs_path,
    greedy_step,
    make_planner,
    shortest_path_step,
)
from goose_chase.types import UnreachableGoalError

CORRIDOR = Grid.from_rows([
    "#######",
    "#.....#",
    "#######",
])

ROOM = Grid.from_rows([
    "#####",
    "#...#",
    "#...#",
    "#...#",
    "#####",
])

SPLIT = Grid.from_rows([
    "#######",
    "#..#..#",
    "#######",
])


class TestBfsPath:
    def test_corridor_path_is_every_cell(self):
        path = bfs_path(CORRIDOR, (1, 1), (5, 1))
        assert path == [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1)]

    def test_same_start_and_goal_returns_single_element(self):
        assert bfs_path(ROOM, (2, 2), (2, 2)) == [(2, 2)]

    def test_unreachable_returns_none(self):
        assert bfs_path(SPLIT, (1, 1), (5, 1)) is None

    def test_wall_goal_returns_none(self):
        assert bfs_path(CORRIDOR, (1, 1), (3, 0)) is None

    def test_ties_broken_by_neighbor_order(self):
        expected = [(1, 1), (2, 1), (3, 1), (3, 2), (3, 3)]
        for _ in range(5):
            assert bfs_path(ROOM, (1, 1), (3, 3)) == expected

    def test_walkable_predicate_routes_around(self):
        path = bfs_path(ROOM, (1, 1), (3, 1), walkable=lambda pos: pos != (2, 1))
        assert path is not None
        assert (2, 1) not in path
        assert len(path) == 5

    def test_walkable_rejecting_goal_returns_none(self):
        assert bfs_path(ROOM, (1, 1), (3, 3), walkable=lambda pos: pos != (3, 3)) is None


class TestShortestPathStep:
    def test_corridor_step_is_adjacent_cell(self):
        assert shortest_path_step(CORRIDOR, (1, 1), (5, 1)) == (2, 1)
        assert shortest_path_step(CORRIDOR, (5, 1), (1, 1)) == (4, 1)

    def test_colocated_stays(self):
        assert shortest_path_step(CORRIDOR, (3, 1), (3, 1)) == (3, 1)

    def test_unreachable_raises(self):
        with pytest.raises(UnreachableGoalError) as excinfo:
            shortest_path_step(SPLIT, (1, 1), (5, 1))
        assert excinfo.value.start == (1, 1)
        assert excinfo.value.goal == (5, 1)


class TestGreedyStep:
    def test_single_candidate_taken(self):
        assert greedy_step(CORRIDOR, (1, 1), (5, 1), random.Random(0)) == (2, 1)

    def test_boxed_in_stays(self):
        assert greedy_step(SPLIT, (2, 1), (5, 1), random.Random(0)) == (2, 1)

    def test_never_moves_away_from_target(self):
        rng = random.Random(3)
        for _ in range(50):
            step = greedy_step(ROOM, (2, 2), (3, 3), rng)
            assert step in {(3, 2), (2, 3)}

    def test_chooses_among_all_candidates(self):
        rng = random.Random(11)
        seen = {greedy_step(ROOM, (1, 1), (3, 3), rng) for _ in range(100)}
        assert seen == {(2, 1), (1, 2)}

    def test_colocated_stays(self):
        assert greedy_step(ROOM, (2, 2), (2, 2), random.Random(0)) == (2, 2)

    def test_dead_end_stalls(self):
        # Target lies left, but only a path right/down leads there.
        grid = Grid.from_rows([
            "#####",
            "#.#.#",
            "#...#",
            "#####",
        ])
        assert greedy_step(grid, (3, 1), (1, 1), random.Random(0)) == (3, 1)


class TestMakePlanner:
    def test_shortest_planner_holds_when_unreachable(self):
        planner = make_planner("shortest")
        assert planner(SPLIT, (1, 1), (5, 1), random.Random(0)) == (1, 1)

    def test_shortest_planner_steps(self):
        planner = make_planner("shortest")
        assert planner(CORRIDOR, (1, 1), (5, 1), random.Random(0)) == (2, 1)

    def test_greedy_planner(self):
        assert make_planner("greedy") is greedy_step

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            make_planner("teleport")
