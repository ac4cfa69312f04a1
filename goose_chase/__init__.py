"""goose-chase - A tick-driven maze chase: goose, cabanos, and the evil wolf."""

from goose_chase.autopilot import Autopilot
from goose_chase.clock import Clock
from goose_chase.config import GameConfig
from goose_chase.controls import InputState, resolve_direction
from goose_chase.game import Game
from goose_chase.maze import Cell, Grid, generate_maze, reachable_from
from goose_chase.pathfind import bfs_path, greedy_step, make_planner, shortest_path_step
from goose_chase.sampler import place_entities, sample_free_cell
from goose_chase.scheduler import TransitionScheduler
from goose_chase.signals import SignalBus
from goose_chase.stage import StageMachine
from goose_chase.state import Missile, SimulationState, WorldSnapshot
from goose_chase.types import (
    ConfigError,
    Direction,
    GooseChaseError,
    InvalidTransitionError,
    NoFreeCellError,
    Position,
    Status,
    TickContext,
    UnreachableGoalError,
)

__all__ = [
    "Game",
    "GameConfig",
    "Clock",
    "TickContext",
    "Grid",
    "Cell",
    "generate_maze",
    "reachable_from",
    "sample_free_cell",
    "place_entities",
    "bfs_path",
    "shortest_path_step",
    "greedy_step",
    "make_planner",
    "InputState",
    "resolve_direction",
    "Autopilot",
    "SignalBus",
    "TransitionScheduler",
    "StageMachine",
    "SimulationState",
    "Missile",
    "WorldSnapshot",
    "Position",
    "Direction",
    "Status",
    "GooseChaseError",
    "NoFreeCellError",
    "UnreachableGoalError",
    "InvalidTransitionError",
    "ConfigError",
]
