"""Tests for the Game orchestrator: tick order, stage lifecycle, restarts."""

import dataclasses
from unittest.mock import patch

import pytest
from goose_chase.config import GameConfig
from goose_chase.controls import InputState
from goose_chase.game import Game
from goose_chase.maze import Grid, reachable_from
from goose_chase.signals import (
    ALL_STAGES_COMPLETE,
    GOOSE_LOST,
    STAGE_STARTED,
    STAGE_WON,
)
from goose_chase.state import SimulationState
from goose_chase.types import Direction, NoFreeCellError, Status

CORRIDOR = Grid.from_rows([
    "#######",
    "#.....#",
    "#######",
])

RIGHT = {Direction.RIGHT}


def _corridor(goose=(1, 1), wolf=(5, 1), pickups=((2, 1),), stage=1, **kw) -> SimulationState:
    return SimulationState(
        generation=0,
        stage=stage,
        grid=CORRIDOR,
        goose=goose,
        wolf=wolf,
        pickups=set(pickups),
        **kw,
    )


def _record(game: Game, *names: str) -> list[str]:
    received: list[str] = []
    for name in names:
        game.bus.subscribe(name, lambda signal, data: received.append(signal))
    return received


# --- Construction ---

def test_step_before_start_raises():
    with pytest.raises(RuntimeError):
        Game(seed=1).step()


def test_start_places_entities_on_distinct_open_cells():
    game = Game(seed=3)
    snap = game.start()
    cells = [snap.goose, snap.wolf, *snap.pickups]
    assert len(cells) == len(set(cells)) == 2 + game.config.pickup_count
    assert all(snap.grid.passable(c) for c in cells)
    reachable = reachable_from(snap.grid, (1, 1))
    assert set(cells) <= reachable
    assert snap.status is Status.PLAYING
    assert snap.stage == 1
    assert snap.missiles == ()


def test_same_seed_same_game():
    a, b = Game(seed=9), Game(seed=9)
    assert a.start() == b.start()
    assert a.run(60) == b.run(60)


def test_start_surfaces_no_free_cell():
    game = Game(seed=1)
    with patch("goose_chase.game.place_entities", side_effect=NoFreeCellError(0, "full")):
        with pytest.raises(NoFreeCellError):
            game.start()


def test_stage_started_signal():
    game = Game(seed=1)
    received = _record(game, STAGE_STARTED)
    game.start()
    assert received == []
    game.step()
    assert received == [STAGE_STARTED]


def test_load_assigns_new_generation():
    game = Game(seed=1)
    first = game.load(_corridor())
    second = game.load(_corridor())
    assert second.generation == first.generation + 1


# --- Tick ordering ---

def test_catch_on_last_pickup_resolves_lost():
    game = Game(seed=1)
    received = _record(game, STAGE_WON, GOOSE_LOST)
    game.load(_corridor(goose=(1, 1), wolf=(3, 1), pickups=[(2, 1)], wolf_timer=9))
    snap = game.step(RIGHT)
    assert snap.goose == (2, 1)
    assert snap.wolf == (2, 1)
    assert snap.status is Status.LOST
    assert received == [GOOSE_LOST]


def test_terminal_status_freezes_simulation():
    game = Game(seed=1)
    game.load(_corridor(goose=(1, 1), wolf=(2, 1), pickups=[(5, 1)], wolf_timer=9))
    lost = game.step()
    assert lost.status is Status.LOST
    for _ in range(5):
        snap = game.step(RIGHT)
        assert (snap.goose, snap.wolf, snap.status) == (lost.goose, lost.wolf, Status.LOST)


def test_snapshot_is_immutable_copy():
    game = Game(seed=1)
    game.load(_corridor(pickups=[(3, 1), (4, 1)]))
    snap = game.snapshot()
    game.state.pickups.clear()
    assert snap.pickups == ((3, 1), (4, 1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.stage = 5


# --- Stage progression ---

def test_win_advances_stage_after_delay():
    game = Game(seed=1)
    received = _record(game, STAGE_WON)
    game.load(_corridor())
    snap = game.step(RIGHT)
    assert snap.status is Status.WON
    assert received == [STAGE_WON]
    generation = snap.generation

    delay = game.config.restart_delay
    for _ in range(delay - 1):
        snap = game.step()
    assert (snap.stage, snap.status, snap.generation) == (1, Status.WON, generation)

    snap = game.step()
    assert snap.stage == 2
    assert snap.status is Status.PLAYING
    assert snap.generation == generation + 1
    assert snap.grid.width == game.config.grid_size


def test_loss_replays_same_stage():
    game = Game(seed=1)
    game.load(_corridor(goose=(1, 1), wolf=(2, 1), pickups=[(5, 1)], wolf_timer=9, stage=6))
    lost = game.step()
    assert lost.status is Status.LOST
    for _ in range(game.config.restart_delay):
        snap = game.step()
    assert snap.stage == 6
    assert snap.status is Status.PLAYING
    assert snap.generation == lost.generation + 1
    assert snap.grid.width == game.config.grid_size


def test_win_at_max_stage_completes():
    game = Game(GameConfig(max_stage=1), seed=1)
    received = _record(game, ALL_STAGES_COMPLETE)
    game.load(_corridor())
    game.step(RIGHT)
    for _ in range(game.config.restart_delay):
        snap = game.step()
    assert snap.complete
    assert game.complete
    assert snap.status is Status.WON
    assert snap.stage == 1
    assert received == [ALL_STAGES_COMPLETE]

    generation = snap.generation
    for _ in range(3 * game.config.restart_delay):
        snap = game.step()
    assert snap.generation == generation
    assert snap.stage == 1
    assert received == [ALL_STAGES_COMPLETE]


def test_restart_after_completion_returns_to_stage_one():
    game = Game(GameConfig(max_stage=2), seed=1)
    game.load(_corridor(stage=2))
    game.step(RIGHT)
    game.run(game.config.restart_delay)
    assert game.complete
    snap = game.request_restart()
    assert snap.stage == 1
    assert not snap.complete


# --- Restart requests ---

def test_restart_supersedes_pending_transition():
    game = Game(seed=1)
    game.load(_corridor(goose=(1, 1), wolf=(2, 1), pickups=[(5, 1)], wolf_timer=9))
    lost = game.step()
    assert game.scheduler.pending is not None

    snap = game.request_restart()
    assert game.scheduler.pending is None
    assert snap.generation == lost.generation + 1
    assert snap.status is Status.PLAYING

    snap = game.step()
    assert snap.generation == lost.generation + 1


def test_stale_transition_never_touches_new_state():
    game = Game(seed=1)
    game.load(_corridor(goose=(1, 1), wolf=(2, 1), pickups=[(5, 1)], wolf_timer=9))
    game.step()
    replacement = _corridor(goose=(1, 1), wolf=(5, 1), pickups=[(3, 1)])
    game.load(replacement)
    for _ in range(game.config.restart_delay + 2):
        game.step()
    assert game.state is replacement


def test_restart_flag_in_input_is_consumed():
    game = Game(seed=1)
    first = game.load(_corridor(pickups=[(5, 1)]))
    inputs = InputState(restart=True)
    snap = game.step(inputs)
    assert not inputs.restart
    assert snap.generation == first.generation + 1
    snap = game.step(inputs)
    assert snap.generation == first.generation + 1


def test_run_stops_when_complete():
    game = Game(GameConfig(max_stage=1), seed=1)
    game.load(_corridor())
    game.step(RIGHT)
    start_tick = game.clock.tick_number
    game.run(500)
    assert game.clock.tick_number == start_tick + game.config.restart_delay
