"""Tests for the stage progression state machine."""

import pytest
from goose_chase.stage import StageMachine
from goose_chase.types import InvalidTransitionError, Status


def _playing(max_stage: int = 40, stage: int = 1) -> StageMachine:
    machine = StageMachine(max_stage, stage)
    machine.transition(Status.PLAYING)
    return machine


def test_starts_initializing():
    machine = StageMachine(max_stage=3)
    assert machine.stage == 1
    assert machine.status is Status.INITIALIZING
    assert not machine.complete


def test_transition_returns_previous_status():
    machine = StageMachine(max_stage=3)
    assert machine.transition(Status.PLAYING) is Status.INITIALIZING
    assert machine.status is Status.PLAYING


@pytest.mark.parametrize(
    "path",
    [
        [Status.WON],
        [Status.LOST],
        [Status.PLAYING, Status.PLAYING],
        [Status.PLAYING, Status.WON, Status.LOST],
        [Status.PLAYING, Status.LOST, Status.INITIALIZING],
    ],
)
def test_invalid_transitions_raise(path):
    machine = StageMachine(max_stage=3)
    with pytest.raises(InvalidTransitionError):
        for status in path:
            machine.transition(status)


def test_won_advances_stage():
    machine = _playing(stage=4)
    machine.transition(Status.WON)
    assert machine.next_stage() == 5
    assert not machine.complete


def test_lost_replays_stage():
    machine = _playing(stage=4)
    machine.transition(Status.LOST)
    assert machine.next_stage() == 4


def test_won_at_max_completes_without_increment():
    machine = _playing(max_stage=3, stage=3)
    machine.transition(Status.WON)
    assert machine.next_stage() is None
    assert machine.complete
    assert machine.stage == 3


def test_next_stage_while_playing_raises():
    with pytest.raises(InvalidTransitionError):
        _playing().next_stage()


def test_reset_clears_completion():
    machine = _playing(max_stage=1)
    machine.transition(Status.WON)
    machine.next_stage()
    machine.reset(1)
    assert machine.status is Status.INITIALIZING
    assert not machine.complete


@pytest.mark.parametrize("stage", [0, 41])
def test_stage_out_of_range(stage):
    with pytest.raises(ValueError):
        StageMachine(max_stage=40, stage=stage)
