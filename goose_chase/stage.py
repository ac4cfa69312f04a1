"""Stage progression state machine."""
from __future__ import annotations

import logging

from goose_chase.types import InvalidTransitionError, Status

logger = logging.getLogger(__name__)

TRANSITIONS: dict[Status, frozenset[Status]] = {
    Status.INITIALIZING: frozenset({Status.PLAYING}),
    Status.PLAYING: frozenset({Status.WON, Status.LOST}),
    Status.WON: frozenset({Status.PLAYING}),
    Status.LOST: frozenset({Status.PLAYING}),
}


class StageMachine:
    """Tracks the current stage number and play status.

    Stages run from 1 to ``max_stage``. Winning the last stage marks the
    run complete and ``next_stage`` stops offering a successor.
    """

    def __init__(self, max_stage: int, stage: int = 1) -> None:
        if max_stage < 1:
            raise ValueError(f"max_stage must be >= 1, got {max_stage}")
        self._max_stage = max_stage
        self._stage = self._check_stage(stage)
        self._status = Status.INITIALIZING
        self._complete = False

    def _check_stage(self, stage: int) -> int:
        if not 1 <= stage <= self._max_stage:
            raise ValueError(f"stage must be in 1..{self._max_stage}, got {stage}")
        return stage

    @property
    def stage(self) -> int:
        return self._stage

    @property
    def max_stage(self) -> int:
        return self._max_stage

    @property
    def status(self) -> Status:
        return self._status

    @property
    def complete(self) -> bool:
        return self._complete

    def can_transition(self, target: Status) -> bool:
        return target in TRANSITIONS[self._status]

    def transition(self, target: Status) -> Status:
        """Move to ``target``; returns the previous status."""
        if not self.can_transition(target):
            raise InvalidTransitionError(
                f"Cannot go from {self._status.value} to {target.value}"
            )
        old = self._status
        self._status = target
        logger.debug("Stage %d: %s -> %s", self._stage, old.value, target.value)
        return old

    def next_stage(self) -> int | None:
        """Stage to build once the current outcome's delay expires.

        Lost replays the same stage, Won advances one stage. Won on the
        last stage returns None and marks the run complete.
        """
        if self._status is Status.LOST:
            return self._stage
        if self._status is Status.WON:
            if self._stage >= self._max_stage:
                self._complete = True
                return None
            return self._stage + 1
        raise InvalidTransitionError(
            f"No next stage while {self._status.value}"
        )

    def reset(self, stage: int) -> None:
        """Enter ``stage`` in the INITIALIZING status."""
        self._stage = self._check_stage(stage)
        self._status = Status.INITIALIZING
        self._complete = False
