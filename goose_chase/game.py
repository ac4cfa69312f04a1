"""Game - the tick loop, stage lifecycle, and deferred transitions."""
from __future__ import annotations

import logging
import os
import random
from typing import Callable, Iterable, Union

from goose_chase.clock import Clock
from goose_chase.config import GameConfig
from goose_chase.controls import InputState
from goose_chase.maze import generate_maze
from goose_chase.pathfind import make_planner
from goose_chase.sampler import place_entities
from goose_chase.scheduler import TransitionScheduler
from goose_chase.signals import (
    ALL_STAGES_COMPLETE,
    GOOSE_LOST,
    STAGE_STARTED,
    STAGE_WON,
    SignalBus,
)
from goose_chase.stage import StageMachine
from goose_chase.state import SimulationState, WorldSnapshot
from goose_chase.systems import (
    System,
    make_collision_system,
    make_goose_system,
    make_missile_spawn_system,
    make_missile_system,
    make_wolf_system,
)
from goose_chase.types import Direction, Status

logger = logging.getLogger(__name__)

Inputs = Union[InputState, Iterable[Direction], None]
InputFn = Callable[[WorldSnapshot], Inputs]


class Game:
    """Owns the live SimulationState and advances it one frame per ``step``.

    Each stage attempt gets a fresh SimulationState with a new generation
    number. The delayed stage transition is keyed to that generation, so
    it is dropped if the state it was scheduled for has been replaced.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._clock = Clock(self._config.tps)
        self._bus = SignalBus()
        self._scheduler = TransitionScheduler()
        self._machine = StageMachine(self._config.max_stage)
        self._held: set[Direction] = set()
        self._generation = 0
        self._state: SimulationState | None = None

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

        config = self._config
        self._systems: list[System] = [
            make_goose_system(lambda: self._held, config.goose_cooldown),
            make_wolf_system(make_planner(config.pursuit), config.wolf_interval),
            make_missile_spawn_system(
                config.missile_interval, config.missile_warning, self._bus
            ),
            make_missile_system(self._bus),
            make_collision_system(self._bus),
        ]

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def scheduler(self) -> TransitionScheduler:
        return self._scheduler

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def stage(self) -> int:
        return self._machine.stage

    @property
    def complete(self) -> bool:
        return self._machine.complete

    @property
    def state(self) -> SimulationState:
        if self._state is None:
            raise RuntimeError("Game has not been started")
        return self._state

    # --- Stage lifecycle ---

    def build_state(self, stage: int) -> SimulationState:
        """Generate a maze and place goose, wolf, and cabanos for ``stage``.

        Raises NoFreeCellError if the maze cannot hold every entity.
        """
        config = self._config
        grid = generate_maze(config.grid_size, self._rng, config.extra_openings)
        goose, wolf, *pickups = place_entities(grid, 2 + config.pickup_count, self._rng)
        return SimulationState(
            generation=0,
            stage=stage,
            grid=grid,
            goose=goose,
            wolf=wolf,
            pickups=set(pickups),
        )

    def start(self, stage: int = 1) -> WorldSnapshot:
        return self.load(self.build_state(stage))

    def load(self, state: SimulationState) -> WorldSnapshot:
        """Install ``state`` as the live state and begin playing it.

        Any pending transition is cancelled; the previous state is
        discarded.
        """
        self._scheduler.cancel()
        self._machine.reset(state.stage)
        self._generation += 1
        state.generation = self._generation
        state.status = Status.PLAYING
        self._machine.transition(Status.PLAYING)
        self._state = state
        self._bus.publish(STAGE_STARTED, stage=state.stage, generation=state.generation)
        logger.info(
            "Stage %d started (generation %d): goose %s, wolf %s, %d cabanos",
            state.stage, state.generation, state.goose, state.wolf, len(state.pickups),
        )
        return self.snapshot()

    def request_restart(self) -> WorldSnapshot:
        """Rebuild the current stage now, superseding any pending transition.

        After the final stage has been won this starts over from stage 1.
        """
        stage = 1 if self._machine.complete else self._machine.stage
        logger.info("Restart requested, rebuilding stage %d", stage)
        return self.start(stage)

    def _finish(self, state: SimulationState) -> None:
        self._machine.transition(state.status)
        if state.status is Status.WON:
            self._bus.publish(STAGE_WON, stage=state.stage)
            logger.info("Stage %d won at tick %d", state.stage, self._clock.tick_number)
        else:
            self._bus.publish(GOOSE_LOST, stage=state.stage, pos=state.goose)
            logger.info("Stage %d lost at tick %d", state.stage, self._clock.tick_number)
        self._scheduler.schedule(
            state.status.value,
            self._config.restart_delay,
            state.generation,
            self._advance,
        )

    def _advance(self) -> None:
        next_stage = self._machine.next_stage()
        if next_stage is None:
            self._bus.publish(ALL_STAGES_COMPLETE, stage=self._machine.stage)
            logger.info("All %d stages complete", self._machine.max_stage)
            return
        self.start(next_stage)

    # --- Tick loop ---

    def step(self, inputs: Inputs = None) -> WorldSnapshot:
        """Advance one frame and return the resulting snapshot.

        ``inputs`` is the set of held directions, or an InputState whose
        one-shot ``restart`` flag is consumed here. The collision system
        runs last and is the only one that ends a stage, so every system
        runs on a playing tick.
        """
        if self._state is None:
            raise RuntimeError("Game has not been started")

        if isinstance(inputs, InputState):
            if inputs.restart:
                inputs.restart = False
                self.request_restart()
            held: Iterable[Direction] = inputs.held
        else:
            held = inputs or ()
        self._held = set(held)

        self._clock.advance()
        ctx = self._clock.context(self._rng)
        state = self._state

        if state.status is Status.PLAYING:
            for system in self._systems:
                system(state, ctx)
            if state.status is not Status.PLAYING:
                self._finish(state)
        else:
            self._scheduler.tick(state.generation)

        self._bus.flush()
        return self.snapshot()

    def run(self, n: int, input_fn: InputFn | None = None) -> WorldSnapshot:
        """Step up to ``n`` frames, stopping early once every stage is won."""
        snapshot = self.snapshot()
        for _ in range(n):
            inputs = input_fn(snapshot) if input_fn is not None else None
            snapshot = self.step(inputs)
            if self.complete:
                break
        return snapshot

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot.capture(
            self.state, self._clock.tick_number, complete=self._machine.complete
        )
