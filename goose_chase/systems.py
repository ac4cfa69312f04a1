"""System factories for the per-tick simulation steps.

Each factory returns a ``(state, ctx) -> None`` callable. The game runs
them in this module's order: goose, wolf, missile spawn, missile
countdown, collisions.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from goose_chase.controls import resolve_direction
from goose_chase.pathfind import Planner
from goose_chase.sampler import sample_free_cell
from goose_chase.signals import (
    MISSILE_ARMED,
    MISSILE_IMPACT,
    PICKUP_COLLECTED,
    SignalBus,
)
from goose_chase.state import Missile, SimulationState
from goose_chase.types import Direction, NoFreeCellError, Status, TickContext

logger = logging.getLogger(__name__)

System = Callable[[SimulationState, TickContext], None]


def make_goose_system(
    held: Callable[[], Iterable[Direction]],
    cooldown: int,
) -> System:
    """Return a system that moves the goose one cell per ``cooldown`` ticks.

    The cooldown drains every tick whether or not a key is held, so the
    first press after standing still moves immediately. Blocked moves do
    not consume the cooldown.
    """

    def goose_system(state: SimulationState, ctx: TickContext) -> None:
        if state.goose_cooldown > 0:
            state.goose_cooldown -= 1
        if state.goose_cooldown > 0:
            return
        direction = resolve_direction(held())
        if direction is None:
            return
        target = direction.apply(state.goose)
        if not state.grid.passable(target):
            return
        state.goose = target
        state.goose_cooldown = cooldown

    return goose_system


def make_wolf_system(
    planner: Planner,
    interval: Callable[[int], int],
) -> System:
    """Return a system that steps the wolf every ``interval(stage)`` ticks."""

    def wolf_system(state: SimulationState, ctx: TickContext) -> None:
        state.wolf_timer += 1
        if state.wolf_timer < interval(state.stage):
            return
        state.wolf_timer = 0
        state.wolf = planner(state.grid, state.wolf, state.goose, ctx.random)

    return wolf_system


def make_missile_spawn_system(
    interval: Callable[[int], int],
    warning: int,
    bus: SignalBus,
) -> System:
    """Return a system that arms a missile once the spawn timer passes the interval."""

    def missile_spawn_system(state: SimulationState, ctx: TickContext) -> None:
        state.missile_timer += 1
        if state.missile_timer <= interval(state.stage):
            return
        state.missile_timer = 0
        try:
            pos = sample_free_cell(state.grid, state.occupied(), ctx.random)
        except NoFreeCellError as exc:
            logger.warning("Tick %d: missile spawn skipped: %s", ctx.tick_number, exc)
            return
        state.missiles.append(
            Missile(pos=pos, warning=warning, spawned_tick=ctx.tick_number)
        )
        bus.publish(MISSILE_ARMED, pos=pos, warning=warning)
        logger.debug("Tick %d: missile armed at %s", ctx.tick_number, pos)

    return missile_spawn_system


def make_missile_system(bus: SignalBus) -> System:
    """Return a system that counts missiles down and clears spent impacts.

    A missile is lethal only on the tick its warning reaches zero; it is
    removed on the next tick.
    """

    def missile_system(state: SimulationState, ctx: TickContext) -> None:
        remaining: list[Missile] = []
        for missile in state.missiles:
            if missile.lethal:
                continue
            if missile.spawned_tick != ctx.tick_number:
                missile.warning -= 1
                if missile.lethal:
                    bus.publish(MISSILE_IMPACT, pos=missile.pos)
            remaining.append(missile)
        state.missiles = remaining

    return missile_system


def make_collision_system(bus: SignalBus) -> System:
    """Return a system that resolves catches, impacts, and pickups in order.

    Lethal collisions are checked before the win condition, so a goose
    caught on its last pickup still loses.
    """

    def collision_system(state: SimulationState, ctx: TickContext) -> None:
        if state.wolf == state.goose:
            state.status = Status.LOST
            logger.debug("Tick %d: wolf caught goose at %s", ctx.tick_number, state.goose)
            return
        if state.lethal_missile_at(state.goose) is not None:
            state.status = Status.LOST
            logger.debug("Tick %d: missile hit goose at %s", ctx.tick_number, state.goose)
            return
        if state.goose in state.pickups:
            state.pickups.discard(state.goose)
            bus.publish(
                PICKUP_COLLECTED, pos=state.goose, remaining=len(state.pickups)
            )
        if not state.pickups:
            state.status = Status.WON

    return collision_system
