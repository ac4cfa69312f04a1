"""Headless goose-chase runner.

Plays the game with the autopilot and logs stage events:

  goose-chase --seed 7 --ticks 2000 --pursuit greedy
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from goose_chase.autopilot import Autopilot
from goose_chase.config import PURSUIT_KINDS, GameConfig
from goose_chase.game import Game
from goose_chase.signals import (
    ALL_STAGES_COMPLETE,
    GOOSE_LOST,
    PICKUP_COLLECTED,
    STAGE_WON,
)
from goose_chase.types import GooseChaseError

logger = logging.getLogger("goose_chase.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="goose-chase",
        description="Goose, cabanos and the evil wolf - headless autopilot run",
    )
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--ticks", type=int, default=2000, help="Frames to simulate (default: 2000)")
    p.add_argument("--stage", type=int, default=1, help="Starting stage (default: 1)")
    p.add_argument("--max-stage", type=int, default=None, help="Last stage (default: 40)")
    p.add_argument("--grid-size", type=int, default=None, help="Odd maze side (default: 21)")
    p.add_argument("--tps", type=int, default=None, help="Ticks per second (default: 20)")
    p.add_argument(
        "--pursuit", choices=PURSUIT_KINDS, default=None,
        help="Wolf pursuit planner (default: shortest)",
    )
    p.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return p


def _config_from_args(args: argparse.Namespace) -> GameConfig:
    overrides: dict[str, Any] = {}
    if args.max_stage is not None:
        overrides["max_stage"] = args.max_stage
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.tps is not None:
        overrides["tps"] = args.tps
    if args.pursuit is not None:
        overrides["pursuit"] = args.pursuit
    return GameConfig().replace(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _config_from_args(args)
        game = Game(config, seed=args.seed)
        game.start(args.stage)
    except (GooseChaseError, ValueError) as exc:
        logger.error("Cannot start game: %s", exc)
        return 2

    tally = {PICKUP_COLLECTED: 0, STAGE_WON: 0, GOOSE_LOST: 0}

    def _count(signal: str, data: dict) -> None:
        tally[signal] += 1

    for name in tally:
        game.bus.subscribe(name, _count)
    game.bus.subscribe(
        ALL_STAGES_COMPLETE,
        lambda signal, data: logger.info("The goose beat all %d stages", data["stage"]),
    )

    snapshot = game.run(args.ticks, Autopilot())
    print(
        f"seed={game.seed} tick={snapshot.tick} stage={snapshot.stage} "
        f"status={snapshot.status.value} cabanos={tally[PICKUP_COLLECTED]} "
        f"won={tally[STAGE_WON]} lost={tally[GOOSE_LOST]} complete={snapshot.complete}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
