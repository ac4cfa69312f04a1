"""Goose Chase: pygame window around the goose_chase core.

Collect every cabanos, dodge the wolf, and stay off the flashing
missile targets.

Controls:
  Arrows      Move (hold to keep walking)
  R           Restart the current stage
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from goose_chase import Direction, Game, GameConfig, InputState, Status, WorldSnapshot
from goose_chase.maze import Cell

TILE_SIZE = 28
HUD_H = 36
FPS = 60

COLOR_BG = (20, 20, 30)
COLOR_WALL = (45, 45, 60)
COLOR_OPEN = (235, 235, 225)
COLOR_GOOSE = (250, 220, 70)
COLOR_WOLF = (200, 40, 40)
COLOR_CABANOS = (70, 170, 70)
COLOR_WARNING = (250, 190, 40)
COLOR_IMPACT = (10, 10, 10)
COLOR_TEXT = (200, 200, 200)

KEYS: dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Goose Chase pygame demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--pursuit", choices=["shortest", "greedy"], default="shortest")
    return p.parse_args()


def draw(screen: pygame.Surface, font: pygame.font.Font, snap: WorldSnapshot, tick: int) -> None:
    screen.fill(COLOR_BG)
    grid = snap.grid
    for y in range(grid.height):
        for x in range(grid.width):
            color = COLOR_OPEN if grid.at((x, y)) is Cell.OPEN else COLOR_WALL
            rect = pygame.Rect(x * TILE_SIZE, HUD_H + y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(screen, color, rect)

    for (x, y), warning in snap.missiles:
        rect = pygame.Rect(x * TILE_SIZE, HUD_H + y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
        if warning == 0:
            pygame.draw.rect(screen, COLOR_IMPACT, rect)
        elif (tick // 4) % 2 == 0:
            pygame.draw.rect(screen, COLOR_WARNING, rect)

    half = TILE_SIZE // 2
    for (x, y) in snap.pickups:
        center = (x * TILE_SIZE + half, HUD_H + y * TILE_SIZE + half)
        pygame.draw.circle(screen, COLOR_CABANOS, center, TILE_SIZE // 4)
    for pos, color in ((snap.goose, COLOR_GOOSE), (snap.wolf, COLOR_WOLF)):
        center = (pos[0] * TILE_SIZE + half, HUD_H + pos[1] * TILE_SIZE + half)
        pygame.draw.circle(screen, color, center, half - 3)

    text = f"Stage {snap.stage}   Cabanos left {len(snap.pickups)}"
    if snap.complete:
        text = "You beat every stage! Press R to play again"
    elif snap.status is Status.LOST:
        text = f"Stage {snap.stage}: caught! Restarting..."
    elif snap.status is Status.WON:
        text = f"Stage {snap.stage} cleared!"
    screen.blit(font.render(text, True, COLOR_TEXT), (8, 10))


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = GameConfig(pursuit=args.pursuit)
    game = Game(config, seed=args.seed)
    snapshot = game.start()
    inputs = InputState()

    pygame.init()
    side = config.grid_size * TILE_SIZE
    screen = pygame.display.set_mode((side, side + HUD_H))
    pygame.display.set_caption("Goose, Cabanos and the Evil Wolf")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 16)

    tick_interval = 1.0 / config.tps
    accumulator = 0.0
    running = True
    while running:
        accumulator += clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    inputs.restart = True
                elif event.key in KEYS:
                    inputs.press(KEYS[event.key])
            elif event.type == pygame.KEYUP and event.key in KEYS:
                inputs.release(KEYS[event.key])

        while accumulator >= tick_interval:
            snapshot = game.step(inputs)
            accumulator -= tick_interval
        # Drain excess accumulator to prevent spiral of death
        if accumulator > tick_interval * 4:
            accumulator = tick_interval * 2

        draw(screen, font, snapshot, game.clock.tick_number)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
