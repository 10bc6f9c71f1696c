from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from tetris_engine.game import COLUMNS, ROWS, GameConfig, TetrisGame
from .renderer import Renderer


KEY_NAMES: Dict[int, str] = {
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_UP: "ArrowUp",
    pygame.K_SPACE: " ",
    pygame.K_p: "p",
    pygame.K_RETURN: "Enter",
}

# Held-button style, as on-screen touch controls would send it
KEY_HOLD_ACTIONS: Dict[int, str] = {
    pygame.K_LEFT: "move-left",
    pygame.K_RIGHT: "move-right",
    pygame.K_DOWN: "move-down",
    pygame.K_UP: "rotate",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell_size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--hold_keys", action="store_true",
                   help="Drive arrows as held buttons (initial/repeat delay) instead of single presses")
    p.add_argument("--verbose", action="store_true")
    return p


def run(seed: int | None = None, cell_size: int = 30, fps: int = 60, hold_keys: bool = False) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(ROWS, COLUMNS))
        pygame.display.set_caption("Tetris")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif hold_keys and event.key in KEY_HOLD_ACTIONS:
                        game.press_action(KEY_HOLD_ACTIONS[event.key])
                    elif event.key in KEY_NAMES:
                        game.key_down(KEY_NAMES[event.key])
                elif event.type == pygame.KEYUP:
                    if hold_keys and event.key in KEY_HOLD_ACTIONS:
                        game.release_action(KEY_HOLD_ACTIONS[event.key])

            game.tick(clock.tick(fps))
            renderer.draw(screen, game.snapshot())
    finally:
        pygame.quit()
    print(f"Final score: {game.score}  lines: {game.lines_cleared_total}")


def main() -> None:
    args = build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps, hold_keys=args.hold_keys)


if __name__ == "__main__":  # pragma: no cover
    main()
