from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from tetris_rl.game import Action, GameConfig, TetrisGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_a: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_d: Action.MOVE_RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_w: Action.ROTATE_CW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_s: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.TOGGLE_PAUSE,
    pygame.K_q: Action.QUIT,
    pygame.K_ESCAPE: Action.QUIT,
}


def run(seed: Optional[int] = None, cell_size: int = 28) -> int:
    """Play until the window closes; returns the final score."""
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Tetris - Human Play")

        last_fall = pygame.time.get_ticks()
        paused = False
        running = True
        while running:
            # Drain all pending input before the gravity decision
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if game.game_over and event.key == pygame.K_r:
                        game.reset()
                        last_fall = pygame.time.get_ticks()
                        continue
                    action = KEY_TO_ACTION.get(event.key)
                    if action is None:
                        continue
                    if action == Action.QUIT:
                        running = False
                    elif action == Action.TOGGLE_PAUSE:
                        paused = not paused
                    elif not paused:
                        result = game.step(action)
                        if result.resets_gravity:
                            last_fall = pygame.time.get_ticks()

            # Gravity
            now = pygame.time.get_ticks()
            if not paused and game.tick((now - last_fall) / 1000.0).resets_gravity:
                last_fall = now

            renderer.draw(screen, game.snapshot(), paused=paused)
            clock.tick(60)
    finally:
        pygame.quit()
    print(f"GAME OVER! Final Score: {game.score}")
    return game.score


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    args = p.parse_args()
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
