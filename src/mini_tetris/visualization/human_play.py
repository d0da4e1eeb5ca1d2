from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from mini_tetris.game import Action, GameStatus, TetrisGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.DOWN,
}


def run(seed: Optional[int] = None, gravity_ms: int = 600, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame()
        game.start(seed)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("mini-tetris")
        font = pygame.font.SysFont(None, 30)

        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.status == GameStatus.GAME_OVER:
                        # Restarting means a fresh session
                        game = TetrisGame()
                        game.start()
                        last_fall = pygame.time.get_ticks()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            # Gravity
            now = pygame.time.get_ticks()
            if game.status == GameStatus.RUNNING and now - last_fall >= gravity_ms:
                game.step(Action.DOWN)
                last_fall = now

            renderer.draw(screen, game.get_state(), game.current_piece)
            if game.status == GameStatus.GAME_OVER:
                text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
                screen.blit(text, text.get_rect(center=(screen.get_width() // 2, 30)))
            pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play mini-tetris with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity-ms", type=int, default=600)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(seed=args.seed, gravity_ms=args.gravity_ms, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
