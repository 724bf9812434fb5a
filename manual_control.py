# -*- coding: utf-8 -*-
"""
Play 2048 with the keyboard.

Arrow keys slide the tiles, 'r' restarts, 'c' keeps playing after a win and 'escape' closes the window.
"""
import logging
from argparse import ArgumentParser
from typing import Any

from game2048.envs import GridEngine
from game2048.utils import WindowBoard

_logger = logging.getLogger("game2048.manual_control")


def redraw(engine: GridEngine, window: WindowBoard):
    """
    Redraw the game from the engine's state.

    Parameters
    ----------
    engine: GridEngine
        The game engine

    window: WindowBoard
        Class to draw the game board
    """
    window.show_state(
        engine.grid,
        score=engine.score,
        best_score=engine.best_score,
        merged_cells=engine.merged_cells,
        win_reached=engine.win_reached,
        game_over=engine.game_over,
    )


def key_handler(engine: GridEngine, window: WindowBoard, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    engine: GridEngine
        The game engine

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    _logger.debug("Pressed %s", event.key)

    if event.key == "escape":
        window.close()
        return None

    if event.key == "r":
        engine.restart()
        redraw(engine, window)
        return None

    if event.key == "c":
        if engine.continue_game():
            redraw(engine, window)
        return None

    result = engine.handle_input(event.key)
    if result is not None and result.changed:
        redraw(engine, window)
    return None


if __name__ == "__main__":
    parser = ArgumentParser(description="Play 2048 with the keyboard.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tile spawns")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    game = GridEngine(seed=args.seed)
    window_board = WindowBoard(title="2048 Game", size=game.size)
    window_board.register_key_handler(lambda event: key_handler(game, window_board, event))

    redraw(game, window_board)

    # Blocking event loop
    window_board.show(block=True)
