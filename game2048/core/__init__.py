# -*- coding: utf-8 -*-
"""
Core grid logic for the 2048 game: sliding and merging tiles, spawning new tiles, move legality and
terminal detection.
"""

from .config import GRID_SIZE, TILE_SPAWN_PROBS, GameConfig, default_config
from .gameboard import (
    check_invariants,
    empty_cells,
    fill_cells,
    is_at_value,
    latent_state,
    max_tile,
    merge_line,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import (
    Direction,
    has_moves_remaining,
    illegal_actions,
    is_done,
    legal_actions,
    moves_board,
    parse_direction,
)

__all__ = [
    "GRID_SIZE",
    "TILE_SPAWN_PROBS",
    "GameConfig",
    "default_config",
    "Direction",
    "parse_direction",
    "legal_actions",
    "moves_board",
    "illegal_actions",
    "has_moves_remaining",
    "is_done",
    "merge_line",
    "slide_and_merge",
    "latent_state",
    "empty_cells",
    "spawn_tile",
    "fill_cells",
    "is_at_value",
    "max_tile",
    "check_invariants",
]
