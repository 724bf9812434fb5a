# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game engine.

This module provides the `GridEngine` class, which owns the grid, the score and the terminal flags of a game.
"""

from .engine import GridEngine, MoveResult

__all__ = ["GridEngine", "MoveResult"]
