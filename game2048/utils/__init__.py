# -*- coding: utf-8 -*-
"""
Host-side utilities for displaying a 2048 game.
"""

from .windows import WindowBoard

__all__ = ["WindowBoard"]
