"""2048 sliding-tile game engine."""

from game2048.core import Direction, GameConfig, default_config
from game2048.envs import GridEngine, MoveResult

__all__ = ["Direction", "GameConfig", "GridEngine", "MoveResult", "default_config"]
