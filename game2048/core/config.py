"""
Configuration for the 2048 grid engine.

The grid size is fixed; only the win threshold and the spawn policy are configurable.
"""

from dataclasses import dataclass, field
from math import isclose

# ##>: Side length of the square grid.
GRID_SIZE: int = 4

# ##>: Tile spawn probabilities (60% for 2, 40% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.6, 4: 0.4}


def _is_power_of_two(value: int) -> bool:
    return value >= 2 and value & (value - 1) == 0


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a 2048 game.

    Attributes
    ----------
    win_value : int
        Tile value that triggers the win notification.
    start_tiles : int
        Number of tiles spawned on an empty grid at game start.
    tile_spawn_probs : dict[int, float]
        Probability of each tile value when a new tile spawns.
    """

    # ##>: Win threshold.
    win_value: int = 2048

    # ##>: Game start.
    start_tiles: int = 2  # Tiles placed on restart

    # ##>: Spawn policy.
    tile_spawn_probs: dict[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))

    def __post_init__(self):
        """Validate the configuration."""
        if not _is_power_of_two(self.win_value):
            raise ValueError(f'win_value must be a power of two, got {self.win_value}')
        if not 0 < self.start_tiles <= GRID_SIZE * GRID_SIZE:
            raise ValueError(f'start_tiles must be in [1, {GRID_SIZE * GRID_SIZE}], got {self.start_tiles}')
        if not self.tile_spawn_probs:
            raise ValueError('tile_spawn_probs must not be empty')
        for value, prob in self.tile_spawn_probs.items():
            if not _is_power_of_two(value):
                raise ValueError(f'Spawn value must be a power of two, got {value}')
            if prob < 0:
                raise ValueError(f'Spawn probability must be non-negative, got {prob} for {value}')
        if not isclose(sum(self.tile_spawn_probs.values()), 1.0):
            raise ValueError('tile_spawn_probs must sum to 1')

    @property
    def spawn_values(self) -> list[int]:
        """Tile values that can spawn."""
        return list(self.tile_spawn_probs)

    @property
    def spawn_weights(self) -> list[float]:
        """Probabilities aligned with `spawn_values`."""
        return list(self.tile_spawn_probs.values())


def default_config() -> GameConfig:
    """
    Create the default configuration.

    Returns
    -------
    GameConfig
        Win at 2048, two starter tiles, 2 spawns with probability 0.6 and 4 with 0.4.
    """
    return GameConfig()
