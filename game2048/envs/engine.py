"""2048 grid engine: owns the board, the score and the terminal flags of one game session."""

import logging
import threading
from dataclasses import dataclass

from numpy import array_equal, int64, ndarray, zeros
from numpy.random import Generator, default_rng

from game2048.core.config import GRID_SIZE, GameConfig, default_config
from game2048.core.gameboard import (
    check_invariants,
    fill_cells,
    is_at_value,
    latent_state,
    max_tile,
    spawn_tile,
)
from game2048.core.gamemove import Direction, has_moves_remaining, legal_actions, parse_direction

# ##>: Module logger.
_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a single move.

    Attributes
    ----------
    changed : bool
        Whether any cell differs from its pre-move value.
    merged_cells : frozenset[tuple[int, int]]
        Final positions of the tiles created by a merge during this move.
    new_score : int
        Score after the move.
    score_delta : int
        Score gained by this move.
    """

    changed: bool
    merged_cells: frozenset[tuple[int, int]] = frozenset()
    new_score: int = 0
    score_delta: int = 0


class GridEngine:
    """
    2048 grid engine.

    This class owns the grid, the score, the in-session best score and the win latch. It never talks to a
    renderer: callers read its state after each operation and redraw.

    Parameters
    ----------
    config : GameConfig, optional
        Game configuration (default is `default_config()`).
    seed : int, optional
        Seed for the spawn generator, for replayable games.
    generator : Generator, optional
        Random number generator to use instead of a seeded one.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None, generator: Generator | None = None):
        self.config = config if config is not None else default_config()
        self.size = GRID_SIZE
        self._generator = generator if generator is not None else default_rng(seed)

        # ##: One input cycle at a time.
        self._lock = threading.RLock()

        # ##: Best score survives restarts.
        self._best_score = 0

        self._grid: ndarray = zeros((self.size, self.size), dtype=int64)
        self._score = 0
        self._moves = 0
        self._merged_cells: frozenset[tuple[int, int]] = frozenset()
        self._win_reached = False
        self._infinite = False

        self.restart()

    @property
    def grid(self) -> ndarray:
        """Copy of the current grid."""
        return self._grid.copy()

    @property
    def score(self) -> int:
        return self._score

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def merged_cells(self) -> frozenset[tuple[int, int]]:
        """Merge events of the most recent move."""
        return self._merged_cells

    @property
    def moves(self) -> int:
        """Number of moves that changed the grid since the last restart."""
        return self._moves

    @property
    def max_tile(self) -> int:
        return max_tile(self._grid)

    @property
    def infinite(self) -> bool:
        """Whether the player chose to keep playing after the win notification."""
        return self._infinite

    @property
    def win_reached(self) -> bool:
        """
        Win latch.

        Set the first time a tile reaches the win value; stays set until `continue_game` is called.
        """
        return self._win_reached

    @property
    def game_over(self) -> bool:
        """True when no move can change the grid."""
        return not self.has_moves_remaining()

    @property
    def legal_moves(self) -> list[Direction]:
        return legal_actions(self._grid)

    def has_moves_remaining(self) -> bool:
        """
        Check whether the player can still move.

        Returns
        -------
        bool
            True if an empty cell exists or two orthogonally adjacent cells hold equal values.
        """
        return has_moves_remaining(self._grid)

    def is_at_value(self, value: int) -> bool:
        return is_at_value(self._grid, value)

    def restart(self, seed: int | None = None) -> ndarray:
        """
        Start a new game.

        Parameters
        ----------
        seed : int, optional
            Reseed the spawn generator before placing the starter tiles.

        Returns
        -------
        ndarray
            The new grid.

        Notes
        -----
        Grid, score, merge events, move counter and win state are reset. The best score is kept.
        """
        with self._lock:
            if seed is not None:
                self._generator = default_rng(seed)

            self._grid = zeros((self.size, self.size), dtype=int64)
            self._score = 0
            self._moves = 0
            self._merged_cells = frozenset()
            self._win_reached = False
            self._infinite = False

            fill_cells(self._grid, self.config.start_tiles, generator=self._generator, probs=self.config.tile_spawn_probs)
            check_invariants(self._grid, self.size)
            self._check_win()

            _logger.info('New game started (best score: %d)', self._best_score)
            return self.grid

    def move(self, direction: Direction | int | str) -> MoveResult:
        """
        Slide every tile in one direction and merge equal neighbours.

        Parameters
        ----------
        direction : Direction | int | str
            The direction to slide. Anything that is not a direction leaves the state untouched.

        Returns
        -------
        MoveResult
            Whether the grid changed, the merge events, the new score and the score gained.

        Notes
        -----
        - No tile is spawned; see `spawn_tile` and `handle_input`.
        - The score increment is never rolled back.
        - An unchanged move is not counted.
        """
        parsed = parse_direction(direction)
        if parsed is None:
            _logger.debug('Ignored input %r', direction)
            return MoveResult(changed=False, new_score=self._score)

        with self._lock:
            new_grid, delta, merged = latent_state(self._grid, parsed)
            changed = not array_equal(new_grid, self._grid)
            assert changed or not merged, 'A merge must change the grid'

            self._grid[...] = new_grid
            self._merged_cells = merged
            if delta:
                self._score += delta
                self._best_score = max(self._best_score, self._score)
            if changed:
                self._moves += 1
            check_invariants(self._grid, self.size)
            self._check_win()

            _logger.debug('Move %s: changed=%s, delta=%d, merges=%s', parsed.name, changed, delta, sorted(merged))
            return MoveResult(changed=changed, merged_cells=merged, new_score=self._score, score_delta=delta)

    def spawn_tile(self) -> tuple[int, int, int] | None:
        """
        Place a new tile on a random empty cell.

        Returns
        -------
        tuple[int, int, int] | None
            ``(row, col, value)`` of the new tile, or None when the grid is full.
        """
        with self._lock:
            placed = spawn_tile(self._grid, generator=self._generator, probs=self.config.tile_spawn_probs)
            check_invariants(self._grid, self.size)
            self._check_win()
            return placed

    def handle_input(self, symbol: object) -> MoveResult | None:
        """
        Run one input cycle: move, spawn a tile if the grid changed, update the flags.

        Parameters
        ----------
        symbol : object
            A direction, its name or a keyboard key.

        Returns
        -------
        MoveResult | None
            The move outcome, or None if the input is not a direction.
        """
        direction = parse_direction(symbol)
        if direction is None:
            _logger.debug('Ignored input %r', symbol)
            return None

        with self._lock:
            result = self.move(direction)
            if result.changed:
                self.spawn_tile()
            # ##: Only a changed move can end the game.
            if result.changed and self.game_over:
                _logger.info('Game over: score %d, max tile %d', self._score, self.max_tile)
            return result

    def continue_game(self) -> bool:
        """
        Dismiss the win notification and keep playing.

        Returns
        -------
        bool
            True if a win notification was dismissed.

        Notes
        -----
        After dismissal the win threshold is no longer checked until `restart`.
        """
        with self._lock:
            if not self._win_reached:
                return False
            self._win_reached = False
            self._infinite = True
            _logger.info('Continuing past %d', self.config.win_value)
            return True

    def _check_win(self):
        if self._infinite or self._win_reached:
            return
        if is_at_value(self._grid, self.config.win_value):
            self._win_reached = True
            _logger.info('Reached %d with score %d', self.config.win_value, self._score)

    def snapshot(self) -> dict:
        """
        Read-only view of the state, as plain Python values.

        Returns
        -------
        dict
            Grid, scores, merge events, move counter and flags.
        """
        with self._lock:
            return {
                'grid': self._grid.tolist(),
                'score': self._score,
                'best_score': self._best_score,
                'merged_cells': sorted(self._merged_cells),
                'moves': self._moves,
                'game_over': self.game_over,
                'win_reached': self._win_reached,
                'infinite': self._infinite,
            }

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        print(f'Score: {self._score}\tBest: {self._best_score}')
        for row in self._grid.tolist():
            print(' \t'.join(map(str, row)))
