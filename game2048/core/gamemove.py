"""
Move utilities for the 2048 game: directions, input parsing, move legality and terminal detection.
"""

from enum import IntEnum

from numpy import array_equal, integer, ndarray

from game2048.core.gameboard import latent_state


class Direction(IntEnum):
    """
    Slide direction.

    The value is the number of counter-clockwise quarter turns that bring the direction's leading edge
    to the left side of the board.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


# ##>: Keyboard keys as reported by browsers and by Matplotlib key events.
KEY_BINDINGS: dict[str, Direction] = {
    'arrowleft': Direction.LEFT,
    'arrowup': Direction.UP,
    'arrowright': Direction.RIGHT,
    'arrowdown': Direction.DOWN,
    'left': Direction.LEFT,
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
}


def parse_direction(symbol: object) -> Direction | None:
    """
    Convert an input symbol to a direction.

    Parameters
    ----------
    symbol : object
        A Direction, its integer value, a direction name or a keyboard key (``"ArrowLeft"``, ``"left"``).

    Returns
    -------
    Direction | None
        The parsed direction, or None if the symbol is not a direction.
    """
    if isinstance(symbol, Direction):
        return symbol
    if isinstance(symbol, bool):
        return None
    if isinstance(symbol, (int, integer)):
        try:
            return Direction(int(symbol))
        except ValueError:
            return None
    if isinstance(symbol, str):
        return KEY_BINDINGS.get(symbol.strip().lower())
    return None


def moves_board(state: ndarray, direction: Direction) -> bool:
    """Check whether sliding in ``direction`` changes the board."""
    moved, _, _ = latent_state(state, direction)
    return not array_equal(moved, state)


def legal_actions(state: ndarray) -> list[Direction]:
    """
    Determine the directions that change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Legal directions, in (left, up, right, down) order.
    """
    return [direction for direction in Direction if moves_board(state, direction)]


def illegal_actions(state: ndarray) -> list[Direction]:
    """Directions that leave the board unchanged; the complement of `legal_actions`."""
    return [direction for direction in Direction if not moves_board(state, direction)]


def has_moves_remaining(state: ndarray) -> bool:
    """
    Check whether the player can still move.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if an empty cell exists or two orthogonally adjacent cells hold equal non-zero values.

    Examples
    --------
    >>> has_moves_remaining(np.array([[2, 4, 8, 16],
    ...                               [32, 64, 128, 256],
    ...                               [512, 1024, 2048, 4],
    ...                               [8, 16, 32, 64]]))
    False
    """
    if (state == 0).any():
        return True
    horizontal = state[:, :-1] == state[:, 1:]
    vertical = state[:-1, :] == state[1:, :]
    return bool(horizontal.any() or vertical.any())


def is_done(state: ndarray) -> bool:
    """Check if the game has ended: no empty cell and no adjacent equal tiles."""
    return not has_moves_remaining(state)
