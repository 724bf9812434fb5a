"""
Core grid transitions for the 2048 game: line merging, board sliding, tile spawning and invariant checks.
"""

from numpy import argwhere, array, ndarray, rot90, zeros_like
from numpy.random import PCG64DXSM, Generator, default_rng

from game2048.core.config import GRID_SIZE, TILE_SPAWN_PROBS

# ##>: Module-level generator used when the caller does not inject one.
_GENERATOR = default_rng(PCG64DXSM())


def merge_line(line: ndarray) -> tuple[int, ndarray, list[int]]:
    """
    Compact a line, merge adjacent equal values and compute the score.

    Parameters
    ----------
    line : ndarray
        A 1D array representing one row or column, ordered from the leading edge.

    Returns
    -------
    score : int
        The total score obtained from merging.
    merged_line : ndarray
        The compacted line after merging (without padding).
    positions : list[int]
        Indices in `merged_line` of the freshly merged tiles.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging occurs from the leading edge towards the trailing edge.
    - A merged tile is never merged again in the same call.

    Examples
    --------
    >>> merge_line(np.array([2, 2, 2, 2]))
    (8, array([4, 4]), [0, 1])

    >>> merge_line(np.array([2, 0, 2, 4]))
    (4, array([4, 4]), [0])
    """
    # ##: Handle lines with nothing to merge.
    non_zero = line[line != 0]
    if len(non_zero) <= 1:
        return 0, non_zero, []

    result = []
    positions = []
    score = 0

    # ##: Scan from the leading edge; a merged pair is skipped as a whole.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) * 2
            positions.append(len(result))
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=line.dtype), positions


def slide_and_merge(board: ndarray) -> tuple[int, ndarray, ndarray]:
    """
    Slide the game board to the left, merge adjacent cells, and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        The updated game board after sliding and merging.
    merged_mask : ndarray
        Boolean mask of the cells that received a freshly merged tile.

    Notes
    -----
    - The function operates on rows, effectively sliding left.
    - For other directions, rotate the board before calling this function.
    - Empty cells (zeros) are added to the right side of each row after merging.
    """
    result = zeros_like(board)
    merged_mask = zeros_like(board, dtype=bool)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row, positions = merge_line(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row
        if positions:
            merged_mask[i, positions] = True

    return score, result, merged_mask


def latent_state(state: ndarray, direction: int) -> tuple[ndarray, int, frozenset[tuple[int, int]]]:
    """
    Compute the board after a move, without adding a new tile.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    direction : int
        The direction to slide (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    new_state : ndarray
        The new state of the board after the move.
    score : int
        The score obtained from this move.
    merged_cells : frozenset[tuple[int, int]]
        Final ``(row, col)`` positions of the merged tiles, in the original orientation.

    Notes
    -----
    Every direction is the left slide applied to the board rotated by ``direction`` quarter turns,
    so rows are processed for left/right and columns for up/down.
    """
    direction = int(direction)
    rotated_board = rot90(state, k=direction)
    score, updated_board, merged_mask = slide_and_merge(rotated_board)
    merged_cells = frozenset((int(row), int(col)) for row, col in argwhere(rot90(merged_mask, k=-direction)))
    return rot90(updated_board, k=-direction), score, merged_cells


def empty_cells(state: ndarray) -> list[tuple[int, int]]:
    """Coordinates of every empty cell, recomputed from the board."""
    return [(int(row), int(col)) for row, col in argwhere(state == 0)]


def spawn_tile(
    state: ndarray, generator: Generator | None = None, probs: dict[int, float] | None = None
) -> tuple[int, int, int] | None:
    """
    Place one new tile on a random empty cell.

    Parameters
    ----------
    state : ndarray
        The game board, modified in place.
    generator : Generator, optional
        Random number generator; the module generator is used when omitted.
    probs : dict[int, float], optional
        Probability of each spawned value (default 2: 0.6, 4: 0.4).

    Returns
    -------
    tuple[int, int, int] | None
        ``(row, col, value)`` of the new tile, or None when the board is full.

    Notes
    -----
    The cell is chosen uniformly among empty cells, then the value is drawn.
    """
    rng = generator if generator is not None else _GENERATOR
    probs = probs if probs is not None else TILE_SPAWN_PROBS

    # ##: A full board is a normal end of game condition.
    available_cells = argwhere(state == 0)
    if len(available_cells) == 0:
        return None

    row, col = available_cells[rng.integers(len(available_cells))]
    value = int(rng.choice(list(probs), p=list(probs.values())))
    state[row, col] = value
    return int(row), int(col), value


def fill_cells(
    state: ndarray, number_tile: int, generator: Generator | None = None, probs: dict[int, float] | None = None
) -> ndarray:
    """
    Fill empty cells with new tiles.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    number_tile : int
        Number of new tiles to add.
    generator : Generator, optional
        Random number generator for reproducibility.
    probs : dict[int, float], optional
        Probability of each spawned value.

    Returns
    -------
    ndarray
        The updated state of the game board with new tiles added.

    Notes
    -----
    If there are fewer empty cells than requested, it fills all available cells.
    """
    for _ in range(number_tile):
        if spawn_tile(state, generator=generator, probs=probs) is None:
            break
    return state


def is_at_value(state: ndarray, value: int) -> bool:
    """Check whether any tile holds exactly ``value``."""
    return bool((state == value).any())


def max_tile(state: ndarray) -> int:
    """Largest tile on the board."""
    return int(state.max())


def check_invariants(state: ndarray, size: int = GRID_SIZE) -> None:
    """
    Assert that the board is well formed.

    Parameters
    ----------
    state : ndarray
        The game board.
    size : int, optional
        Expected side length (default is GRID_SIZE).

    Raises
    ------
    AssertionError
        If the shape is wrong or a cell holds a value that is neither 0 nor a power of two >= 2.
        Either indicates a bug in the move algorithm.
    """
    assert state.shape == (size, size), f'Board shape {state.shape} != {(size, size)}'
    tiles = state[state != 0]
    assert (tiles >= 2).all(), f'Invalid tile values: {tiles[tiles < 2].tolist()}'
    bad = tiles[(tiles & (tiles - 1)) != 0]
    assert bad.size == 0, f'Tiles are not powers of two: {bad.tolist()}'
