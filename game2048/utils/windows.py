# -*- coding: utf-8 -*-
"""
Graphical window for playing 2048.

This module draws the engine's state with Matplotlib and forwards keyboard events to the host. It only reads
what it is given: the grid, the scores, the merge events of the last move and the terminal flags.
"""
from typing import Callable, Iterable, Optional

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event
from numpy import ndarray


class WindowBoard:
    """
    A class for rendering the 2048 game board using Matplotlib.

    Methods
    -------
    show_state(board, score, best_score, merged_cells, win_reached, game_over)
        Update the display with the current game state.
    register_key_handler(key_handler: Callable)
        Register a function to handle keyboard events.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        0: "#CCC0B3",
        2: "#EEE4DA",
        4: "#ECE0C8",
        8: "#ECB280",
        16: "#EC8D53",
        32: "#F57C5F",
        64: "#E95937",
        128: "#F3D96B",
        256: "#F2D04A",
        512: "#E5BF2E",
        1024: "#E2B814",
        2048: "#EBC502",
    }
    BEYOND_COLOR = "#3C3A32"
    MERGE_EDGE_COLOR = "#F9F6F2"

    def __init__(self, title: str, size: int):
        """
        Initialize the game board window.

        Parameters
        ----------
        title : str
            Prefix of the window title.
        size : int
            The size of the game board (4 for a 4x4 board).
        """
        self.title = title
        self.size = size
        self.fig, self.axe = plt.subplots()
        self.fig.canvas.manager.set_window_title(title)
        self._setup_axes(size)
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _setup_axes(self, size: int):
        """
        Set up one subplot per cell and a banner for win / game over messages.

        Parameters
        ----------
        size : int
            The size of the game board.
        """
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=1, wspace=0.05, hspace=0.05)
        self.axe.set_facecolor("#BBADA0")
        self.axe.set_axis_off()

        self.texts = []
        self.axes = [self.fig.add_subplot(size, size, r * size + c + 1) for r in range(size) for c in range(size)]
        for ax in self.axes:
            text = ax.text(0.5, 0.5, "", ha="center", va="center", fontsize="x-large", fontweight="demibold")
            self.texts.append(text)
            ax.set_xticks([])
            ax.set_yticks([])

        # ##: Drawn above the cells.
        self.banner = self.fig.text(
            0.5, 0.5, "", ha="center", va="center", fontsize="xx-large", fontweight="bold", zorder=10
        )
        self.banner.set_bbox({"facecolor": "#FFFFFF", "alpha": 0.8, "edgecolor": "none"})
        self.banner.set_visible(False)

    def _close_handler(self, event: Optional[Event] = None):
        """Set the closed flag when the window is closed."""
        self.closed = True

    def _tile_color(self, value: int) -> str:
        return self.COLORS.get(value, self.BEYOND_COLOR)

    def show_state(
        self,
        board: ndarray,
        score: int,
        best_score: int,
        merged_cells: Iterable[tuple[int, int]] = (),
        win_reached: bool = False,
        game_over: bool = False,
    ):
        """
        Show or update the game state.

        Parameters
        ----------
        board : ndarray
            The current grid.
        score : int
            The current score.
        best_score : int
            The best score of the session.
        merged_cells : Iterable[tuple[int, int]], optional
            Cells that received a merged tile during the last move; they are outlined.
        win_reached : bool, optional
            Show the win banner.
        game_over : bool, optional
            Show the game over banner.
        """
        merged = set(merged_cells)
        for index, (ax, text, value) in enumerate(zip(self.axes, self.texts, board.flat)):
            value = int(value)
            text.set_text(str(value) if value != 0 else "")
            text.set_color("#776E65" if value <= 4 else "#F9F6F2")
            ax.set_facecolor(self._tile_color(value))

            highlight = divmod(index, self.size) in merged
            for spine in ax.spines.values():
                spine.set_edgecolor(self.MERGE_EDGE_COLOR if highlight else "#BBADA0")
                spine.set_linewidth(3 if highlight else 1)

        if game_over:
            self.banner.set_text("Game over! Press 'r' to restart")
        elif win_reached:
            self.banner.set_text("You win! Press 'c' to continue")
        self.banner.set_visible(game_over or win_reached)

        self.fig.canvas.manager.set_window_title(f"{self.title} - Score: {score} - Best: {best_score}")
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()
        plt.pause(0.001)

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            A function called with the Matplotlib key event whenever a key is pressed in the window.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """Close the window and set the closed flag."""
        plt.close(self.fig)
        self.closed = True
