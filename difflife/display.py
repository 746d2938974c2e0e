"""
Differential terminal renderer.

A fixed-size character + colour buffer, framed by a box-drawing border,
sits behind a curses window. `fill_pixel` only touches the buffer; cells
whose glyph or colour really changed are queued, and `render` flushes
that queue to the window by cursor position. Nothing else is redrawn.

Buffer layout (rows, top to bottom): TOP_MARGIN blank rows, the top
border, the logical grid rows, the bottom border, BOTTOM_MARGIN blank
rows. Columns follow the same scheme with the left/right margins.
Each buffer cell occupies a cell_width × cell_height block on screen.
"""

from __future__ import annotations

import curses
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from .errors import DimensionError

# ── Layout ──────────────────────────────────────────────────────────────
TOP_MARGIN = 1
BOTTOM_MARGIN = 0
LEFT_MARGIN = 1
RIGHT_MARGIN = 0
BORDER = 1

MIN_ROWS, MAX_ROWS = 8, 32
MIN_COLUMNS, MAX_COLUMNS = 16, 64
MIN_CELL_SIZE, MAX_CELL_SIZE = 1, 4

DEFAULT_COLOR: int = curses.COLOR_WHITE
BLANK = " "

# ── Box-drawing glyphs ──────────────────────────────────────────────────
TOP_LEFT = "\u2554"      # ╔
TOP_RIGHT = "\u2557"     # ╗
BOTTOM_LEFT = "\u255a"   # ╚
BOTTOM_RIGHT = "\u255d"  # ╝
VERTICAL = "\u2551"      # ║
HORIZONTAL = "\u2550"    # ═


class Window(Protocol):
    """The slice of `curses.window` the renderer draws with."""

    def addstr(self, y: int, x: int, text: str, attr: int = ...) -> None: ...
    def clear(self) -> None: ...
    def refresh(self) -> None: ...


@dataclass(frozen=True)
class Cell:
    """A (row, column) coordinate, row 0 at the top, column 0 at the left."""

    row: int
    column: int

    def shift(self, rows: int, columns: int) -> Cell:
        return Cell(self.row + rows, self.column + columns)

    def shift_by(self, displacement: Cell) -> Cell:
        return self.shift(displacement.row, displacement.column)


# ═══════════════════════════════════════════════════════════════════════
#  Color management
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class Palette:
    """
    Maps curses colour numbers to drawing attributes.

    Colour pairs can only be allocated once curses is running, so until
    `setup` is called every colour maps to the plain attribute. That keeps
    the renderer usable against a fake window.
    """

    colors: tuple[int, ...] = (
        curses.COLOR_WHITE,
        curses.COLOR_RED,
        curses.COLOR_GREEN,
        curses.COLOR_YELLOW,
        curses.COLOR_BLUE,
        curses.COLOR_MAGENTA,
        curses.COLOR_CYAN,
    )
    _attrs: dict[int, int] = field(default_factory=dict)

    def setup(self) -> None:
        curses.start_color()
        curses.use_default_colors()
        max_pairs = curses.COLOR_PAIRS - 1
        for pair_id, color in enumerate(self.colors, start=1):
            if pair_id > max_pairs:
                break
            curses.init_pair(pair_id, color, -1)
            self._attrs[color] = curses.color_pair(pair_id)

    def attr(self, color: int) -> int:
        return self._attrs.get(color, curses.A_NORMAL)


# ═══════════════════════════════════════════════════════════════════════
#  The renderer
# ═══════════════════════════════════════════════════════════════════════

class DifferentialRenderer:
    """
    Statically sized terminal grid whose updates are buffered and drawn
    separately on request.

    Construction blanks the buffers, queues every buffer cell and draws
    the border, so the first `render` paints the whole frame.
    """

    def __init__(
        self,
        window: Window,
        rows: int,
        columns: int,
        cell_width: int = 1,
        cell_height: int = 1,
        palette: Palette | None = None,
    ) -> None:
        if not MIN_ROWS <= rows <= MAX_ROWS:
            raise DimensionError(
                f"the number of grid rows is not within the acceptable range "
                f"of values ({MIN_ROWS} to {MAX_ROWS}), got {rows}"
            )
        if not MIN_COLUMNS <= columns <= MAX_COLUMNS:
            raise DimensionError(
                f"the number of grid columns is not within the acceptable range "
                f"of values ({MIN_COLUMNS} to {MAX_COLUMNS}), got {columns}"
            )
        for name, size in (("cell_width", cell_width), ("cell_height", cell_height)):
            if not MIN_CELL_SIZE <= size <= MAX_CELL_SIZE:
                raise DimensionError(
                    f"{name} must be within {MIN_CELL_SIZE} to {MAX_CELL_SIZE}, got {size}"
                )

        self.window = window
        self.rows = rows
        self.columns = columns
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.palette = palette if palette is not None else Palette()

        self.buffer_height = TOP_MARGIN + BOTTOM_MARGIN + 2 * BORDER + rows
        self.buffer_width = LEFT_MARGIN + RIGHT_MARGIN + 2 * BORDER + columns

        self._chars: NDArray[np.str_] = np.empty((0, 0), dtype="<U1")
        self._colors: NDArray[np.int16] = np.empty((0, 0), dtype=np.int16)
        self._queue: deque[Cell] = deque()

        self._initialize_buffer()
        self._draw_border()

    # ── Public API ──────────────────────────────────────────────────

    def initialize_window(self, hide_cursor: bool = True) -> None:
        """Blank the terminal and optionally hide the cursor."""
        self.window.clear()
        if hide_cursor:
            try:
                curses.curs_set(0)
            except curses.error:
                pass

    def fill_pixel(self, char: str, color: int, row: int, column: int) -> None:
        """
        Put `char` in `color` at logical grid position (row, column).

        Writes that leave the buffered glyph and colour unchanged are
        dropped; anything else updates the buffer and queues the cell.
        """
        cell = self.to_buffer(row, column)
        r, c = cell.row, cell.column
        if self._chars[r, c] == char and self._colors[r, c] == color:
            return
        self._chars[r, c] = char
        self._colors[r, c] = color
        self._queue.append(cell)

    def clear(self) -> None:
        """Blank the buffers, redraw the border and render straight away."""
        self._initialize_buffer()
        self._draw_border()
        self.render()

    def render(self) -> int:
        """
        Draw every queued cell in FIFO order. Returns how many were drawn.

        Colours go through the `addstr` attribute argument, which leaves the
        window's own attribute as it was before the pass.
        """
        width, height = self.cell_width, self.cell_height
        drawn = 0
        while self._queue:
            cell = self._queue.popleft()
            r, c = cell.row, cell.column
            text = str(self._chars[r, c]) * width
            attr = self.palette.attr(int(self._colors[r, c]))
            y0, x = r * height, c * width
            for line in range(height):
                try:
                    self.window.addstr(y0 + line, x, text, attr)
                except curses.error:
                    pass  # outside the physical terminal
            drawn += 1
        self.window.refresh()
        return drawn

    # ── Inspection ──────────────────────────────────────────────────

    @property
    def pending(self) -> int:
        """Number of cells queued for the next render."""
        return len(self._queue)

    @property
    def buffer_shape(self) -> tuple[int, int]:
        return self.buffer_height, self.buffer_width

    def queued(self) -> list[Cell]:
        return list(self._queue)

    def char_at(self, buffer_row: int, buffer_column: int) -> str:
        return str(self._chars[buffer_row, buffer_column])

    def color_at(self, buffer_row: int, buffer_column: int) -> int:
        return int(self._colors[buffer_row, buffer_column])

    def to_buffer(self, row: int, column: int) -> Cell:
        """Offset a logical grid position past the margin and border."""
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise IndexError(
                f"pixel ({row}, {column}) is outside the {self.rows}x{self.columns} grid"
            )
        return Cell(row, column).shift(TOP_MARGIN + BORDER, LEFT_MARGIN + BORDER)

    # ── Buffer maintenance ──────────────────────────────────────────

    def _initialize_buffer(self) -> None:
        """Fill both buffers with blanks and queue every buffer cell once."""
        shape = (self.buffer_height, self.buffer_width)
        self._chars = np.full(shape, BLANK, dtype="<U1")
        self._colors = np.full(shape, DEFAULT_COLOR, dtype=np.int16)
        self._queue.clear()
        for r in range(self.buffer_height):
            for c in range(self.buffer_width):
                self._queue.append(Cell(r, c))

    def _draw_border(self) -> None:
        top = TOP_MARGIN
        bottom = TOP_MARGIN + BORDER + self.rows
        left = LEFT_MARGIN
        right = LEFT_MARGIN + BORDER + self.columns

        chars, colors = self._chars, self._colors
        chars[top, left] = TOP_LEFT
        chars[top, right] = TOP_RIGHT
        chars[bottom, left] = BOTTOM_LEFT
        chars[bottom, right] = BOTTOM_RIGHT
        chars[top + 1 : bottom, left] = VERTICAL
        chars[top + 1 : bottom, right] = VERTICAL
        chars[top, left + 1 : right] = HORIZONTAL
        chars[bottom, left + 1 : right] = HORIZONTAL

        colors[top : bottom + 1, left] = DEFAULT_COLOR
        colors[top : bottom + 1, right] = DEFAULT_COLOR
        colors[top, left : right + 1] = DEFAULT_COLOR
        colors[bottom, left : right + 1] = DEFAULT_COLOR
