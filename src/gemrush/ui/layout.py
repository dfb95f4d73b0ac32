from __future__ import annotations

from typing import NamedTuple

from gemrush.components.gem import Position
from gemrush.constants import (
    BOARD_HORIZONTAL_PADDING,
    BOARD_SIZE,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    MAX_CELL_SIZE,
    MIN_CELL_SIZE,
)


class BoardGeometry(NamedTuple):
    cell_size: int
    left: float
    bottom: float
    size: int

    @property
    def width(self) -> float:
        return self.cell_size * self.size

    @property
    def top(self) -> float:
        return self.bottom + self.width


def compute_board_geometry(window_width: int, window_height: int, size: int = BOARD_SIZE) -> BoardGeometry:
    """Return the cell size and board origin for a window.

    Cells shrink with the window width (minus padding), never exceed
    MAX_CELL_SIZE, and also shrink to leave room for the HUD above the board.
    """
    cell_by_w = (window_width - BOARD_HORIZONTAL_PADDING) // size
    cell_by_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) // size
    cell_size = int(min(cell_by_w, cell_by_h, MAX_CELL_SIZE))
    if cell_size < MIN_CELL_SIZE:
        cell_size = MIN_CELL_SIZE
    total_width = size * cell_size
    left = (window_width - total_width) / 2
    return BoardGeometry(cell_size=cell_size, left=left, bottom=BOTTOM_MARGIN, size=size)


def cell_at_point(x: float, y: float, geometry: BoardGeometry) -> Position | None:
    """Map a window point to a board cell. Row 0 is the top row; screen y grows upwards."""
    if x < geometry.left or x >= geometry.left + geometry.width:
        return None
    if y < geometry.bottom or y >= geometry.top:
        return None
    col = int((x - geometry.left) // geometry.cell_size)
    row_from_bottom = int((y - geometry.bottom) // geometry.cell_size)
    row = geometry.size - 1 - row_from_bottom
    if 0 <= row < geometry.size and 0 <= col < geometry.size:
        return Position(row, col)
    return None


def cell_center(pos: Position, geometry: BoardGeometry) -> tuple[float, float]:
    row, col = pos
    x = geometry.left + col * geometry.cell_size + geometry.cell_size / 2
    y = geometry.bottom + (geometry.size - 1 - row) * geometry.cell_size + geometry.cell_size / 2
    return x, y
