from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from gemrush.components.gem import Gem, Position

Row = Tuple[Optional[Gem], ...]


@dataclass(frozen=True, slots=True)
class Board:
    """Square grid of gems, stored as nested tuples so a Board is a value.

    Engine operations never modify a Board; they build a new one from
    ``to_rows()`` and ``from_rows()``.
    """
    cells: Tuple[Row, ...]
    size: int

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Board size must be positive, got {self.size}")
        if len(self.cells) != self.size:
            raise ValueError(f"Board of size {self.size} has {len(self.cells)} rows")
        for index, row in enumerate(self.cells):
            if len(row) != self.size:
                raise ValueError(
                    f"Board of size {self.size} has {len(row)} cells in row {index}"
                )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[Gem]]]) -> Board:
        cells = tuple(tuple(row) for row in rows)
        return cls(cells=cells, size=len(cells))

    def to_rows(self) -> list[list[Optional[Gem]]]:
        """Mutable copy of the grid for building the next Board."""
        return [list(row) for row in self.cells]

    def contains(self, pos: Tuple[int, int]) -> bool:
        row, col = pos
        return 0 <= row < self.size and 0 <= col < self.size

    def at(self, pos: Tuple[int, int]) -> Optional[Gem]:
        if not self.contains(pos):
            raise IndexError(f"Position {tuple(pos)} is outside a {self.size}x{self.size} board")
        row, col = pos
        return self.cells[row][col]

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield Position(row, col)

    def gems(self) -> Iterator[Gem]:
        """Occupied cells in row-major order."""
        for row in self.cells:
            for gem in row:
                if gem is not None:
                    yield gem

    def is_full(self) -> bool:
        return all(gem is not None for row in self.cells for gem in row)
