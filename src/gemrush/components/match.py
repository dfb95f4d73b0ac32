from dataclasses import dataclass
from typing import Tuple

from gemrush.components.gem import GemType, Position


@dataclass(frozen=True, slots=True)
class Match:
    """One maximal straight run (horizontal or vertical) of same-typed gems."""
    positions: Tuple[Position, ...]
    type: GemType

    def __post_init__(self) -> None:
        if len(self.positions) < 3:
            raise ValueError(f"A match needs at least 3 positions, got {len(self.positions)}")

    @property
    def length(self) -> int:
        return len(self.positions)

    @property
    def is_special(self) -> bool:
        # Reserved for special gems; currently only affects scoring through length.
        return len(self.positions) >= 4
