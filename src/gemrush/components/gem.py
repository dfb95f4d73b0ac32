from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class GemType(Enum):
    """The six gem colors. Only compared for equality."""
    RED = 'red'
    BLUE = 'blue'
    GREEN = 'green'
    YELLOW = 'yellow'
    PURPLE = 'purple'
    ORANGE = 'orange'


class Position(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class Gem:
    """A typed token occupying one board cell.

    ``id`` only gives the renderer a stable identity across frames; two gems
    with the same type are interchangeable for gameplay.
    """
    type: GemType
    id: str
