"""
Step Module - A single removal on the board.
"""

from dataclasses import dataclass
from typing import Tuple

from .coords import HexCoord, index_to_coord


@dataclass(frozen=True)
class Step:
    """
    Removal of two tiles, or of the single Gold tile.

    A Step carries only cell indices; the board decides what they hold.

    Attributes:
        first: Linear index of the first tile
        second: Linear index of the second tile (equal to first for Gold)
    """
    first: int
    second: int

    @classmethod
    def single(cls, index: int) -> 'Step':
        return cls(index, index)

    @property
    def is_single(self) -> bool:
        return self.first == self.second

    @property
    def cells(self) -> Tuple[int, ...]:
        """Distinct cells this step clears."""
        if self.is_single:
            return (self.first,)
        return (self.first, self.second)

    def coords(self) -> Tuple[HexCoord, HexCoord]:
        return index_to_coord(self.first), index_to_coord(self.second)

    def __str__(self) -> str:
        a, b = self.coords()
        if self.is_single:
            return f"{a}"
        return f"{a}+{b}"
