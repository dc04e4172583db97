"""
Coordinate Module - Axial hex coordinates and linear cell indices.

The board is a hexagon of 91 cells. A cell is addressed either by its
linear index (0-90, top row first, left to right) or by an axial
coordinate (row, col) where row and col are in [-5, 5] and
|row - col| <= 5. The center cell is (0, 0), index 45.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

BOARD_RADIUS = 5
BOARD_CELLS = 91
CENTER_INDEX = 45

# Clockwise from east: (drow, dcol)
NEIGHBOR_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
)


def _row_offset(row: int) -> int:
    # Index of the cell (row, 0), even when that cell is not on the board
    return CENTER_INDEX + row * (2 * BOARD_RADIUS + 1) - row * (abs(row) + 1) // 2


def _in_bounds(row: int, col: int) -> bool:
    return (abs(row) <= BOARD_RADIUS
            and abs(col) <= BOARD_RADIUS
            and abs(row - col) <= BOARD_RADIUS)


@dataclass(frozen=True)
class HexCoord:
    """
    Axial coordinate of a board cell.

    Attributes:
        row: Row from -5 (top) to 5 (bottom)
        col: Column; row r spans max(-5, r-5) .. min(5, r+5)
    """
    row: int
    col: int

    @classmethod
    def checked(cls, row: int, col: int) -> Optional['HexCoord']:
        """Return the coordinate if it lies on the board, otherwise None."""
        if _in_bounds(row, col):
            return cls(row, col)
        return None

    @property
    def ring(self) -> int:
        """Distance from the center cell (0-5)."""
        return max(abs(self.row), abs(self.col), abs(self.row - self.col))

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def coord_to_index(coord: HexCoord) -> int:
    """
    Convert an axial coordinate to its linear index.

    Raises:
        ValueError: If the coordinate is outside the board
    """
    if not _in_bounds(coord.row, coord.col):
        raise ValueError(f"Coordinate {coord} is outside the board")
    return coord.col + _row_offset(coord.row)


def index_to_coord(index: int) -> HexCoord:
    """
    Convert a linear index to its axial coordinate.

    Raises:
        ValueError: If the index is not in [0, 91)
    """
    if not 0 <= index < BOARD_CELLS:
        raise ValueError(f"Index {index} is outside the board")
    return _COORDS[index]


def neighbors_cw(coord: HexCoord) -> List[Optional[HexCoord]]:
    """
    The six neighbor slots of a cell, clockwise starting east.

    Off-board slots are None, so the result always has six entries.
    """
    return [HexCoord.checked(coord.row + dr, coord.col + dc)
            for dr, dc in NEIGHBOR_DIRECTIONS]


def all_coords() -> List[HexCoord]:
    """Every board coordinate in linear index order."""
    return list(_COORDS)


def _build_coords() -> Tuple[HexCoord, ...]:
    coords = []
    for row in range(-BOARD_RADIUS, BOARD_RADIUS + 1):
        first = max(-BOARD_RADIUS, row - BOARD_RADIUS)
        last = min(BOARD_RADIUS, row + BOARD_RADIUS)
        for col in range(first, last + 1):
            coords.append(HexCoord(row, col))
    return tuple(coords)


_COORDS = _build_coords()

# Per index: the six clockwise neighbor indices, None where off-board
NEIGHBOR_INDICES: Tuple[Tuple[Optional[int], ...], ...] = tuple(
    tuple(None if n is None else coord_to_index(n) for n in neighbors_cw(c))
    for c in _COORDS
)
