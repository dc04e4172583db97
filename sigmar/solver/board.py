"""
Board Module - Packed hex board with the freeness rule and move generation.
"""

from collections import Counter
from itertools import combinations
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .coords import BOARD_CELLS, BOARD_RADIUS, NEIGHBOR_INDICES, HexCoord, coord_to_index
from .element import (
    BASIC_ELEMENTS,
    EMPTY_SYMBOL,
    INITIAL_COUNTS,
    METALS,
    Element,
    to_code,
)
from .move import Step

Cell = Union[int, HexCoord]

# Two cells per byte
PACKED_SIZE = (BOARD_CELLS + 1) // 2


def _cell_index(cell: Cell) -> int:
    if isinstance(cell, HexCoord):
        return coord_to_index(cell)
    if not 0 <= cell < BOARD_CELLS:
        raise ValueError(f"Index {cell} is outside the board")
    return cell


class Board:
    """
    Mutable board: 91 cells, each empty or holding one Element.

    Cells are packed as 4-bit codes, two per byte (even index in the high
    nibble). Boards compare by value and copy cheaply, which is what the
    solver relies on for undo.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Optional[bytes] = None):
        if bits is None:
            self._bits = bytearray(PACKED_SIZE)
        else:
            if len(bits) != PACKED_SIZE:
                raise ValueError(f"Packed board must be {PACKED_SIZE} bytes, got {len(bits)}")
            self._bits = bytearray(bits)

    @classmethod
    def from_cells(cls, cells: Mapping[Cell, Element]) -> 'Board':
        """
        Create a board from a mapping of cell (index or coordinate) to element.

        Cells not in the mapping are empty.
        """
        board = cls()
        for cell, element in cells.items():
            board.set(cell, element)
        return board

    @classmethod
    def from_text(cls, text: str) -> 'Board':
        """
        Parse the text notation: 11 lines for rows -5..5, one symbol per cell
        ('.' for empty). Whitespace inside a line is ignored.

        Raises:
            ValueError: On a wrong number of rows, a wrong row length or an
                unknown symbol
        """
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) != 2 * BOARD_RADIUS + 1:
            raise ValueError(f"Expected {2 * BOARD_RADIUS + 1} rows, got {len(lines)}")

        board = cls()
        index = 0
        for row, line in zip(range(-BOARD_RADIUS, BOARD_RADIUS + 1), lines):
            symbols = [ch for ch in line if not ch.isspace()]
            expected = 2 * BOARD_RADIUS + 1 - abs(row)
            if len(symbols) != expected:
                raise ValueError(f"Row {row} needs {expected} cells, got {len(symbols)}")
            for symbol in symbols:
                board.set(index, Element.from_symbol(symbol))
                index += 1
        return board

    def to_text(self) -> str:
        """Render the board in the text notation, indented as a hexagon."""
        lines = []
        index = 0
        for row in range(-BOARD_RADIUS, BOARD_RADIUS + 1):
            width = 2 * BOARD_RADIUS + 1 - abs(row)
            symbols = []
            for i in range(index, index + width):
                element = self.get(i)
                symbols.append(EMPTY_SYMBOL if element is None else element.symbol)
            index += width
            lines.append(" " * abs(row) + " ".join(symbols))
        return "\n".join(lines)

    def _code(self, index: int) -> int:
        byte = self._bits[index >> 1]
        return byte >> 4 if index & 1 == 0 else byte & 0x0F

    def get(self, cell: Cell) -> Optional[Element]:
        """
        Read a cell.

        Raises:
            ValueError: If the cell is off the board or holds a corrupt code
        """
        return Element.from_code(self._code(_cell_index(cell)))

    def set(self, cell: Cell, element: Optional[Element]) -> None:
        """Write a cell; None empties it."""
        index = _cell_index(cell)
        code = to_code(element)
        pos = index >> 1
        if index & 1 == 0:
            self._bits[pos] = (self._bits[pos] & 0x0F) | (code << 4)
        else:
            self._bits[pos] = (self._bits[pos] & 0xF0) | code

    def copy(self) -> 'Board':
        return Board(bytes(self._bits))

    def to_bytes(self) -> bytes:
        return bytes(self._bits)

    def cells(self) -> Iterator[Tuple[int, Optional[Element]]]:
        """Every (index, element) pair in index order, empty cells included."""
        for index in range(BOARD_CELLS):
            yield index, self.get(index)

    def tile_count(self) -> int:
        return sum(1 for index in range(BOARD_CELLS) if self._code(index))

    def element_counts(self) -> Dict[Element, int]:
        counts: Dict[Element, int] = Counter()
        for _, element in self.cells():
            if element is not None:
                counts[element] += 1
        return counts

    def is_valid_initial_state(self) -> bool:
        """True iff the board holds exactly the composition of a fresh deal."""
        return dict(self.element_counts()) == INITIAL_COUNTS

    def is_solved(self) -> bool:
        return not any(self._bits)

    def locate(self, element: Element) -> Optional[int]:
        """Index of the first cell holding element, or None."""
        code = int(element)
        for index in range(BOARD_CELLS):
            if self._code(index) == code:
                return index
        return None

    def is_free(self, cell: Cell) -> bool:
        """
        Check if a tile can be taken.

        A cell is free when three consecutive neighbor slots (clockwise,
        wrapping around) are all empty or off the board.
        """
        neighbors = NEIGHBOR_INDICES[_cell_index(cell)]
        open_slots = [n is None or self._code(n) == 0 for n in neighbors]
        return any(open_slots[i] and open_slots[(i + 1) % 6] and open_slots[(i + 2) % 6]
                   for i in range(6))

    def free_elements(self) -> Iterator[Tuple[int, Element]]:
        """Occupied free cells in index order."""
        for index in range(BOARD_CELLS):
            code = self._code(index)
            if code and self.is_free(index):
                yield index, Element.from_code(code)

    def valid_steps(self) -> List[Step]:
        """
        All legal steps on the current board.

        The solver tries steps from the end of this list first, so the
        order below is also the search order (last group first).

        Returns:
            Salt pairs, Salt with a basic element, basic pairs,
            Mors with Vitae, then the metal or Gold step(s)
        """
        free: Dict[Element, List[int]] = {}
        for index, element in self.free_elements():
            free.setdefault(element, []).append(index)

        steps: List[Step] = []

        salts = free.get(Element.SALT, [])
        steps.extend(Step(a, b) for a, b in combinations(salts, 2))

        for salt in salts:
            for element in BASIC_ELEMENTS:
                for other in free.get(element, []):
                    steps.append(Step(salt, other))

        for element in BASIC_ELEMENTS:
            steps.extend(Step(a, b) for a, b in combinations(free.get(element, []), 2))

        for mors in free.get(Element.MORS, []):
            for vitae in free.get(Element.VITAE, []):
                steps.append(Step(mors, vitae))

        for metal in METALS:
            index = self.locate(metal)
            if index is None:
                continue
            # Only the lowest metal on the board counts, free or not
            if self.is_free(index):
                for quicksilver in free.get(Element.QUICKSILVER, []):
                    steps.append(Step(index, quicksilver))
            break
        else:
            golds = free.get(Element.GOLD, [])
            if golds:
                steps.append(Step.single(golds[0]))

        return steps

    def apply(self, step: Step) -> None:
        """Clear the cells of a step."""
        self.set(step.first, None)
        self.set(step.second, None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Board(tiles={self.tile_count()})"
