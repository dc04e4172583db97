"""
Element Module - The fixed catalogue of tile types on a Sigmar's Garden board.
"""

from enum import IntEnum
from typing import Dict, Optional, Tuple


class Element(IntEnum):
    """
    Tile type. The integer value is the packed 4-bit code (0 means empty),
    and the declaration order is the canonical ordering used everywhere.
    """
    SALT = 1
    AIR = 2
    FIRE = 3
    WATER = 4
    EARTH = 5
    VITAE = 6
    MORS = 7
    QUICKSILVER = 8
    LEAD = 9
    TIN = 10
    IRON = 11
    COPPER = 12
    SILVER = 13
    GOLD = 14

    @property
    def symbol(self) -> str:
        """One-character symbol used by the text board notation."""
        return _SYMBOLS[self]

    @classmethod
    def from_code(cls, code: int) -> Optional['Element']:
        """
        Decode a packed cell value.

        Args:
            code: 0 for empty, 1-14 for an element

        Returns:
            Element, or None for an empty cell

        Raises:
            ValueError: If the code is out of range (corrupted board)
        """
        if code == 0:
            return None
        if not 1 <= code <= 14:
            raise ValueError(f"Invalid element code: {code}")
        return cls(code)

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional['Element']:
        """
        Parse a text notation symbol ('.' is empty).

        Raises:
            ValueError: If the symbol is unknown
        """
        if symbol == EMPTY_SYMBOL:
            return None
        try:
            return _BY_SYMBOL[symbol.upper()]
        except KeyError:
            raise ValueError(f"Unknown element symbol: {symbol!r}") from None


def to_code(element: Optional[Element]) -> int:
    """Encode an optional element as its packed cell value."""
    return 0 if element is None else int(element)


EMPTY_SYMBOL = "."

# Pair with Salt or with themselves
BASIC_ELEMENTS: Tuple[Element, ...] = (
    Element.AIR,
    Element.FIRE,
    Element.WATER,
    Element.EARTH,
)

# Removal priority: only the first metal still on the board can be taken
METALS: Tuple[Element, ...] = (
    Element.LEAD,
    Element.TIN,
    Element.IRON,
    Element.COPPER,
    Element.SILVER,
)

# Composition of every freshly dealt board (55 tiles)
INITIAL_COUNTS: Dict[Element, int] = {
    Element.SALT: 4,
    Element.AIR: 8,
    Element.FIRE: 8,
    Element.WATER: 8,
    Element.EARTH: 8,
    Element.VITAE: 4,
    Element.MORS: 4,
    Element.QUICKSILVER: 5,
    Element.LEAD: 1,
    Element.TIN: 1,
    Element.IRON: 1,
    Element.COPPER: 1,
    Element.SILVER: 1,
    Element.GOLD: 1,
}

INITIAL_TILE_COUNT = sum(INITIAL_COUNTS.values())

_SYMBOLS: Dict[Element, str] = {
    Element.SALT: "S",
    Element.AIR: "A",
    Element.FIRE: "F",
    Element.WATER: "W",
    Element.EARTH: "E",
    Element.VITAE: "V",
    Element.MORS: "M",
    Element.QUICKSILVER: "Q",
    Element.LEAD: "L",
    Element.TIN: "T",
    Element.IRON: "I",
    Element.COPPER: "C",
    Element.SILVER: "R",
    Element.GOLD: "G",
}

_BY_SYMBOL: Dict[str, Element] = {s: e for e, s in _SYMBOLS.items()}
