"""
Scanner Result Dataclasses

Shared data structures for board scan results.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..solver.board import Board
from ..solver.element import Element


@dataclass
class CellScan:
    """Per-cell scan result."""
    index: int
    element: Optional[Element]  # None for an empty cell
    blocked: bool               # Best match was the greyed-out variant
    score: float                # Lower is better, 0 is a pixel-perfect match
    margin: float               # Gap to the runner-up reference image
    position: Tuple[int, int]   # (x, y) tile center on screen


@dataclass
class ScanResult:
    """Complete scan result for a frame."""
    board: Board
    cells: List[CellScan] = field(default_factory=list)
    uncertain_count: int = 0         # Cells with margin below threshold
    processing_time_ms: float = 0.0  # Time taken

    @property
    def tile_count(self) -> int:
        return self.board.tile_count()
