"""
Solver Package - Board model and backtracking solver for Sigmar's Garden.

Public API:
    - Element: The 14 tile types
    - HexCoord: Axial board coordinate
    - index_to_coord() / coord_to_index() / neighbors_cw(): Coordinate helpers
    - Board: Mutable packed board with move generation
    - InitialBoard: Validated starting board
    - Step: One removal (a pair of cells, or Gold alone)
    - SolveResult / SolveOutcome / SolutionMetrics: Solve results
    - SolutionContext: Timeout context for a solve
    - BacktrackingSolver: Depth-first search

Usage:
    from sigmar.solver import Board, InitialBoard

    board = Board.from_text(text)
    initial = InitialBoard.try_from(board)
    if initial is None:
        ...  # not a fresh deal

    result = initial.solve(timeout_sec=5.0)
    if result.is_solved:
        for step in result.steps:
            print(step)
"""

# Core data structures
from .element import (
    Element,
    BASIC_ELEMENTS,
    METALS,
    INITIAL_COUNTS,
    INITIAL_TILE_COUNT,
)
from .coords import (
    HexCoord,
    BOARD_CELLS,
    BOARD_RADIUS,
    index_to_coord,
    coord_to_index,
    neighbors_cw,
    all_coords,
)
from .move import Step
from .board import Board
from .solution import SolveOutcome, SolveResult, SolutionMetrics
from .context import SolutionContext

# Search
from .search import InitialBoard, BacktrackingSolver

__all__ = [
    # Elements
    "Element",
    "BASIC_ELEMENTS",
    "METALS",
    "INITIAL_COUNTS",
    "INITIAL_TILE_COUNT",
    # Coordinates
    "HexCoord",
    "BOARD_CELLS",
    "BOARD_RADIUS",
    "index_to_coord",
    "coord_to_index",
    "neighbors_cw",
    "all_coords",
    # Board
    "Step",
    "Board",
    # Results
    "SolveOutcome",
    "SolveResult",
    "SolutionMetrics",
    "SolutionContext",
    # Search
    "InitialBoard",
    "BacktrackingSolver",
]
