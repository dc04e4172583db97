"""
Board Scanner Base Interface

Abstract base class defining the scanner contract.
"""

from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image

from ..solver.search import InitialBoard
from .result import ScanResult


class BoardScanner(ABC):
    """
    Abstract base class for board scanners.

    Implementations read the 91 cells of the board from a screenshot.
    """

    @abstractmethod
    def scan(self, image: Image.Image) -> ScanResult:
        """
        Recognize every cell of the board.

        Args:
            image: PIL Image of the whole screen

        Returns:
            ScanResult containing:
            - board: Board - recognized elements (may be any composition)
            - cells: List[CellScan] - per-cell details
            - uncertain_count: int - cells with a close runner-up
            - processing_time_ms: float - processing duration
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Scanner identifier.

        Returns:
            String name identifying this scanner type (e.g., "template")
        """
        pass

    def scan_initial(self, image: Image.Image) -> Optional[InitialBoard]:
        """
        Scan and validate a fresh deal.

        Returns:
            InitialBoard, or None if the screen does not show a new game
        """
        return InitialBoard.try_from(self.scan(image).board)
