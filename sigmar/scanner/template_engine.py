"""
Template Matching Board Scanner

Recognizes each cell by comparing a small patch around the tile center
against reference images of every tile kind. The absolute difference is
run through an edge filter first, so a uniform brightness shift (hover
glow, selection highlight) scores close to a perfect match while a
different symbol does not.
"""

import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from ..screen import BoardGeometry
from ..solver.board import Board
from ..solver.coords import all_coords
from ..solver.element import Element
from .base import BoardScanner
from .result import CellScan, ScanResult

logger = logging.getLogger(__name__)

# Side of the square sampled around each tile center (pixels)
PATCH_SIZE = 20

# 3x3 Laplacian-style edge kernel
EDGE_KERNEL = np.array([
    [-1, -1, -1],
    [-1, 8, -1],
    [-1, -1, -1],
], dtype=np.float32)

# Runner-up closer than this counts as an uncertain cell
MARGIN_THRESHOLD = 4.0

# (element, blocked); (None, False) is the empty cell
TemplateKey = Tuple[Optional[Element], bool]

EMPTY_KEY: TemplateKey = (None, False)


def template_path(template_dir: Path, key: TemplateKey) -> Path:
    """
    File name of a reference image.

    Layout: empty.png, normal/<element>.png, blocked/<element>.png
    """
    element, blocked = key
    if element is None:
        return template_dir / "empty.png"
    folder = "blocked" if blocked else "normal"
    return template_dir / folder / f"{element.name.lower()}.png"


def all_template_keys() -> List[TemplateKey]:
    """Every reference image key: empty, then normal and blocked per element."""
    keys: List[TemplateKey] = [EMPTY_KEY]
    keys.extend((element, False) for element in Element)
    keys.extend((element, True) for element in Element)
    return keys


def compare_patch(patch: np.ndarray, template: np.ndarray) -> float:
    """
    Score a patch against a reference image.

    Args:
        patch: BGR uint8 patch from the screenshot
        template: BGR uint8 reference image of the same size

    Returns:
        Sum over channels of the mean edge response of the difference;
        0 means identical
    """
    diff = cv2.absdiff(patch, template)
    edges = cv2.filter2D(diff, -1, EDGE_KERNEL)
    return float(edges.reshape(-1, edges.shape[-1]).mean(axis=0).sum())


class ElementTemplates:
    """Manages the reference images used for matching."""

    def __init__(self):
        self.templates: Dict[TemplateKey, np.ndarray] = {}
        self._loaded = False

    def load_templates(self, template_dir: Path, patch_size: int = PATCH_SIZE) -> None:
        """
        Load all 29 reference images.

        Args:
            template_dir: Directory holding empty.png, normal/ and blocked/
            patch_size: Expected width and height of every image

        Raises:
            FileNotFoundError: If an image is missing or unreadable
            ValueError: If an image has the wrong size
        """
        self.templates.clear()
        self._loaded = False

        for key in all_template_keys():
            path = template_path(template_dir, key)
            if not path.exists():
                raise FileNotFoundError(f"Missing reference image: {path}")
            img = cv2.imread(str(path), cv2.IMREAD_COLOR)
            if img is None:
                raise FileNotFoundError(f"Unreadable reference image: {path}")
            if img.shape[:2] != (patch_size, patch_size):
                raise ValueError(
                    f"Reference image {path} is {img.shape[1]}x{img.shape[0]}, "
                    f"expected {patch_size}x{patch_size}"
                )
            self.templates[key] = img

        self._loaded = True
        logger.debug(f"Loaded {len(self.templates)} reference images from {template_dir}")

    def is_loaded(self) -> bool:
        """Check if templates are loaded."""
        return self._loaded

    def match(self, patch: np.ndarray) -> Tuple[TemplateKey, float, float]:
        """
        Find the closest reference image.

        Args:
            patch: BGR patch of the template size

        Returns:
            Tuple of (best_key, best_score, margin to runner-up)
        """
        scores = sorted(
            (compare_patch(patch, template), i, key)
            for i, (key, template) in enumerate(self.templates.items())
        )
        best_score, _, best_key = scores[0]
        margin = scores[1][0] - best_score if len(scores) > 1 else float("inf")
        return best_key, best_score, margin


class TemplateScanner(BoardScanner):
    """
    Board scanner using reference image matching.

    Cell positions come from the board geometry, so no grid detection
    is needed; the game always draws the board at the same place.
    """

    def __init__(
        self,
        template_dir: Union[str, Path],
        geometry: Optional[BoardGeometry] = None,
        patch_size: int = PATCH_SIZE
    ):
        """
        Initialize the scanner.

        Args:
            template_dir: Directory with the reference images
            geometry: Board placement on screen
            patch_size: Side of the sampled square in pixels
        """
        self._template_dir = Path(template_dir)
        self._geometry = geometry or BoardGeometry()
        self._patch_size = patch_size
        self._templates = ElementTemplates()

    @property
    def name(self) -> str:
        return "template"

    @property
    def geometry(self) -> BoardGeometry:
        return self._geometry

    def load(self) -> None:
        """Load reference images now instead of on the first scan."""
        self._templates.load_templates(self._template_dir, self._patch_size)

    def scan(self, image: Image.Image) -> ScanResult:
        """
        Recognize every cell of the board.

        Args:
            image: PIL Image of the whole screen

        Returns:
            ScanResult with the recognized board and per-cell scores
        """
        start_time = time.perf_counter()

        if not self._templates.is_loaded():
            self.load()

        # Same channel order as cv2.imread
        cv_image = cv2.cvtColor(np.array(image.convert("RGB")), cv2.COLOR_RGB2BGR)
        img_height, img_width = cv_image.shape[:2]

        board = Board()
        cells: List[CellScan] = []
        uncertain = 0

        for index, coord in enumerate(all_coords()):
            position = self._geometry.coord_to_screen(coord)
            left, top, width, height = self._geometry.scan_box(coord, self._patch_size)

            if left < 0 or top < 0 or left + width > img_width or top + height > img_height:
                # Board does not fit the image, treat the cell as empty
                cells.append(CellScan(index, None, False, 0.0, 0.0, position))
                uncertain += 1
                continue

            patch = np.ascontiguousarray(cv_image[top:top + height, left:left + width])
            (element, blocked), score, margin = self._templates.match(patch)

            board.set(index, element)
            if margin < MARGIN_THRESHOLD:
                uncertain += 1
            cells.append(CellScan(index, element, blocked, score, margin, position))

        result = ScanResult(
            board=board,
            cells=cells,
            uncertain_count=uncertain,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        logger.debug(
            f"Scan: {result.tile_count} tiles, {uncertain} uncertain, "
            f"{result.processing_time_ms:.1f}ms"
        )
        return result
