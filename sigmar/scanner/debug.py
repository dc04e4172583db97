"""
Scanner Debug Utilities

Functions for saving annotated debug images and managing debug output.
"""

from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageDraw, ImageFont

from ..screen import BoardGeometry
from ..solver.coords import BOARD_CELLS, index_to_coord
from .result import ScanResult
from .template_engine import MARGIN_THRESHOLD, PATCH_SIZE


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10


def save_debug_image(
    image: Image.Image,
    result: Optional[ScanResult],
    geometry: BoardGeometry,
    path: Union[str, Path]
) -> None:
    """
    Save an annotated debug image showing what the scanner saw.

    Annotations include:
    - Sample box around each cell
    - Recognized element symbol (lowercase when blocked)
    - Uncertain cells highlighted in red

    Args:
        image: Original PIL Image
        result: Scan result (can be None to only draw the sample boxes)
        geometry: Board placement used for the scan
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    debug_img = image.convert("RGB")
    draw = ImageDraw.Draw(debug_img)
    font = ImageFont.load_default()

    if result is None:
        for index in range(BOARD_CELLS):
            left, top, width, height = geometry.scan_box(index_to_coord(index), PATCH_SIZE)
            draw.rectangle([left, top, left + width, top + height], outline="blue")
    else:
        for cell in result.cells:
            left, top, width, height = geometry.scan_box(index_to_coord(cell.index), PATCH_SIZE)
            color = "red" if cell.margin < MARGIN_THRESHOLD else "green"
            draw.rectangle([left, top, left + width, top + height], outline=color)

            if cell.element is not None:
                text = cell.element.symbol.lower() if cell.blocked else cell.element.symbol
                draw.text((left + width + 2, top), text, fill=color, font=font)

        summary = f"Tiles: {result.tile_count}, Uncertain: {result.uncertain_count}, " \
                  f"Time: {result.processing_time_ms:.1f}ms"
        draw.text((10, 10), summary, fill="blue", font=font)

    debug_img.save(path, "PNG")

    _cleanup_debug_images(path.parent)


def _cleanup_debug_images(debug_dir: Path = DEBUG_DIR) -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not debug_dir.exists():
        return

    debug_files = sorted(
        debug_dir.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        old_file.unlink(missing_ok=True)
