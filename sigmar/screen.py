"""
Screen Geometry Module - Maps board cells to screen pixels.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .solver.coords import HexCoord, index_to_coord


@dataclass(frozen=True)
class BoardGeometry:
    """
    Where the board sits on screen.

    Defaults match the game at 2560x1440 (fullscreen on the primary monitor).

    Attributes:
        center_x: X pixel of the center cell
        center_y: Y pixel of the center cell
        tile_width: Horizontal distance between neighbors in a row
        tile_height: Vertical distance between rows
    """
    center_x: int = 1216
    center_y: int = 504
    tile_width: int = 66
    tile_height: int = 57

    def coord_to_screen(self, coord: HexCoord) -> Tuple[int, int]:
        """
        Screen position of a tile center.

        Each row down shifts half a tile to the left, which is what turns
        the axial grid into a hexagon on screen.
        """
        x = self.center_x + coord.col * self.tile_width - (coord.row * self.tile_width) // 2
        y = self.center_y + coord.row * self.tile_height
        return x, y

    def index_to_screen(self, index: int) -> Tuple[int, int]:
        return self.coord_to_screen(index_to_coord(index))

    def scan_box(self, coord: HexCoord, size: int = 20) -> Tuple[int, int, int, int]:
        """
        Square sample area centered on a tile.

        Returns:
            (left, top, width, height)
        """
        x, y = self.coord_to_screen(coord)
        half = size // 2
        return x - half, y - half, size, size


def geometry_from_settings(settings: Dict[str, Any]) -> BoardGeometry:
    """Build the board geometry from the 'geometry' settings section."""
    values = settings.get("geometry", {})
    return BoardGeometry(
        center_x=int(values.get("center_x", BoardGeometry.center_x)),
        center_y=int(values.get("center_y", BoardGeometry.center_y)),
        tile_width=int(values.get("tile_width", BoardGeometry.tile_width)),
        tile_height=int(values.get("tile_height", BoardGeometry.tile_height)),
    )
