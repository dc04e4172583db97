"""
Diagnostic script to analyze scanner recognition on screenshots.
Prints the recognized board, the element counts against a fresh deal, and
the cells whose best match was close to the runner-up.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from PIL import Image

from sigmar.scanner import TemplateScanner, MARGIN_THRESHOLD, save_debug_image
from sigmar.screen import geometry_from_settings
from sigmar.settings import load_settings
from sigmar.solver import Element, INITIAL_COUNTS, index_to_coord


def analyze_image(image_path: Path, scanner: TemplateScanner):
    """Scan an image and report counts and low-margin cells."""
    print(f"\n{'='*60}")
    print(f"Analyzing: {image_path}")
    print(f"{'='*60}")

    image = Image.open(image_path)
    result = scanner.scan(image)

    print(result.board.to_text())
    print(f"\nTiles: {result.tile_count}, uncertain: {result.uncertain_count}, "
          f"time: {result.processing_time_ms:.1f}ms")

    # Compare composition with a fresh deal
    counts = result.board.element_counts()
    print(f"\n--- Element Counts ---")
    print(f"{'Element':>12} {'Found':>6} {'Expected':>9}")
    print("-" * 30)
    for element in Element:
        found = counts.get(element, 0)
        expected = INITIAL_COUNTS[element]
        flag = "" if found == expected else "  <-- MISMATCH"
        print(f"{element.name.lower():>12} {found:>6} {expected:>9}{flag}")

    # Cells most likely misread
    print(f"\n--- Low Margin Cells (< {MARGIN_THRESHOLD}) ---")
    print(f"{'Index':>5} {'Coord':>8} {'Match':>14} {'Score':>8} {'Margin':>8}")
    print("-" * 50)
    for cell in sorted(result.cells, key=lambda c: c.margin):
        if cell.margin >= MARGIN_THRESHOLD:
            break
        name = cell.element.name.lower() if cell.element else "empty"
        if cell.blocked:
            name += "*"
        coord = str(index_to_coord(cell.index))
        print(f"{cell.index:>5} {coord:>8} {name:>14} {cell.score:>8.1f} {cell.margin:>8.1f}")

    out_path = image_path.with_name(f"debug_{image_path.stem}_scan.png")
    save_debug_image(image, result, scanner.geometry, out_path)
    print(f"\nAnnotated image: {out_path}")


if __name__ == "__main__":
    settings = load_settings()
    scanner = TemplateScanner(settings["template_dir"], geometry_from_settings(settings))

    images = [Path(p) for p in sys.argv[1:]]
    if not images:
        images = sorted(Path("debug").glob("*.png"))[-3:]

    if not images:
        print("No images found!")
    else:
        for img_path in images:
            analyze_image(img_path, scanner)
