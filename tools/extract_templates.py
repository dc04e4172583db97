#!/usr/bin/env python3
"""
Reference image extraction tool for scanner calibration.

Cuts the reference images the scanner needs out of screenshots of
fresh games. Every cell is labeled either from a board text file or
interactively; whether a tile is drawn "blocked" follows from the
labeled board itself (a tile that is not free is drawn greyed out).

Usage:
    python extract_templates.py IMAGE [IMAGE ...] [--board FILE ...]

The script will:
1. Cut a patch around each of the 91 cells
2. Label each cell (from --board, or by asking; keys are the board symbols)
3. Average all samples of each reference kind
4. Save templates to assets/elements/ (empty.png, normal/, blocked/)

Examples:
    python extract_templates.py debug/shot1.png --board debug/shot1.txt
    python extract_templates.py debug/shot1.png debug/shot2.png
"""

import sys
import argparse
from pathlib import Path
from collections import defaultdict
from typing import Dict, List, Optional

import cv2
import numpy as np
from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar.scanner import PATCH_SIZE, all_template_keys, template_path
from sigmar.screen import BoardGeometry, geometry_from_settings
from sigmar.settings import load_settings
from sigmar.solver import Board, Element, all_coords


TEMPLATE_DIR = Path("./assets/elements")


def extract_patches(image_path: Path, geometry: BoardGeometry) -> List[np.ndarray]:
    """Cut the BGR patch of every cell, in index order."""
    image = Image.open(image_path).convert("RGB")
    cv_image = cv2.cvtColor(np.array(image), cv2.COLOR_RGB2BGR)

    patches = []
    for coord in all_coords():
        left, top, width, height = geometry.scan_box(coord, PATCH_SIZE)
        patches.append(cv_image[top:top + height, left:left + width].copy())
    return patches


def interactive_label(patches: List[np.ndarray]) -> Optional[Board]:
    """
    Label cells by showing them to the user.

    Returns the labeled board, or None if the user quit.
    """
    print("\n" + "="*60)
    print("Interactive Cell Labeling")
    print("="*60)
    symbols = " ".join(e.symbol for e in Element)
    print(f"For each cell shown, press its symbol ({symbols}), '.' for empty, or 'q' to quit.")
    print()

    cv2.namedWindow("Cell", cv2.WINDOW_NORMAL)
    cv2.resizeWindow("Cell", 200, 200)

    board = Board()
    for index, (patch, coord) in enumerate(zip(patches, all_coords())):
        cv2.imshow("Cell", cv2.resize(patch, (160, 160), interpolation=cv2.INTER_NEAREST))
        print(f"Cell {index + 1}/91 at {coord}: ", end="", flush=True)

        while True:
            key = chr(cv2.waitKey(0) & 0xFF)
            if key == 'q':
                print("quit")
                cv2.destroyAllWindows()
                return None
            try:
                element = Element.from_symbol(key)
            except ValueError:
                print(f"\n  Invalid key. Enter a symbol, '.', or 'q': ", end="", flush=True)
                continue
            board.set(index, element)
            print(element.name.lower() if element else "empty")
            break

    cv2.destroyAllWindows()
    return board


def collect_samples(patches: List[np.ndarray], board: Board, samples: Dict) -> None:
    """Sort patches into reference kinds using the labeled board."""
    for index, patch in enumerate(patches):
        element = board.get(index)
        if element is None:
            key = (None, False)
        else:
            key = (element, not board.is_free(index))
        samples[key].append(patch)


def create_templates(samples: Dict) -> Dict:
    """
    Create averaged templates from samples.

    Returns dict mapping key -> template image.
    """
    templates = {}
    for key, patches in samples.items():
        stacked = np.stack(patches, axis=0).astype(np.float32)
        templates[key] = np.mean(stacked, axis=0).round().astype(np.uint8)
    return templates


def save_templates(templates: Dict, template_dir: Path) -> None:
    """Save templates in the scanner's directory layout."""
    for key, template in templates.items():
        path = template_path(template_dir, key)
        path.parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(str(path), template)
        print(f"Saved: {path}")

    missing = [template_path(template_dir, k) for k in all_template_keys() if k not in templates]
    if missing:
        print(f"\nStill missing {len(missing)} reference images (use more screenshots):")
        for path in missing:
            print(f"  {path}")


def main():
    parser = argparse.ArgumentParser(description="Extract scanner reference images")
    parser.add_argument("images", nargs="+", type=Path, help="Screenshots of fresh games")
    parser.add_argument("--board", nargs="*", type=Path, default=[],
                        help="Board text files, one per image, in the same order")
    parser.add_argument("--out", type=Path, default=TEMPLATE_DIR, help="Output directory")
    parser.add_argument("--config", type=Path, default=None, help="Settings file")
    args = parser.parse_args()

    if args.board and len(args.board) != len(args.images):
        print("ERROR: Give one --board file per image")
        return 1

    geometry = geometry_from_settings(load_settings(args.config))
    samples = defaultdict(list)

    for i, image_path in enumerate(args.images):
        patches = extract_patches(image_path, geometry)
        if args.board:
            board = Board.from_text(args.board[i].read_text(encoding="utf-8"))
        else:
            board = interactive_label(patches)
            if board is None:
                break

        if not board.is_valid_initial_state():
            print(f"WARNING: {image_path} is not labeled as a fresh deal")
        collect_samples(patches, board, samples)
        print(f"{image_path}: {board.tile_count()} tiles labeled")

    if not samples:
        print("Nothing labeled")
        return 1

    save_templates(create_templates(samples), args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
