"""
Scanner Module for Sigmar's Garden Solver

Reads the board from a screenshot.

Usage:
    from sigmar.scanner import TemplateScanner

    scanner = TemplateScanner("assets/elements")

    # Any board, possibly mid-game
    result = scanner.scan(image)
    print(result.board.to_text())

    # Only a fresh deal, validated
    initial = scanner.scan_initial(image)
"""

# Public API - Result types
from .result import CellScan, ScanResult

# Public API - Base class for custom scanners
from .base import BoardScanner

# Public API - Template scanner
from .template_engine import (
    TemplateScanner,
    ElementTemplates,
    PATCH_SIZE,
    MARGIN_THRESHOLD,
    all_template_keys,
    template_path,
    compare_patch,
)

# Debug utilities
from .debug import save_debug_image, DEBUG_DIR

__all__ = [
    "CellScan",
    "ScanResult",
    "BoardScanner",
    "TemplateScanner",
    "ElementTemplates",
    "PATCH_SIZE",
    "MARGIN_THRESHOLD",
    "all_template_keys",
    "template_path",
    "compare_patch",
    "save_debug_image",
    "DEBUG_DIR",
]
