# dominant_colors/constants.py
"""
Global tunables used across the project.

- Class id range and buffer dtype
- Debug class palette (CLASS_VIEW_PALETTE)
- Swatch and preview sizes, output file names
"""
from __future__ import annotations

from typing import List, Tuple

import numpy as np

# =========================
# Class ids
# =========================
ROOT_CLASS_ID: int = 1
MIN_COLOR_COUNT: int = 1
MAX_COLOR_COUNT: int = 255

# Every split allocates two fresh ids, so N colours use ids up to 2*N - 1.
CLASS_ID_DTYPE = np.uint16

# =========================
# Debug class palette
# =========================
# Indexed directly by class id. Ids past the end are not drawn.
CLASS_VIEW_PALETTE: List[Tuple[int, int, int]] = [
    (0, 0, 0),
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
    (128, 128, 128),
    (128, 255, 128),
    (32, 32, 32),
    (255, 128, 128),
    (128, 128, 255),
    (255, 255, 255),
    (32, 128, 128),
    (128, 32, 128),
    (128, 128, 32),
    (128, 32, 32),
    (32, 128, 32),
]

# =========================
# Rendering / CLI
# =========================
SWATCH_TILE_SIZE: int = 64
DEFAULT_PREVIEW_WIDTH: int = 240

CLASSIFICATION_FILENAME = "classification.png"
QUANTIZED_FILENAME = "quantized.png"
PALETTE_FILENAME = "palette.png"

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".bmp"}

__all__ = [
    "ROOT_CLASS_ID",
    "MIN_COLOR_COUNT",
    "MAX_COLOR_COUNT",
    "CLASS_ID_DTYPE",
    "CLASS_VIEW_PALETTE",
    "SWATCH_TILE_SIZE",
    "DEFAULT_PREVIEW_WIDTH",
    "CLASSIFICATION_FILENAME",
    "QUANTIZED_FILENAME",
    "PALETTE_FILENAME",
    "IMAGE_EXTENSIONS",
]
