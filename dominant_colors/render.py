# dominant_colors/render.py
from __future__ import annotations

"""
Output builders for a finished class tree.

Exports:
- mean_to_rgb(mean) -> RGBTuple
- dominant_colors(tree) -> list[RGBTuple], one per leaf in breadth-first order
- quantized_image(classes, tree) -> U8Image with every pixel set to its class mean
- palette_swatch(colors, tile_size=64) -> U8Image strip of square tiles
- class_visualization(classes) -> U8Image using the fixed debug palette
- unrendered_class_ids(classes) -> ids that have no debug palette entry
- colour_usage_report(colors, pixel_counts) -> [(hex, count, share), ...]

Notes:
- Means are stored in [0, 1]; they are scaled by 255, rounded and clipped.
- Debug palette lookups are by raw class id, so large ids are skipped and
  reported with a warning rather than raising.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .constants import CLASS_VIEW_PALETTE, SWATCH_TILE_SIZE
from .core_types import ClassMap, RGBTuple, U8Image, Vec3, coerce_to_rgb_tuple, rgb_to_hex
from .tree import ClassTree
from .utils import warn


def mean_to_rgb(mean: Vec3) -> RGBTuple:
    scaled = np.clip(np.rint(np.asarray(mean, dtype=np.float64) * 255.0), 0, 255)
    return coerce_to_rgb_tuple(scaled)


def dominant_colors(tree: ClassTree) -> List[RGBTuple]:
    out: List[RGBTuple] = []
    for leaf in tree.leaves():
        leaf.require_stats()
        out.append(mean_to_rgb(leaf.mean))
    return out


def quantized_image(classes: ClassMap, tree: ClassTree) -> U8Image:
    """
    Replace every pixel with the mean colour of its leaf class.

    Pixels whose id is not a leaf id stay black.
    """
    leaves = tree.leaves()
    max_id = max(int(classes.max(initial=0)), max(leaf.class_id for leaf in leaves))
    lookup = np.zeros((max_id + 1, 3), dtype=np.uint8)
    for leaf in leaves:
        leaf.require_stats()
        lookup[leaf.class_id] = mean_to_rgb(leaf.mean)
    return lookup[classes]


def palette_swatch(
    colors: Sequence[RGBTuple], tile_size: int = SWATCH_TILE_SIZE
) -> U8Image:
    """Single row of `tile_size` square tiles, one per colour, left to right."""
    if tile_size <= 0:
        raise ValueError("tile_size must be positive")
    out = np.zeros((tile_size, tile_size * len(colors), 3), dtype=np.uint8)
    for i, rgb in enumerate(colors):
        out[:, i * tile_size : (i + 1) * tile_size] = rgb
    return out


def unrendered_class_ids(classes: ClassMap) -> List[int]:
    """Class ids present in `classes` that fall outside the debug palette."""
    present = np.unique(classes)
    return [int(c) for c in present if int(c) >= len(CLASS_VIEW_PALETTE)]


def class_visualization(classes: ClassMap) -> U8Image:
    """
    Colour each pixel by its raw class id using CLASS_VIEW_PALETTE.

    Ids beyond the palette are left black and reported once via warn().
    """
    palette = np.array(CLASS_VIEW_PALETTE, dtype=np.uint8)
    in_range = classes < palette.shape[0]
    out = np.zeros(classes.shape + (3,), dtype=np.uint8)
    out[in_range] = palette[classes[in_range]]

    missing = unrendered_class_ids(classes)
    if missing:
        skipped = int(np.count_nonzero(~in_range))
        warn(
            f"class view palette has {palette.shape[0]} colours; "
            f"ids {missing} not drawn ({skipped:,} pixels). "
            "You should increase the number of predefined colors!"
        )
    return out


def colour_usage_report(
    colors: Sequence[RGBTuple], pixel_counts: Sequence[int]
) -> List[Tuple[str, int, float]]:
    """(hex, pixel count, share of all pixels) per colour, in input order."""
    total = int(sum(pixel_counts))
    report: List[Tuple[str, int, float]] = []
    for rgb, count in zip(colors, pixel_counts):
        share = (int(count) / total) if total else 0.0
        report.append((rgb_to_hex(rgb), int(count), share))
    return report


__all__ = [
    "mean_to_rgb",
    "dominant_colors",
    "quantized_image",
    "palette_swatch",
    "unrendered_class_ids",
    "class_visualization",
    "colour_usage_report",
]
