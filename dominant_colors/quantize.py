# dominant_colors/quantize.py
from __future__ import annotations

"""
Dominant-colour quantizer.

Starts with one class holding every pixel, then repeatedly splits the leaf
class with the widest spread along its principal axis until there are
`count` leaves. The mean colour of each leaf is a dominant colour.

Exports:
  validate_color_count(count) -> int
  prepare_pixels(image) -> U8Image
  build_class_tree(image, count, *, debug=False) -> (tree, classes, pixels)
  find_dominant_colors(image, count, *, debug=False) -> QuantizeResult

Policies:
  - A child that receives no pixels inherits its parent's mean with a zero
    covariance and pixel_count 0. It still counts as a leaf, so the result
    always has exactly `count` colours.
  - Ties between equally spread leaves go to the first in breadth-first order.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .constants import CLASS_ID_DTYPE, MAX_COLOR_COUNT, MIN_COLOR_COUNT, ROOT_CLASS_ID
from .core_types import ClassMap, RGBTuple, U8Image
from .errors import DegenerateClass, EmptyOrUnreadableImage, InvalidColorCount
from .render import dominant_colors, quantized_image
from .split import split_class
from .stats import estimate, top_eigenvalue
from .tree import ClassTree, ColorClassNode
from .utils import debug_log, key_value_pairs_to_string, warn


@dataclass
class QuantizeResult:
    """Everything a caller may want after quantizing one image."""

    colors: List[RGBTuple]
    pixel_counts: List[int]
    quantized: U8Image
    classes: ClassMap
    tree: ClassTree


def validate_color_count(count: object) -> int:
    """Return `count` as int, or raise InvalidColorCount outside [1, 255]."""
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidColorCount(count)
    if not MIN_COLOR_COUNT <= int(count) <= MAX_COLOR_COUNT:
        raise InvalidColorCount(count)
    return int(count)


def prepare_pixels(image: object) -> U8Image:
    """
    Validate a caller-supplied pixel buffer and drop any alpha channel.

    Accepts uint8 (H,W,3), (H,W,4), or flat (N,3)/(N,4) rows.
    """
    if image is None:
        raise EmptyOrUnreadableImage("no image data")
    arr = np.asarray(image)
    if arr.ndim not in (2, 3) or arr.shape[-1] not in (3, 4):
        raise EmptyOrUnreadableImage(
            f"expected (H,W,3/4) or (N,3/4) pixels, got shape {arr.shape}"
        )
    if arr.size == 0 or 0 in arr.shape:
        raise EmptyOrUnreadableImage(f"image has no pixels (shape {arr.shape})")
    if arr.dtype != np.uint8:
        raise TypeError(f"expected uint8 pixels, got {arr.dtype}")
    return np.ascontiguousarray(arr[..., :3])


def _estimate_child(
    pixels: U8Image,
    classes: ClassMap,
    parent: ColorClassNode,
    child: ColorClassNode,
    debug: bool,
) -> None:
    try:
        estimate(pixels, classes, child)
    except DegenerateClass:
        child.mean = parent.mean.copy()
        child.covariance = np.zeros((3, 3), dtype=np.float64)
        child.pixel_count = 0
        if debug:
            warn(
                f"class {child.class_id} received no pixels; "
                f"using the mean of class {parent.class_id}"
            )


def build_class_tree(
    image: object, count: int, *, debug: bool = False
) -> Tuple[ClassTree, ClassMap, U8Image]:
    """
    Run the split loop and return (tree, classes, pixels).

    `classes` has the image's leading shape and holds a leaf id per pixel.
    """
    n_colors = validate_color_count(count)
    pixels = prepare_pixels(image)

    classes: ClassMap = np.full(pixels.shape[:-1], ROOT_CLASS_ID, dtype=CLASS_ID_DTYPE)
    tree = ClassTree()
    estimate(pixels, classes, tree.root)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Pixels", tree.root.pixel_count), ("Colours", n_colors)]
            )
        )

    for step in range(1, n_colors):
        node = tree.most_spread_leaf()
        next_id = tree.next_free_class_id()
        spread = top_eigenvalue(node.covariance) if debug else 0.0

        left_count, right_count = split_class(pixels, classes, next_id, node)
        _estimate_child(pixels, classes, node, node.left, debug)
        _estimate_child(pixels, classes, node, node.right, debug)

        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Split", f"{step}/{n_colors - 1}"),
                        ("Class", node.class_id),
                        ("Spread", spread),
                        ("Left", f"{next_id}={left_count:,}"),
                        ("Right", f"{next_id + 1}={right_count:,}"),
                    ]
                )
            )

    return tree, classes, pixels


def find_dominant_colors(
    image: object, count: int, *, debug: bool = False
) -> QuantizeResult:
    """
    Extract `count` dominant colours from an RGB(A) uint8 image.

    Raises:
      InvalidColorCount: count outside [1, 255].
      EmptyOrUnreadableImage: missing data or zero-sized image.
    """
    tree, classes, _pixels = build_class_tree(image, count, debug=debug)
    leaves = tree.leaves()
    return QuantizeResult(
        colors=dominant_colors(tree),
        pixel_counts=[leaf.pixel_count for leaf in leaves],
        quantized=quantized_image(classes, tree),
        classes=classes,
        tree=tree,
    )


__all__ = [
    "QuantizeResult",
    "validate_color_count",
    "prepare_pixels",
    "build_class_tree",
    "find_dominant_colors",
]
