# dominant_colors/split.py
from __future__ import annotations

"""
Principal-axis bisection of one colour class.

The class's pixels are projected onto the top eigenvector of its covariance
and thresholded at the projection of the class mean. Pixels at or below the
threshold go to the left child, the rest to the right child.
"""

from typing import Tuple

import numpy as np

from .constants import CLASS_ID_DTYPE
from .core_types import ClassMap, U8Image
from .stats import normalise_pixels, principal_axis
from .tree import ColorClassNode


def split_class(
    pixels: U8Image, classes: ClassMap, next_left_id: int, node: ColorClassNode
) -> Tuple[int, int]:
    """
    Split leaf `node` into children `next_left_id` and `next_left_id + 1`.

    Relabels, in place, exactly the pixels of `classes` that carry
    `node.class_id`. The node keeps its own statistics; the children are
    created without statistics and must be estimated by the caller.

    Returns:
      (left_count, right_count) pixel counts of the new children.
    """
    node.require_stats()
    right_id = next_left_id + 1
    if right_id > np.iinfo(CLASS_ID_DTYPE).max:
        raise OverflowError(f"class id {right_id} does not fit the class buffer")

    _, axis = principal_axis(node.covariance)
    threshold = float(axis @ node.mean)

    node.attach_children(next_left_id, right_id)

    member_mask = classes == node.class_id
    projection = normalise_pixels(pixels[member_mask]).reshape(-1, 3) @ axis
    goes_left = projection <= threshold

    classes[member_mask] = np.where(goes_left, next_left_id, right_id).astype(
        classes.dtype, copy=False
    )
    left_count = int(np.count_nonzero(goes_left))
    return left_count, int(goes_left.size) - left_count


__all__ = ["split_class"]
