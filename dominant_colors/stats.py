# dominant_colors/stats.py
from __future__ import annotations

"""
Per-class colour statistics.

Exports:
  normalise_pixels(rgb_u8) -> float64 [..., 3] in [0, 1]
  class_moments(pixels, classes, class_id) -> (mean, covariance, count)
  estimate(pixels, classes, node) -> node with mean / covariance filled in
  principal_axis(covariance) -> (top eigenvalue, unit eigenvector)
  top_eigenvalue(covariance) -> float

Notes:
  - Colours are scaled by 1/255 before accumulation.
  - covariance = E[x x^T] - mean mean^T (population second moment).
  - An empty class raises DegenerateClass instead of dividing by zero.
"""

from typing import TYPE_CHECKING, Tuple

import numpy as np

from .core_types import ClassMap, Mat3, U8Image, Vec3
from .errors import DegenerateClass

if TYPE_CHECKING:  # pragma: no cover
    from .tree import ColorClassNode


def normalise_pixels(rgb_u8: np.ndarray) -> np.ndarray:
    """Scale uint8 colour rows to float64 in [0, 1]."""
    return np.asarray(rgb_u8, dtype=np.float64) / 255.0


def class_moments(
    pixels: U8Image, classes: ClassMap, class_id: int
) -> Tuple[Vec3, Mat3, int]:
    """
    Mean, covariance and pixel count of every pixel labelled `class_id`.

    `pixels` is (..., 3) and `classes` has the same leading shape.
    """
    member_mask = classes == class_id
    count = int(np.count_nonzero(member_mask))
    if count == 0:
        raise DegenerateClass(class_id)

    scaled = normalise_pixels(pixels[member_mask]).reshape(-1, 3)
    colour_sum = scaled.sum(axis=0)
    outer_sum = scaled.T @ scaled

    mean = colour_sum / count
    covariance = outer_sum / count - np.outer(mean, mean)
    # Force exact symmetry; the matmul above can differ in the last ulp.
    covariance = 0.5 * (covariance + covariance.T)
    return mean, covariance, count


def estimate(pixels: U8Image, classes: ClassMap, node: "ColorClassNode") -> "ColorClassNode":
    """Recompute `node.mean`, `node.covariance` and `node.pixel_count` in place."""
    mean, covariance, count = class_moments(pixels, classes, node.class_id)
    node.mean = mean
    node.covariance = covariance
    node.pixel_count = count
    return node


def principal_axis(covariance: Mat3) -> Tuple[float, Vec3]:
    """
    Largest eigenvalue of a symmetric 3x3 matrix and its unit eigenvector.

    The vector is sign-normalised so its largest-magnitude component is
    positive. For a zero matrix any unit vector is acceptable; eigh returns
    a basis vector.
    """
    values, vectors = np.linalg.eigh(np.asarray(covariance, dtype=np.float64))
    axis = vectors[:, -1].copy()
    pivot = int(np.argmax(np.abs(axis)))
    if axis[pivot] < 0.0:
        axis = -axis
    return float(values[-1]), axis


def top_eigenvalue(covariance: Mat3) -> float:
    """Largest eigenvalue of a symmetric 3x3 matrix."""
    return float(np.linalg.eigvalsh(np.asarray(covariance, dtype=np.float64))[-1])


__all__ = [
    "normalise_pixels",
    "class_moments",
    "estimate",
    "principal_axis",
    "top_eigenvalue",
]
