"""
Shared synthetic images for the dominant_colors tests.
"""

import numpy as np
import pytest

RED = (220, 30, 40)
BLUE = (20, 60, 210)


@pytest.fixture
def checkerboard():
    """16x16 two-colour checkerboard (RED / BLUE)."""
    ys, xs = np.mgrid[0:16, 0:16]
    img = np.empty((16, 16, 3), dtype=np.uint8)
    img[(ys + xs) % 2 == 0] = RED
    img[(ys + xs) % 2 == 1] = BLUE
    return img


@pytest.fixture
def solid():
    return np.full((12, 9, 3), (10, 200, 30), dtype=np.uint8)


@pytest.fixture
def four_blocks():
    """Four 8x8 blocks of distinct, well separated colours."""
    img = np.zeros((16, 16, 3), dtype=np.uint8)
    img[:8, :8] = (250, 250, 250)
    img[:8, 8:] = (5, 5, 5)
    img[8:, :8] = (240, 20, 20)
    img[8:, 8:] = (20, 20, 240)
    return img


@pytest.fixture
def noisy():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(32, 24, 3), dtype=np.uint8)
