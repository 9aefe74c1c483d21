"""
Tests for Pillow-backed image helpers.
"""

import numpy as np
import pytest
from PIL import Image

from dominant_colors.errors import EmptyOrUnreadableImage
from dominant_colors.image_io import (
    flatten_alpha,
    is_image_file,
    load_image_rgb,
    pillow_resample_from_name,
    resize_rgb_width,
    save_png_rgb,
)


def test_save_and_load_round_trip(tmp_path, noisy):
    path = save_png_rgb(tmp_path / "noisy.png", noisy)
    assert path.exists()
    assert np.array_equal(load_image_rgb(path), noisy)


def test_save_forces_png_suffix(tmp_path, solid):
    path = save_png_rgb(tmp_path / "out.jpg", solid)
    assert path.suffix == ".png"
    assert is_image_file(path)


def test_load_rgba_drops_or_composites_alpha(tmp_path):
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[..., :3] = (200, 10, 10)
    rgba[0, 0, 3] = 255
    path = tmp_path / "alpha.png"
    Image.fromarray(rgba).save(path)

    dropped = load_image_rgb(path)
    assert dropped.shape == (2, 2, 3)

    over_white = load_image_rgb(path, background=(255, 255, 255))
    assert tuple(over_white[0, 0]) == (200, 10, 10)
    assert tuple(over_white[1, 1]) == (255, 255, 255)


def test_flatten_alpha_half_transparent():
    rgba = np.array([[[100, 0, 200, 128]]], dtype=np.uint8)
    out = flatten_alpha(rgba, background=(0, 0, 0))
    assert tuple(out[0, 0]) == (50, 0, 100)
    assert flatten_alpha(rgba).tolist() == [[[100, 0, 200]]]


def test_unreadable_file_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    assert not is_image_file(path)
    with pytest.raises(EmptyOrUnreadableImage):
        load_image_rgb(path)


def test_resize_rgb_width_downscales_only():
    rgb = np.zeros((10, 20, 3), dtype=np.uint8)
    resample = pillow_resample_from_name("nearest")
    assert resize_rgb_width(rgb, 10, resample).shape == (5, 10, 3)
    assert resize_rgb_width(rgb, 40, resample) is rgb
    assert resize_rgb_width(rgb, None, resample) is rgb


def test_unknown_resample_name_defaults_to_bicubic():
    assert pillow_resample_from_name("bogus") == Image.Resampling.BICUBIC
