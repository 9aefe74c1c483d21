"""
Tests for swatch, class-view and quantized-image builders.
"""

import numpy as np
import pytest

from dominant_colors.constants import CLASS_VIEW_PALETTE, SWATCH_TILE_SIZE
from dominant_colors.render import (
    class_visualization,
    colour_usage_report,
    dominant_colors,
    mean_to_rgb,
    palette_swatch,
    quantized_image,
    unrendered_class_ids,
)
from dominant_colors.tree import ClassTree


def _two_leaf_tree():
    tree = ClassTree()
    tree.root.mean = np.array([0.5, 0.5, 0.5])
    tree.root.covariance = np.eye(3)
    tree.root.attach_children(2, 3)
    tree.root.left.mean = np.array([1.0, 0.0, 0.0])
    tree.root.left.covariance = np.zeros((3, 3))
    tree.root.right.mean = np.array([0.0, 0.2, 0.4])
    tree.root.right.covariance = np.zeros((3, 3))
    return tree


def test_mean_to_rgb_rounds_and_clips():
    assert mean_to_rgb(np.array([1.2, -0.1, 0.5])) == (255, 0, 128)
    assert mean_to_rgb(np.array([0.2, 0.4, 0.8])) == (51, 102, 204)


def test_dominant_colors_follow_leaf_order():
    assert dominant_colors(_two_leaf_tree()) == [(255, 0, 0), (0, 51, 102)]


def test_quantized_image_uses_leaf_means():
    classes = np.array([[2, 3], [3, 2]], dtype=np.uint16)
    out = quantized_image(classes, _two_leaf_tree())
    assert out.dtype == np.uint8
    assert out.shape == (2, 2, 3)
    assert tuple(out[0, 0]) == (255, 0, 0)
    assert tuple(out[0, 1]) == (0, 51, 102)


def test_quantized_image_leaves_unknown_ids_black():
    classes = np.array([[1, 2]], dtype=np.uint16)
    out = quantized_image(classes, _two_leaf_tree())
    assert tuple(out[0, 0]) == (0, 0, 0)


def test_palette_swatch_tiles():
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
    swatch = palette_swatch(colors)
    assert swatch.shape == (SWATCH_TILE_SIZE, 3 * SWATCH_TILE_SIZE, 3)
    for i, rgb in enumerate(colors):
        tile = swatch[:, i * SWATCH_TILE_SIZE : (i + 1) * SWATCH_TILE_SIZE]
        assert np.all(tile == np.array(rgb, dtype=np.uint8))


def test_palette_swatch_custom_size_and_empty():
    assert palette_swatch([(1, 2, 3)], tile_size=4).shape == (4, 4, 3)
    assert palette_swatch([]).shape == (SWATCH_TILE_SIZE, 0, 3)
    with pytest.raises(ValueError):
        palette_swatch([(1, 2, 3)], tile_size=0)


def test_class_visualization_uses_fixed_palette(capsys):
    classes = np.array([[1, 2], [3, 17]], dtype=np.uint16)
    view = class_visualization(classes)
    assert tuple(view[0, 0]) == CLASS_VIEW_PALETTE[1]
    assert tuple(view[0, 1]) == CLASS_VIEW_PALETTE[2]
    assert tuple(view[1, 0]) == CLASS_VIEW_PALETTE[3]
    assert tuple(view[1, 1]) == CLASS_VIEW_PALETTE[17]
    assert "[warn]" not in capsys.readouterr().out


def test_class_visualization_reports_ids_past_palette(capsys):
    classes = np.array([[1, 18], [40, 40]], dtype=np.uint16)
    view = class_visualization(classes)
    assert unrendered_class_ids(classes) == [18, 40]
    assert tuple(view[0, 0]) == CLASS_VIEW_PALETTE[1]
    assert not view[0, 1].any()
    assert not view[1].any()
    out = capsys.readouterr().out
    assert "[warn]" in out
    assert "3 pixels" in out


def test_colour_usage_report_shares():
    report = colour_usage_report([(255, 0, 0), (0, 0, 255)], [30, 10])
    assert report == [("#ff0000", 30, 0.75), ("#0000ff", 10, 0.25)]
