"""
Tests for per-class statistics and eigen helpers.
"""

import numpy as np
import pytest

from dominant_colors.errors import DegenerateClass
from dominant_colors.stats import class_moments, estimate, principal_axis, top_eigenvalue
from dominant_colors.tree import ColorClassNode


def test_moments_black_white_pair():
    pixels = np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8)
    classes = np.array([1, 1], dtype=np.uint16)
    mean, cov, count = class_moments(pixels, classes, 1)
    assert count == 2
    assert np.allclose(mean, [0.5, 0.5, 0.5])
    assert np.allclose(cov, np.full((3, 3), 0.25))


def test_moments_ignore_other_classes():
    pixels = np.array([[[0, 0, 0], [51, 102, 204]]], dtype=np.uint8)
    classes = np.array([[1, 2]], dtype=np.uint16)
    mean, cov, count = class_moments(pixels, classes, 2)
    assert count == 1
    assert np.allclose(mean, [0.2, 0.4, 0.8])
    assert np.allclose(cov, 0.0, atol=1e-12)


def test_covariance_is_symmetric(noisy):
    classes = np.ones(noisy.shape[:2], dtype=np.uint16)
    _, cov, _ = class_moments(noisy, classes, 1)
    assert np.array_equal(cov, cov.T)
    assert np.all(np.linalg.eigvalsh(cov) > -1e-12)


def test_empty_class_raises():
    pixels = np.zeros((2, 2, 3), dtype=np.uint8)
    classes = np.ones((2, 2), dtype=np.uint16)
    with pytest.raises(DegenerateClass) as exc_info:
        class_moments(pixels, classes, 7)
    assert exc_info.value.class_id == 7


def test_estimate_is_repeatable(noisy):
    classes = np.ones(noisy.shape[:2], dtype=np.uint16)
    classes[:, ::2] = 2
    node = estimate(noisy, classes, ColorClassNode(2))
    first_mean, first_cov = node.mean.copy(), node.covariance.copy()
    estimate(noisy, classes, node)
    assert np.array_equal(first_mean, node.mean)
    assert np.array_equal(first_cov, node.covariance)
    assert node.pixel_count == 32 * 12


def test_principal_axis_of_diagonal():
    value, axis = principal_axis(np.diag([1.0, 4.0, 2.0]))
    assert value == pytest.approx(4.0)
    assert np.allclose(axis, [0.0, 1.0, 0.0])


def test_principal_axis_sign_is_normalised():
    cov = np.array([[2.0, -1.0, 0.0], [-1.0, 2.0, 0.0], [0.0, 0.0, 0.5]])
    value, axis = principal_axis(cov)
    assert value == pytest.approx(3.0)
    assert np.isclose(np.linalg.norm(axis), 1.0)
    assert axis[int(np.argmax(np.abs(axis)))] > 0


def test_principal_axis_of_zero_matrix():
    value, axis = principal_axis(np.zeros((3, 3)))
    assert value == 0.0
    assert np.isclose(np.linalg.norm(axis), 1.0)


def test_top_eigenvalue_matches_axis():
    cov = np.array([[0.3, 0.1, 0.0], [0.1, 0.2, 0.05], [0.0, 0.05, 0.1]])
    assert top_eigenvalue(cov) == pytest.approx(principal_axis(cov)[0])
