import math

import numpy as np
import pytest

from boids import BoundedVolume, InvalidConfiguration


def test_half_extent_uses_padding_fraction(volume):
    assert volume.size == 80.0
    assert volume.padding == 0.05
    assert volume.half_extent == pytest.approx(36.0)


def test_corners_are_symmetric(volume):
    np.testing.assert_allclose(volume.min_corner(), [-36.0, -36.0, -36.0])
    np.testing.assert_allclose(volume.max_corner(), [36.0, 36.0, 36.0])


def test_custom_padding():
    vol = BoundedVolume(10.0, padding=0.0)
    assert vol.half_extent == pytest.approx(5.0)


@pytest.mark.parametrize("point, expected", [
    ((0.0, 0.0, 0.0), True),
    ((36.0, -36.0, 36.0), True),       # faces are inclusive
    ((36.0001, 0.0, 0.0), False),
    ((0.0, -40.0, 0.0), False),
    ((0.0, 0.0, 100.0), False),
])
def test_contains(volume, point, expected):
    assert volume.contains(point) is expected


def test_clamp_is_per_axis_and_pure(volume):
    point = np.array([50.0, -3.0, -99.0])
    clamped = volume.clamp(point)
    np.testing.assert_allclose(clamped, [36.0, -3.0, -36.0])
    np.testing.assert_allclose(point, [50.0, -3.0, -99.0])
    assert volume.contains(clamped)


def test_clamp_leaves_inside_points_alone(volume):
    np.testing.assert_allclose(volume.clamp((1.0, 2.0, 3.0)), [1.0, 2.0, 3.0])


@pytest.mark.parametrize("size", [0.0, -5.0, math.nan, math.inf])
def test_invalid_size_rejected(size):
    with pytest.raises(InvalidConfiguration):
        BoundedVolume(size)


@pytest.mark.parametrize("padding", [-0.1, 0.5, 0.9])
def test_padding_must_leave_positive_extent(padding):
    with pytest.raises(InvalidConfiguration):
        BoundedVolume(10.0, padding=padding)


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        BoundedVolume(0)


def test_random_points_inside(volume):
    rng = np.random.default_rng(3)
    for _ in range(200):
        assert volume.contains(volume.random_point(rng))


def test_from_config_defaults_padding():
    vol = BoundedVolume.from_config({"size": 70.0})
    assert vol.half_extent == pytest.approx(35.0 - 3.5)
