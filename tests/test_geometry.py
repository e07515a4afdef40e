import math

import pytest

from blockstage.geometry import (
    AABB,
    bounds_of,
    identity,
    multiply,
    rotation_roll_pitch_yaw,
    scaling,
    transform_coord,
    translation,
    world_matrix,
)


def approx_vec(v):
    return pytest.approx(v, abs=1e-9)


def test_identity_leaves_point_unchanged():
    assert transform_coord((1.5, -2.0, 3.25), identity()) == approx_vec((1.5, -2.0, 3.25))


def test_translation_moves_point():
    m = translation(4.0, 5.0, -6.0)
    assert transform_coord((1.0, 1.0, 1.0), m) == approx_vec((5.0, 6.0, -5.0))


def test_scaling_scales_point():
    m = scaling(2.0, 3.0, 4.0)
    assert transform_coord((1.0, 1.0, 1.0), m) == approx_vec((2.0, 3.0, 4.0))


def test_multiply_by_identity_is_neutral():
    m = translation(1.0, 2.0, 3.0)
    assert multiply(m, identity()) == pytest.approx(m)
    assert multiply(identity(), m) == pytest.approx(m)


def test_yaw_quarter_turn_follows_row_vector_convention():
    m = rotation_roll_pitch_yaw(0.0, math.pi / 2, 0.0)
    assert transform_coord((1.0, 0.0, 0.0), m) == approx_vec((0.0, 0.0, -1.0))


@pytest.mark.parametrize("angles", [(0.3, 0.0, 0.0), (0.0, 1.1, 0.0), (0.2, -0.7, 1.4)])
def test_rotation_preserves_length(angles):
    m = rotation_roll_pitch_yaw(*angles)
    p = (1.0, 2.0, -3.0)
    q = transform_coord(p, m)
    assert math.hypot(*q) == pytest.approx(math.hypot(*p))


def test_zero_rotation_is_identity():
    assert rotation_roll_pitch_yaw(0.0, 0.0, 0.0) == pytest.approx(identity())


def test_world_matrix_applies_scale_rotate_translate_in_order():
    w = world_matrix((10.0, 0.0, 0.0), (2.0, 1.0, 1.0), (0.0, 0.0, 0.0))
    assert transform_coord((0.5, 0.0, 0.0), w) == approx_vec((11.0, 0.0, 0.0))


def test_bounds_of_unit_corners_identity():
    corners = [(x, y, z) for x in (-0.5, 0.5) for y in (-0.5, 0.5) for z in (-0.5, 0.5)]
    box = bounds_of(corners, identity())
    assert box == AABB(min=(-0.5, -0.5, -0.5), max=(0.5, 0.5, 0.5))
    assert box.extent == (1.0, 1.0, 1.0)


def test_bounds_of_swaps_extents_under_quarter_yaw():
    corners = [(x, y, z) for x in (-0.5, 0.5) for y in (-0.5, 0.5) for z in (-0.5, 0.5)]
    w = world_matrix((0.0, 0.0, 0.0), (6.0, 1.0, 2.0), (0.0, math.pi / 2, 0.0))
    box = bounds_of(corners, w)
    assert box.extent == approx_vec((2.0, 1.0, 6.0))


def test_bounds_of_empty_raises():
    with pytest.raises(ValueError):
        bounds_of([], identity())