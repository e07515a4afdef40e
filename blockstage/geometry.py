"""Row-vector 4x4 matrix helpers and axis-aligned bounding boxes.

Matrices follow the row-vector convention: a point is transformed as
``[x, y, z, 1] @ M``, so ``multiply(S, multiply(R, T))`` scales first,
then rotates, then translates.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

Vec3 = tuple[float, float, float]
Matrix = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]


@dataclass(frozen=True)
class AABB:
    """Axis-aligned bounding box given by its minimum and maximum corners."""

    min: Vec3 = (0.0, 0.0, 0.0)
    max: Vec3 = (0.0, 0.0, 0.0)

    @property
    def extent(self) -> Vec3:
        """Edge lengths along x, y and z."""
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))  # type: ignore[return-value]


def _matrix(rows: Iterable[Iterable[float]]) -> Matrix:
    return tuple(tuple(float(v) for v in row) for row in rows)  # type: ignore[return-value]


def identity() -> Matrix:
    """Return the 4x4 identity matrix."""
    return _matrix(
        (1.0 if row == col else 0.0 for col in range(4)) for row in range(4)
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Return a matrix scaling by ``x``, ``y`` and ``z``."""
    return _matrix(
        (
            (x, 0, 0, 0),
            (0, y, 0, 0),
            (0, 0, z, 0),
            (0, 0, 0, 1),
        )
    )


def translation(x: float, y: float, z: float) -> Matrix:
    """Return a matrix translating by ``(x, y, z)``."""
    return _matrix(
        (
            (1, 0, 0, 0),
            (0, 1, 0, 0),
            (0, 0, 1, 0),
            (x, y, z, 1),
        )
    )


def _rotation_x(angle: float) -> Matrix:
    c, s = math.cos(angle), math.sin(angle)
    return _matrix(((1, 0, 0, 0), (0, c, s, 0), (0, -s, c, 0), (0, 0, 0, 1)))


def _rotation_y(angle: float) -> Matrix:
    c, s = math.cos(angle), math.sin(angle)
    return _matrix(((c, 0, -s, 0), (0, 1, 0, 0), (s, 0, c, 0), (0, 0, 0, 1)))


def _rotation_z(angle: float) -> Matrix:
    c, s = math.cos(angle), math.sin(angle)
    return _matrix(((c, s, 0, 0), (-s, c, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1)))


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Return the matrix product ``a @ b``."""
    columns = list(zip(*b))
    return _matrix(
        (sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )


def rotation_roll_pitch_yaw(pitch: float, yaw: float, roll: float) -> Matrix:
    """Rotate by roll (about z), then pitch (about x), then yaw (about y); radians."""
    return multiply(multiply(_rotation_z(roll), _rotation_x(pitch)), _rotation_y(yaw))


def world_matrix(position: Vec3, size: Vec3, rotation: Vec3) -> Matrix:
    """Build the scale * rotation * translation world matrix of a block."""
    s = scaling(*size)
    r = rotation_roll_pitch_yaw(*rotation)
    t = translation(*position)
    return multiply(multiply(s, r), t)


def transform_coord(point: Vec3, matrix: Matrix) -> Vec3:
    """Transform a point by ``matrix`` and project it back by its w component."""
    vec = (*point, 1.0)
    x, y, z, w = (sum(p * m for p, m in zip(vec, col)) for col in zip(*matrix))
    if w == 0.0:
        raise ZeroDivisionError("transformed point has w == 0")
    return (x / w, y / w, z / w)


def bounds_of(points: Iterable[Vec3], matrix: Matrix) -> AABB:
    """Return the box enclosing every point after transformation by ``matrix``."""
    transformed = [transform_coord(p, matrix) for p in points]
    if not transformed:
        raise ValueError("bounds_of needs at least one point")
    xs, ys, zs = zip(*transformed)
    return AABB(min=(min(xs), min(ys), min(zs)), max=(max(xs), max(ys), max(zs)))