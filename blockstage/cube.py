"""Cube kind templates, the kind registry and bakeable cube blocks."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import IntEnum

from blockstage.geometry import AABB, Matrix, Vec3, bounds_of, world_matrix

Vec2 = tuple[float, float]
Vec4 = tuple[float, float, float, float]

FACE_COUNT = 6
VERTS_PER_FACE = 4
VERTEX_COUNT = FACE_COUNT * VERTS_PER_FACE

KIND_LEGACY = 0
KIND_FULL_UV = 1
KIND_SOLID_RED = 2
KIND_RENGA = 10
KIND_REGO = 11

HALF = 0.5
WHITE: Vec4 = (1.0, 1.0, 1.0, 1.0)


class CubeFace(IntEnum):
    FRONT = 0
    BACK = 1
    LEFT = 2
    RIGHT = 3
    TOP = 4
    BOTTOM = 5


@dataclass
class CubeFaceDesc:
    """Four corner positions, a normal, per-corner colours and UVs of one face."""

    pos: list[Vec3] = field(default_factory=lambda: [(0.0, 0.0, 0.0)] * VERTS_PER_FACE)
    normal: Vec3 = (0.0, 0.0, 0.0)
    color: list[Vec4] = field(default_factory=lambda: [(0.0, 0.0, 0.0, 0.0)] * VERTS_PER_FACE)
    uv: list[Vec2] = field(default_factory=lambda: [(0.0, 0.0)] * VERTS_PER_FACE)


@dataclass
class CubeTemplate:
    """Appearance of a cube kind: one description per face."""

    faces: list[CubeFaceDesc] = field(
        default_factory=lambda: [CubeFaceDesc() for _ in range(FACE_COUNT)]
    )

    def set_face_uv(self, face: CubeFace, uv_min: Vec2, uv_max: Vec2) -> None:
        """Map the rectangle ``uv_min``..``uv_max`` onto one face."""
        (u0, v0), (u1, v1) = uv_min, uv_max
        self.faces[CubeFace(face)].uv = [(u0, v0), (u1, v0), (u1, v1), (u0, v1)]

    def set_all_face_uv(self, uv_min: Vec2, uv_max: Vec2) -> None:
        for face in CubeFace:
            self.set_face_uv(face, uv_min, uv_max)

    def set_face_color(self, face: CubeFace, color: Vec4) -> None:
        """Give every corner of one face the same colour."""
        self.faces[CubeFace(face)].color = [tuple(color)] * VERTS_PER_FACE  # type: ignore[list-item]

    def set_all_face_color(self, color: Vec4) -> None:
        for face in CubeFace:
            self.set_face_color(face, color)

    def local_positions(self) -> list[Vec3]:
        """All vertex positions in face order, four per face."""
        return [p for face in self.faces for p in face.pos]


def unit_template() -> CubeTemplate:
    """A unit cube centred on the origin, white, with all UVs at zero."""
    h = HALF
    layout = {
        CubeFace.FRONT: ([(-h, h, -h), (h, h, -h), (h, -h, -h), (-h, -h, -h)], (0.0, 0.0, -1.0)),
        CubeFace.BACK: ([(h, h, h), (-h, h, h), (-h, -h, h), (h, -h, h)], (0.0, 0.0, 1.0)),
        CubeFace.LEFT: ([(-h, h, h), (-h, h, -h), (-h, -h, -h), (-h, -h, h)], (-1.0, 0.0, 0.0)),
        CubeFace.RIGHT: ([(h, h, -h), (h, h, h), (h, -h, h), (h, -h, -h)], (1.0, 0.0, 0.0)),
        CubeFace.TOP: ([(-h, h, h), (h, h, h), (h, h, -h), (-h, h, -h)], (0.0, 1.0, 0.0)),
        CubeFace.BOTTOM: ([(-h, -h, -h), (h, -h, -h), (h, -h, h), (-h, -h, h)], (0.0, -1.0, 0.0)),
    }
    return CubeTemplate(
        faces=[
            CubeFaceDesc(
                pos=list(layout[face][0]),
                normal=layout[face][1],
                color=[WHITE] * VERTS_PER_FACE,
                uv=[(0.0, 0.0)] * VERTS_PER_FACE,
            )
            for face in CubeFace
        ]
    )


def legacy_template() -> CubeTemplate:
    """Unit cube with the full 0..1 texture on every face."""
    t = unit_template()
    for face in t.faces:
        face.uv = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    return t


def full_uv_template() -> CubeTemplate:
    t = unit_template()
    t.set_all_face_uv((0.0, 0.0), (1.0, 1.0))
    t.set_all_face_color(WHITE)
    return t


def solid_color_template(color: Vec4) -> CubeTemplate:
    t = unit_template()
    t.set_all_face_uv((0.0, 0.0), (1.0, 1.0))
    t.set_all_face_color(color)
    return t


def renga_template() -> CubeTemplate:
    """Brick look: slightly dark sides, brighter top, darker bottom."""
    t = unit_template()
    t.set_all_face_uv((0.0, 0.0), (1.0, 1.0))
    t.set_all_face_color((0.95, 0.95, 0.95, 1.0))
    t.set_face_color(CubeFace.TOP, (1.05, 1.05, 1.05, 1.0))
    t.set_face_color(CubeFace.BOTTOM, (0.80, 0.80, 0.80, 1.0))
    return t


def rego_template() -> CubeTemplate:
    """Toy-brick look: warm and bright, darker bottom."""
    t = unit_template()
    t.set_all_face_uv((0.0, 0.0), (1.0, 1.0))
    t.set_all_face_color((1.10, 1.05, 0.95, 1.0))
    t.set_face_color(CubeFace.BOTTOM, (0.85, 0.85, 0.85, 1.0))
    return t


def cube_aabb(position: Vec3) -> AABB:
    """Box of a unit cube centred on ``position``."""
    x, y, z = position
    return AABB(min=(x - HALF, y - HALF, z - HALF), max=(x + HALF, y + HALF, z + HALF))


class KindRegistry:
    """Cube kinds by number; templates are stored and handed out as copies."""

    def __init__(self) -> None:
        self._kinds: dict[int, CubeTemplate] = {}

    @classmethod
    def with_presets(cls) -> KindRegistry:
        """A registry holding the built-in kinds."""
        registry = cls()
        registry.register(KIND_LEGACY, legacy_template())
        registry.register(KIND_FULL_UV, full_uv_template())
        registry.register(KIND_SOLID_RED, solid_color_template((1.0, 0.0, 0.0, 1.0)))
        registry.register(KIND_RENGA, renga_template())
        registry.register(KIND_REGO, rego_template())
        return registry

    def register(self, kind: int, template: CubeTemplate) -> None:
        """Add or replace a kind."""
        self._kinds[kind] = copy.deepcopy(template)

    def update(self, kind: int, template: CubeTemplate) -> None:
        """Replace a kind's template, registering it if it is new."""
        self.register(kind, template)

    def get(self, kind: int) -> CubeTemplate | None:
        """A copy of the kind's template, or None if it is not registered."""
        template = self._kinds.get(kind)
        return copy.deepcopy(template) if template is not None else None

    def resolve(self, kind: int) -> CubeTemplate | None:
        """The kind's template, falling back to kind 0; None if neither exists."""
        template = self._kinds.get(kind)
        if template is None:
            template = self._kinds.get(KIND_LEGACY)
        return template

    def kinds(self) -> list[int]:
        """Registered kind numbers in ascending order."""
        return sorted(self._kinds)

    def __contains__(self, kind: object) -> bool:
        return kind in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)


def _zero_matrix() -> Matrix:
    return ((0.0,) * 4,) * 4  # type: ignore[return-value]


@dataclass
class CubeBlock:
    """A placed cube; ``world`` and ``aabb`` are filled in by :meth:`bake`."""

    kind: int = 0
    tex_id: int = -1
    position: Vec3 = (0.0, 0.0, 0.0)
    size: Vec3 = (1.0, 1.0, 1.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    world: Matrix = field(default_factory=_zero_matrix)
    aabb: AABB = field(default_factory=AABB)

    def bake(self, registry: KindRegistry) -> None:
        """Recompute the world matrix and the bounding box of the block."""
        self.world = world_matrix(self.position, self.size, self.rotation)
        template = registry.resolve(self.kind)
        if template is None:
            self.aabb = cube_aabb(self.position)
            return
        self.aabb = bounds_of(template.local_positions(), self.world)