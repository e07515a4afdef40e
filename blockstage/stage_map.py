"""A list of baked cube blocks that make up a simple map."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterator

from blockstage.cube import (
    KIND_FULL_UV,
    KIND_SOLID_RED,
    CubeBlock,
    KindRegistry,
    unit_template,
)
from blockstage.geometry import Vec3


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


class StageMap:
    """Cube blocks baked against a kind registry."""

    def __init__(self, registry: KindRegistry | None = None) -> None:
        self.registry = registry if registry is not None else KindRegistry.with_presets()
        self._blocks: list[CubeBlock] = []

    def populate(self, brick_tex: int, default_tex: int) -> None:
        """Register the map's kinds and lay out the default blocks."""
        self._blocks.clear()

        full_uv = unit_template()
        full_uv.set_all_face_uv((0.0, 0.0), (1.0, 1.0))
        full_uv.set_all_face_color((1.0, 1.0, 1.0, 1.0))
        self.registry.register(KIND_FULL_UV, full_uv)

        solid_red = unit_template()
        solid_red.set_all_face_uv((0.0, 0.0), (1.0, 1.0))
        solid_red.set_all_face_color((1.0, 0.0, 0.0, 1.0))
        self.registry.register(KIND_SOLID_RED, solid_red)

        layout = [
            (KIND_FULL_UV, brick_tex, (0.0, -0.5, 0.0), (40.0, 1.0, 40.0), (0.0, 0.0, 0.0)),
            (KIND_FULL_UV, brick_tex, (0.0, 1.0, 0.0), (4.0, 1.0, 4.0), (0.0, math.pi / 4, 0.0)),
            (KIND_FULL_UV, default_tex, (6.0, 2.0, 0.0), (6.0, 1.0, 2.0), (0.0, math.pi / 2, 0.0)),
            (KIND_SOLID_RED, default_tex, (-6.0, 1.0, 0.0), (2.0, 3.0, 2.0), (0.0, 0.0, 0.0)),
        ]
        for kind, tex_id, position, size, rotation in layout:
            self.add(
                CubeBlock(kind=kind, tex_id=tex_id, position=position, size=size, rotation=rotation)
            )

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._blocks):
            raise IndexError(f"block index {index} out of range")

    def add(self, block: CubeBlock, bake: bool = True) -> int:
        """Append a copy of ``block`` and return its index."""
        stored = dataclasses.replace(block)
        if bake:
            stored.bake(self.registry)
        self._blocks.append(stored)
        return len(self._blocks) - 1

    def rebuild(self, index: int) -> None:
        """Re-bake one block after it was edited."""
        self._check(index)
        self._blocks[index].bake(self.registry)

    def add_transform(
        self,
        index: int,
        position_delta: Vec3,
        size_delta: Vec3,
        rotation_delta: Vec3,
    ) -> None:
        """Shift a block's position, size and rotation, then re-bake it."""
        self._check(index)
        block = self._blocks[index]
        block.position = _add(block.position, position_delta)
        block.size = _add(block.size, size_delta)
        block.rotation = _add(block.rotation, rotation_delta)
        block.bake(self.registry)

    def clear(self) -> None:
        self._blocks.clear()

    def __len__(self) -> int:
        return len(self._blocks)

    def __getitem__(self, index: int) -> CubeBlock:
        self._check(index)
        return self._blocks[index]

    def __iter__(self) -> Iterator[CubeBlock]:
        return iter(self._blocks)