"""Editable stage blocks with runtime offsets, texture slots and baking."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum

from blockstage.geometry import AABB, Matrix, Vec3, bounds_of, world_matrix
from blockstage.stage_table import StageRow

DEFAULT_JSON_PATH = "stage01.json"
MAX_PATH_LENGTH = 259


class TexSlot(IntEnum):
    BRICK = 0
    RED = 1
    WHITE = 2
    STONE0 = 10
    STONE1 = 11
    STONE2 = 12
    STONE3 = 13
    STONE4 = 14
    STONE5 = 15
    STONE6 = 16
    STONE7 = 17
    STONE8 = 18
    STONE9 = 19
    WOOD0 = 20
    WOOD1 = 21
    WOOD2 = 22
    WOOD3 = 23
    V0 = 30
    V1 = 31
    V2 = 32
    V3 = 33
    V4 = 34
    V5 = 35
    V6 = 36
    V7 = 37
    CHECK0 = 40
    CHECK1 = 41


TEX_SLOT_COUNT = max(TexSlot) + 1

_SLOT_NAMES: dict[int, str] = {slot.value: slot.name.capitalize() for slot in TexSlot}

_CORNERS: tuple[Vec3, ...] = tuple(
    (x, y, z) for z in (-0.5, 0.5) for y in (-0.5, 0.5) for x in (-0.5, 0.5)
)


def tex_slot_count() -> int:
    """Number of texture slots, used or not."""
    return TEX_SLOT_COUNT


def tex_slot_name(slot: int) -> str:
    """Display name of a slot: "Invalid" outside the range, "Unused" for gaps."""
    if not 0 <= slot < TEX_SLOT_COUNT:
        return "Invalid"
    return _SLOT_NAMES.get(slot, "Unused")


def _zero_matrix() -> Matrix:
    return ((0.0,) * 4,) * 4  # type: ignore[return-value]


def _sum3(*vectors: Vec3) -> Vec3:
    return tuple(sum(parts) for parts in zip(*vectors))  # type: ignore[return-value]


@dataclass
class StageBlock:
    """An editable block; ``world`` and ``aabb`` are results of baking."""

    kind: int = 0
    tex_slot: int = 0
    tex_id: int = -1
    position: Vec3 = (0.0, 0.0, 0.0)
    size: Vec3 = (1.0, 1.0, 1.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    position_offset: Vec3 = (0.0, 0.0, 0.0)
    size_offset: Vec3 = (0.0, 0.0, 0.0)
    rotation_offset: Vec3 = (0.0, 0.0, 0.0)
    world: Matrix = field(default_factory=_zero_matrix)
    aabb: AABB = field(default_factory=AABB)

    @classmethod
    def from_row(cls, row: StageRow) -> StageBlock:
        return cls(
            kind=row.kind,
            tex_slot=row.tex_slot,
            position=row.position,
            size=row.size,
            rotation=row.rotation,
        )


@dataclass
class RuntimeOffset:
    """Movement accumulated at run time, kept apart from the edited values."""

    position: Vec3 = (0.0, 0.0, 0.0)
    size: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)


def _bake(block: StageBlock, offset: RuntimeOffset) -> None:
    size = _sum3(block.size, block.size_offset, offset.size)
    rotation = _sum3(block.rotation, block.rotation_offset, offset.rotation)
    position = _sum3(block.position, block.position_offset, offset.position)
    block.world = world_matrix(position, size, rotation)
    block.aabb = bounds_of(_CORNERS, block.world)


class Stage:
    """The blocks of the current stage and the texture id of each slot."""

    def __init__(self, json_path: str = DEFAULT_JSON_PATH) -> None:
        self._blocks: list[StageBlock] = []
        self._offsets: list[RuntimeOffset] = []
        self._textures: list[int] = [-1] * TEX_SLOT_COUNT
        self._json_path = DEFAULT_JSON_PATH
        self.json_path = json_path

    @property
    def json_path(self) -> str:
        """Stage file used for saving and reloading."""
        return self._json_path

    @json_path.setter
    def json_path(self, path: str) -> None:
        if not path:
            raise ValueError("stage file path must not be empty")
        self._json_path = path[:MAX_PATH_LENGTH]

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._blocks):
            raise IndexError(f"block index {index} out of range")

    def set_texture(self, slot: int, tex_id: int) -> None:
        """Bind a loaded texture id to a slot."""
        if not 0 <= slot < TEX_SLOT_COUNT:
            raise IndexError(f"texture slot {slot} out of range")
        self._textures[slot] = tex_id

    def apply_texture(self, block: StageBlock) -> None:
        """Resolve the block's slot to a texture id; bad slots get the brick."""
        if 0 <= block.tex_slot < TEX_SLOT_COUNT:
            block.tex_id = self._textures[block.tex_slot]
        else:
            block.tex_id = self._textures[TexSlot.BRICK]

    def add(self, block: StageBlock, bake: bool = True) -> int:
        """Append a copy of ``block`` with a fresh offset; return its index."""
        stored = dataclasses.replace(block)
        offset = RuntimeOffset()
        if bake:
            self.apply_texture(stored)
            _bake(stored, offset)
        self._blocks.append(stored)
        self._offsets.append(offset)
        return len(self._blocks) - 1

    def remove(self, index: int) -> None:
        self._check(index)
        del self._blocks[index]
        del self._offsets[index]

    def clear(self) -> None:
        self._blocks.clear()
        self._offsets.clear()

    def get(self, index: int) -> StageBlock:
        """The stored block; edits take effect after :meth:`rebuild`."""
        self._check(index)
        return self._blocks[index]

    def offset(self, index: int) -> RuntimeOffset:
        """The runtime offset of a block."""
        self._check(index)
        return self._offsets[index]

    def rebuild(self, index: int) -> None:
        """Re-resolve the texture and re-bake one block."""
        self._check(index)
        block = self._blocks[index]
        self.apply_texture(block)
        _bake(block, self._offsets[index])

    def rebuild_all(self) -> None:
        for block, offset in zip(self._blocks, self._offsets):
            _bake(block, offset)
            self.apply_texture(block)

    def add_transform(
        self,
        index: int,
        position_delta: Vec3,
        size_delta: Vec3,
        rotation_delta: Vec3,
    ) -> None:
        """Accumulate a runtime movement on a block and re-bake it."""
        self._check(index)
        offset = self._offsets[index]
        offset.position = _sum3(offset.position, position_delta)
        offset.size = _sum3(offset.size, size_delta)
        offset.rotation = _sum3(offset.rotation, rotation_delta)
        self.rebuild(index)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[StageBlock]:
        return iter(self._blocks)