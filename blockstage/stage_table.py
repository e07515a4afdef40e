"""The built-in block layout of the first stage."""

from __future__ import annotations

from dataclasses import dataclass

from blockstage.geometry import Vec3


@dataclass(frozen=True)
class StageRow:
    """One placed block: kind, texture slot, centre, size and rotation (radians)."""

    kind: int
    tex_slot: int
    px: float
    py: float
    pz: float
    sx: float
    sy: float
    sz: float
    rx: float
    ry: float
    rz: float

    @property
    def position(self) -> Vec3:
        return (self.px, self.py, self.pz)

    @property
    def size(self) -> Vec3:
        return (self.sx, self.sy, self.sz)

    @property
    def rotation(self) -> Vec3:
        return (self.rx, self.ry, self.rz)


_S1 = 0.5
_S2 = 1.0
_S3X = 3.0
_S3Y = 0.8
_S3Z = 2.0
_S4 = 1.0


def _unit_row(px: float, pz: float) -> StageRow:
    return StageRow(0, 0, px, 0.5, pz, _S4, _S4, _S4, 0.0, 0.0, 0.0)


_STAGE01: tuple[StageRow, ...] = (
    StageRow(0, 0, 0.0, 0.5, 0.0, _S1, _S1, _S1, 0.0, 0.0, 0.0),
    StageRow(0, 0, 1.0, 0.5, 0.0, _S2, _S2, _S2, 0.0, 0.0, 0.0),
    StageRow(0, 0, 1.0, 2.5, 0.0, _S2, _S2, _S2, 0.0, 0.0, 0.0),
    StageRow(0, 0, -3.0, _S3Y * 0.5, 0.0, _S3X, _S3Y, _S3Z, 0.0, 0.0, 0.0),
    *(_unit_row(6.0, float(z)) for z in range(9)),
    *(_unit_row(7.0, float(z)) for z in (0, 1, 2, 3, 4, 7)),
)


def stage01_rows() -> tuple[StageRow, ...]:
    """The fallback layout used when no stage file exists."""
    return _STAGE01