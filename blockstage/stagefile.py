"""Reading and writing stage files: cube kinds and placed blocks as JSON text.

The reader is deliberately lenient. It locates keys and brackets by scanning
the text rather than parsing it as strict JSON, so hand-edited files with
missing fields still load, with defaults for whatever is absent.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from enum import Enum

from blockstage.cube import CubeFace, KindRegistry, unit_template
from blockstage.stage import DEFAULT_JSON_PATH, Stage, StageBlock
from blockstage.stage_table import stage01_rows

FILE_VERSION = 2

_C_SPACE = "\t\n\v\f\r "
_NUMBER = re.compile(
    r"[\t\n\v\f\r ]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INTEGER = re.compile(r"[\t\n\v\f\r ]*([+-]?\d+)")
_SEPARATORS = re.compile(r"[,\t\n\v\f\r ]*")


class StageFileError(ValueError):
    """A stage file is malformed."""


class SwitchResult(Enum):
    LOADED = "loaded"
    CREATED_EMPTY = "created_empty"
    FAILED = "failed"


def _fmt(value: float) -> str:
    return f"{value:.3f}"


def _join(values) -> str:
    return ",".join(_fmt(v) for v in values)


def _kinds_lines(registry: KindRegistry) -> list[str]:
    lines = ['  "kinds": [']
    entries = []
    for kind in registry.kinds():
        template = registry.get(kind)
        if template is None:
            continue
        face_lines = []
        for face in template.faces:
            us = [uv[0] for uv in face.uv]
            vs = [uv[1] for uv in face.uv]
            face_lines.append(
                "      {"
                f'"uvMin":[{_join((min(us), min(vs)))}],'
                f'"uvMax":[{_join((max(us), max(vs)))}],'
                f'"color":[{_join(face.color[0])}],'
                f'"normal":[{_join(face.normal)}]'
                "}"
            )
        entries.append(
            f'    {{"kind":{kind},"faces":[\n' + ",\n".join(face_lines) + "\n    ]}"
        )
    lines.extend(",\n".join(entries).splitlines() if entries else [])
    lines.append("  ],")
    return lines


def dumps(stage: Stage, registry: KindRegistry) -> str:
    """Serialise the kinds of ``registry`` and the blocks of ``stage``."""
    lines = ["{", f'  "version": {FILE_VERSION},']
    lines.extend(_kinds_lines(registry))
    lines.append('  "blocks": [')
    block_lines = [
        "    {"
        f'"kind":{b.kind},'
        f'"texSlot":{b.tex_slot},'
        f'"position":[{_join(b.position)}],'
        f'"size":[{_join(b.size)}],'
        f'"rotation":[{_join(b.rotation)}]'
        "}"
        for b in stage
    ]
    if block_lines:
        lines.append(",\n".join(block_lines))
    lines.append("  ]")
    lines.append("}")
    return "\n".join(lines) + "\n"


def save_json(stage: Stage, registry: KindRegistry, path: str | os.PathLike[str]) -> None:
    """Write the stage to ``path`` and make it the stage's current file."""
    name = os.fspath(path)
    if not name:
        raise ValueError("stage file path must not be empty")
    stage.json_path = name
    with open(name, "wb") as fh:
        fh.write(dumps(stage, registry).encode("ascii"))


def _find_matching(text: str, open_pos: int, open_ch: str, close_ch: str) -> int:
    depth = 0
    for index in range(open_pos, len(text)):
        ch = text[index]
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return index
    return -1


def _objects(text: str, start: int, end: int) -> Iterator[str]:
    """Yield each ``{...}`` object that opens between ``start`` and ``end``."""
    cur = start
    while True:
        ob = text.find("{", cur)
        if ob == -1 or ob > end:
            return
        cb = _find_matching(text, ob, "{", "}")
        if cb == -1 or cb > end:
            raise StageFileError("unterminated object in stage file")
        yield text[ob : cb + 1]
        cur = cb + 1


def _array_span(text: str, key_pos: int) -> tuple[int, int]:
    lb = text.find("[", key_pos)
    if lb == -1:
        raise StageFileError("expected '[' in stage file")
    rb = _find_matching(text, lb, "[", "]")
    if rb == -1:
        raise StageFileError("unterminated array in stage file")
    return lb, rb


def _extract_int(text: str, key: str) -> int | None:
    pos = text.find(f'"{key}"')
    if pos == -1:
        return None
    pos = text.find(":", pos)
    if pos == -1:
        return None
    match = _INTEGER.match(text, pos + 1)
    return int(match.group(1)) if match else None


def _extract_floats(text: str, key: str, count: int) -> tuple[float, ...] | None:
    pos = text.find(f'"{key}"')
    if pos == -1:
        return None
    pos = text.find("[", pos)
    if pos == -1:
        return None
    pos += 1
    values: list[float] = []
    for index in range(count):
        match = _NUMBER.match(text, pos)
        if not match:
            return None
        values.append(float(match.group(1)))
        pos = match.end()
        if index < count - 1:
            pos = _SEPARATORS.match(text, pos).end()
    return tuple(values)


def _parse_kinds(text: str, registry: KindRegistry) -> None:
    key_pos = text.find('"kinds"')
    if key_pos == -1:
        return
    lb, rb = _array_span(text, key_pos)
    for kind_obj in _objects(text, lb + 1, rb):
        kind = _extract_int(kind_obj, "kind")
        if kind is None:
            continue
        template = unit_template()
        faces_pos = kind_obj.find('"faces"')
        if faces_pos != -1:
            flb, frb = _array_span(kind_obj, faces_pos)
            for face, face_obj in zip(CubeFace, _objects(kind_obj, flb + 1, frb)):
                uv_min = _extract_floats(face_obj, "uvMin", 2)
                uv_max = _extract_floats(face_obj, "uvMax", 2)
                color = _extract_floats(face_obj, "color", 4)
                normal = _extract_floats(face_obj, "normal", 3)
                if uv_min is not None and uv_max is not None:
                    template.set_face_uv(face, uv_min, uv_max)  # type: ignore[arg-type]
                if color is not None:
                    template.set_face_color(face, color)  # type: ignore[arg-type]
                if normal is not None:
                    template.faces[face].normal = normal  # type: ignore[assignment]
        registry.update(kind, template)


def _parse_blocks(text: str) -> list[StageBlock]:
    key_pos = text.find('"blocks"')
    if key_pos == -1:
        raise StageFileError("stage file has no blocks")
    lb, rb = _array_span(text, key_pos)
    blocks = []
    for obj in _objects(text, lb + 1, rb):
        block = StageBlock()
        kind = _extract_int(obj, "kind")
        if kind is not None:
            block.kind = kind
        slot = _extract_int(obj, "texSlot")
        if slot is not None:
            block.tex_slot = slot
        for key, attr in (("position", "position"), ("size", "size"), ("rotation", "rotation")):
            vec = _extract_floats(obj, key, 3)
            if vec is not None:
                setattr(block, attr, vec)
        blocks.append(block)
    return blocks


def load_json(stage: Stage, registry: KindRegistry, path: str | os.PathLike[str]) -> int:
    """Load kinds into ``registry`` and replace the stage's blocks.

    Returns the number of blocks loaded. On a malformed file the stage's
    blocks are left as they were; kinds read before the error stay registered.
    """
    name = os.fspath(path)
    if not name:
        raise ValueError("stage file path must not be empty")
    with open(name, "rb") as fh:
        text = fh.read().decode("latin-1")
    _parse_kinds(text, registry)
    blocks = _parse_blocks(text)
    stage.clear()
    for block in blocks:
        stage.add(block, bake=True)
    stage.json_path = name
    return len(blocks)


def switch_stage(
    stage: Stage,
    registry: KindRegistry,
    path: str | os.PathLike[str],
    create_empty_if_missing: bool = True,
) -> SwitchResult:
    """Load another stage file, or start an empty stage under that name."""
    name = os.fspath(path)
    if not name:
        return SwitchResult.FAILED
    try:
        load_json(stage, registry, name)
    except (OSError, StageFileError):
        if create_empty_if_missing:
            stage.clear()
            stage.json_path = name
            return SwitchResult.CREATED_EMPTY
        return SwitchResult.FAILED
    stage.json_path = name
    return SwitchResult.LOADED


def initialize_stage(
    stage: Stage,
    registry: KindRegistry,
    path: str | os.PathLike[str] | None = None,
) -> bool:
    """Register the preset kinds and fill the stage from its file.

    When the default stage file cannot be loaded the built-in layout is used.
    Returns True if the blocks came from the file.
    """
    if path is not None and os.fspath(path):
        stage.json_path = os.fspath(path)
    presets = KindRegistry.with_presets()
    for kind in presets.kinds():
        template = presets.get(kind)
        if template is not None:
            registry.register(kind, template)
    stage.clear()
    try:
        load_json(stage, registry, stage.json_path)
        return True
    except (OSError, StageFileError):
        pass
    if stage.json_path != DEFAULT_JSON_PATH:
        return False
    for row in stage01_rows():
        stage.add(StageBlock.from_row(row), bake=True)
    return False