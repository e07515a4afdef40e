import json

import pytest

from blockstage.cube import CubeFace, KindRegistry, unit_template
from blockstage.stage import Stage, StageBlock
from blockstage.stage_table import stage01_rows
from blockstage.stagefile import (
    StageFileError,
    SwitchResult,
    dumps,
    initialize_stage,
    load_json,
    save_json,
    switch_stage,
)


def _stage_with_blocks():
    stage = Stage()
    stage.add(StageBlock(kind=1, tex_slot=10, position=(1.5, 2.0, -3.25), size=(2.0, 1.0, 4.0)))
    stage.add(StageBlock(kind=10, tex_slot=20, position=(0.0, 0.5, 7.0), rotation=(0.0, 0.5, 0.0)))
    return stage


def test_dumps_is_valid_json_with_version_and_blocks():
    stage = _stage_with_blocks()
    registry = KindRegistry.with_presets()
    data = json.loads(dumps(stage, registry))
    assert data["version"] == 2
    assert [k["kind"] for k in data["kinds"]] == registry.kinds()
    assert all(len(k["faces"]) == 6 for k in data["kinds"])
    assert [b["kind"] for b in data["blocks"]] == [1, 10]
    assert data["blocks"][0]["position"] == [1.5, 2.0, -3.25]


def test_dumps_uses_three_decimals():
    stage = Stage()
    stage.add(StageBlock(position=(1.5, 0.0, 0.0)))
    text = dumps(stage, KindRegistry())
    assert '"position":[1.500,0.000,0.000]' in text
    assert '"kinds": [\n  ],' in text


def test_round_trip_blocks(tmp_path):
    stage = _stage_with_blocks()
    registry = KindRegistry.with_presets()
    path = tmp_path / "s.json"
    save_json(stage, registry, path)
    assert stage.json_path == str(path)

    loaded = Stage()
    count = load_json(loaded, KindRegistry(), path)
    assert count == len(stage)
    for original, copy in zip(stage, loaded):
        assert copy.kind == original.kind
        assert copy.tex_slot == original.tex_slot
        assert copy.position == pytest.approx(original.position)
        assert copy.size == pytest.approx(original.size)
        assert copy.rotation == pytest.approx(original.rotation)
    assert loaded.json_path == str(path)


def test_loaded_blocks_are_baked(tmp_path):
    stage = _stage_with_blocks()
    path = tmp_path / "s.json"
    save_json(stage, KindRegistry(), path)
    loaded = Stage()
    load_json(loaded, KindRegistry(), path)
    for original, copy in zip(stage, loaded):
        assert copy.aabb.min == pytest.approx(original.aabb.min)
        assert copy.aabb.max == pytest.approx(original.aabb.max)


def test_round_trip_kinds(tmp_path):
    registry = KindRegistry()
    template = unit_template()
    template.set_face_uv(CubeFace.TOP, (0.25, 0.5), (0.75, 1.0))
    template.set_face_color(CubeFace.FRONT, (0.5, 0.25, 1.0, 1.0))
    registry.register(7, template)
    path = tmp_path / "k.json"
    save_json(Stage(), registry, path)

    fresh = KindRegistry()
    load_json(Stage(), fresh, path)
    assert 7 in fresh
    got = fresh.get(7)
    assert got.faces[CubeFace.FRONT].color[0] == pytest.approx((0.5, 0.25, 1.0, 1.0))
    assert got.faces[CubeFace.TOP].uv[0] == pytest.approx((0.25, 0.5))
    assert got.faces[CubeFace.TOP].uv[2] == pytest.approx((0.75, 1.0))
    assert got.faces[CubeFace.LEFT].normal == pytest.approx(template.faces[CubeFace.LEFT].normal)


def test_lenient_block_defaults(tmp_path):
    path = tmp_path / "loose.json"
    path.write_text('{"blocks":[{"kind":3,"position":[1, 2, 3]}, {}]}')
    stage = Stage()
    assert load_json(stage, KindRegistry(), path) == 2
    first = stage.get(0)
    assert first.kind == 3
    assert first.position == (1.0, 2.0, 3.0)
    assert first.size == (1.0, 1.0, 1.0)
    assert stage.get(1).kind == 0


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(Stage(), KindRegistry(), tmp_path / "nope.json")


def test_missing_blocks_key_raises_and_keeps_stage(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"version": 2}')
    stage = _stage_with_blocks()
    with pytest.raises(StageFileError):
        load_json(stage, KindRegistry(), path)
    assert len(stage) == 2


def test_unterminated_array_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"blocks": [ {"kind":1}')
    with pytest.raises(StageFileError):
        load_json(Stage(), KindRegistry(), path)


def test_empty_path_rejected():
    with pytest.raises(ValueError):
        save_json(Stage(), KindRegistry(), "")
    with pytest.raises(ValueError):
        load_json(Stage(), KindRegistry(), "")


def test_switch_stage_loads_existing(tmp_path):
    path = tmp_path / "a.json"
    save_json(_stage_with_blocks(), KindRegistry(), path)
    stage = Stage()
    assert switch_stage(stage, KindRegistry(), path) is SwitchResult.LOADED
    assert len(stage) == 2


def test_switch_stage_creates_empty(tmp_path):
    stage = _stage_with_blocks()
    path = str(tmp_path / "new.json")
    assert switch_stage(stage, KindRegistry(), path) is SwitchResult.CREATED_EMPTY
    assert len(stage) == 0
    assert stage.json_path == path


def test_switch_stage_fails_without_create(tmp_path):
    stage = _stage_with_blocks()
    result = switch_stage(stage, KindRegistry(), tmp_path / "x.json", create_empty_if_missing=False)
    assert result is SwitchResult.FAILED
    assert len(stage) == 2
    assert switch_stage(stage, KindRegistry(), "") is SwitchResult.FAILED


def test_initialize_default_falls_back_to_table(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    stage = Stage()
    registry = KindRegistry()
    assert initialize_stage(stage, registry) is False
    assert len(stage) == len(stage01_rows())
    assert registry.kinds() == KindRegistry.with_presets().kinds()


def test_initialize_other_missing_path_is_empty(tmp_path):
    stage = _stage_with_blocks()
    assert initialize_stage(stage, KindRegistry(), str(tmp_path / "stage02.json")) is False
    assert len(stage) == 0


def test_initialize_loads_file(tmp_path):
    path = tmp_path / "stage03.json"
    save_json(_stage_with_blocks(), KindRegistry(), path)
    stage = Stage()
    assert initialize_stage(stage, KindRegistry(), str(path)) is True
    assert [b.kind for b in stage] == [1, 10]