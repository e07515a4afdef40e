# blockstage

A library for building and editing block-based stages for a 3D platformer.
A stage is a list of boxes. Each box has a cube *kind*, a texture slot, a
position, a size and a rotation in radians. The library bakes each box into a
world matrix and an axis-aligned bounding box. You can use the bounding box
for collision tests.

## Modules

- `blockstage.geometry`: 4x4 matrices in the row-vector convention, so a point
  is multiplied as `[x, y, z, 1] @ M`. It has `identity`, `scaling`,
  `translation`, `rotation_roll_pitch_yaw` (roll about z, then pitch about x,
  then yaw about y), `multiply`, `world_matrix` (scale, then rotate, then
  translate) and `transform_coord`. `bounds_of` returns the `AABB` that holds a
  set of points after a transform.
- `blockstage.cube`: the face descriptions of a cube kind:
  - `CubeFace` and `CubeFaceDesc`: positions, normal, colours and UVs of a face.
  - `CubeTemplate`: a cube kind, with `set_face_uv`, `set_all_face_uv`,
    `set_face_color`, `set_all_face_color` and `local_positions`.
  - The preset templates: `unit_template`, `legacy_template`,
    `full_uv_template`, `solid_color_template`, `renga_template` and
    `rego_template`.
  - `KindRegistry`: stores templates by kind number. `KindRegistry.with_presets()`
    registers kinds 0, 1, 2, 10 and 11. `resolve` falls back to kind 0 when a
    kind is not registered.
  - `CubeBlock`: a placed cube. `bake(registry)` fills in `world` and `aabb`.
  - `cube_aabb`: the box of a unit cube at a given position.
- `blockstage.stage_map`: `StageMap`, a list of baked `CubeBlock`s.
  - `populate(brick_tex, default_tex)` lays out four default blocks.
  - `add_transform` moves a block and bakes it again.
- `blockstage.stage`: `Stage`, an editable list of `StageBlock`s.
  - Each block keeps a separate `RuntimeOffset`. `add_transform` adds to that
    offset, which moving platforms use, and leaves the edited values as they are.
  - Texture slots are named by `TexSlot`. `tex_slot_name` and `tex_slot_count`
    describe the slots. `Stage.set_texture` binds a loaded texture id to a slot.
  - `Stage.json_path` is the stage's current file. It defaults to
    `stage01.json` and cannot be empty.
- `blockstage.stage_table`: `StageRow` and `stage01_rows()`, the built-in
  layout. `initialize_stage` uses it when the default file cannot be loaded.
- `blockstage.stagefile`: stage files in JSON.
  - `dumps` and `save_json` write the file version, every registered kind and
    every block. Numbers are written with three decimals.
  - `load_json` reads kinds into the registry and replaces the stage's blocks.
    It returns the number of blocks loaded. The reader accepts files with
    missing fields. A malformed file raises `StageFileError` and leaves the
    blocks as they were.
  - `switch_stage` returns a `SwitchResult`: `LOADED`, `CREATED_EMPTY` or
    `FAILED`.
  - `initialize_stage` registers the preset kinds and then fills the stage from
    its file.
- `blockstage.texture`: `TextureRegistry`, a table of textures with a fixed
  capacity (256 by default).
  - `load(filename)` loads each file only once and returns its slot.
  - `width` and `height` give the image size.
  - The default loader reads the image size with Pillow (`image_size`).
  - A failed load, or a table with no free slot, raises `TextureLoadError`.
- `blockstage.timer`: `SystemTimer`, a timer that can be stopped. It is built
  on `time.perf_counter_ns`, or on any tick clock you pass to it.
  - It has `reset`, `start`, `stop`, `advance` (one tenth of a second),
    `time`, `absolute_time`, `elapsed_time` (never negative) and `is_stopped`.
- `blockstage.title`: `TitleMenu`, the state machine for the title screen.
  - It moves from the logo to stage selection and then to a chosen stage in
    `selected_stage`.
  - Each frame it takes a `TitleInput`. Keyboard input is ignored while a pad
    is connected.
  - `icon_layout` and `logo_position` compute where the icons and the logo go
    on screen.

## Example

```python
from blockstage.cube import KindRegistry
from blockstage.stage import Stage
from blockstage.stagefile import initialize_stage, save_json

registry = KindRegistry.with_presets()
stage = Stage()
initialize_stage(stage, registry, "stage01.json")  # built-in layout if the file is missing

stage.add_transform(0, (0.0, 1.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
for block in stage:
    print(block.kind, block.aabb)

save_json(stage, registry, "stage01.json")
```

## What it does not do

This package is a model of the game and nothing more.

- It does not draw anything, play audio or read gamepads or keyboards. Input
  reaches `TitleMenu` only as `TitleInput` values that you fill in.
- It has no player, no physics, no game loop and no command-line program.

## Installing and testing

```
pip install .
pip install .[test]
pytest
```