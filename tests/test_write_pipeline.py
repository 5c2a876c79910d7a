"""End-to-end write pipeline tests.

Each test builds a small mod in memory, writes it under ``tmp_path`` and
checks the files on disk (or the planned file list for dry runs).
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from PIL import Image

from datamodgen.api import WriteOptions, plan_dry_run, write_mod
from datamodgen.errors import DuplicateStateError, EmitError, EntityWriteError
from datamodgen.model import (
    Identifier,
    LangKey,
    Language,
    LootDrop,
    LootDropAction,
    Mod,
    PlaySound2DAction,
    PlaySound3DAction,
    Sound,
    Texture,
)
from datamodgen.pipeline.driver import ModWriter, Stage

from mod_factory import cube_and_slab, model_chain, solid_texture


def _write(mod: Mod, root: Path, **kwargs):
    return write_mod(WriteOptions(mod=mod, output_root=root, **kwargs))


def _files(result) -> list[str]:
    return [str(p) for p in result.files]


def _load(root: Path, rel: str):
    return json.loads((root / rel).read_text(encoding="utf-8"))


def test_cube_and_slab_end_to_end(tmp_path: Path):
    result = _write(cube_and_slab(), tmp_path)
    out = tmp_path / "testmod"
    assert result.output_dir == out.resolve()
    assert sorted(_files(result)) == sorted(
        [
            "blocks/stone_slab.json",
            "models/blocks/slab.json",
            "models/blocks/cube.json",
            "textures/blocks/stone.png",
            "textures/blocks/trim.png",
            "lang/en_us/testmod_items.json",
            "lang/en_us/testmod_blocks.json",
        ]
    )
    assert not (out / "block_events").exists()

    block = _load(out, "blocks/stone_slab.json")
    assert block["stringId"] == "testmod:stone_slab"
    states = block["blockStates"]
    assert list(states) == ["type=bottom", "type=double"]
    assert states["type=bottom"]["modelName"] == "testmod:models/blocks/slab.json"
    assert states["type=double"]["modelName"] == "testmod:models/blocks/cube.json"
    assert states["type=bottom"]["langKey"] == "testmod:stone_slab"

    slab = _load(out, "models/blocks/slab.json")
    assert slab["parent"] == "testmod:models/blocks/cube.json"
    assert slab["textures"]["trim"] == {"fileName": "testmod:textures/blocks/trim.png"}

    with Image.open(out / "textures" / "blocks" / "trim.png") as img:
        assert img.getpixel((0, 0)) == (200, 0, 0, 255)

    assert _load(out, "lang/en_us/testmod_blocks.json") == {
        "testmod:stone_slab": "Stone Slab"
    }
    assert _load(out, "lang/en_us/testmod_items.json") == {}
    assert result.counts["block_models"] == 2
    assert result.counts["block_textures"] == 2
    assert result.bytes_written == sum(
        (out / p).stat().st_size for p in _files(result)
    )


def test_model_closure_completeness(tmp_path: Path):
    mod = Mod("m")
    a, b, c = model_chain(mod, "a", "b", "c")
    mod.create_block_model("unused")
    mod.create_block("thing").create_state().set_model(a)
    result = _write(mod, tmp_path)
    models = [f for f in _files(result) if f.startswith("models/")]
    assert sorted(models) == [
        "models/blocks/a.json",
        "models/blocks/b.json",
        "models/blocks/c.json",
    ]
    assert not (tmp_path / "m" / "models" / "blocks" / "unused.json").exists()


def test_shared_texture_written_once(tmp_path: Path):
    mod = Mod("m")
    shared = solid_texture("shared")
    block = mod.create_block("pair")
    for name in ("left", "right"):
        model = mod.create_block_model(name)
        model.create_cuboid().set_all_textures(shared)
        block.create_state({"side": name}).set_model(model)
    result = _write(mod, tmp_path)
    assert _files(result).count("textures/blocks/shared.png") == 1
    assert result.counts["block_textures"] == 1


def test_equal_textures_are_still_distinct_resources(tmp_path: Path):
    mod = Mod("m")
    model = mod.create_block_model("twins")
    model.create_cuboid().set_all_textures(solid_texture("one"))
    model.create_cuboid((0, 0, 0, 8, 8, 8)).set_all_textures(solid_texture("two"))
    mod.create_block("b").create_state().set_model(model)
    result = _write(mod, tmp_path)
    assert result.counts["block_textures"] == 2


def test_parent_textures_not_attributed_to_child(tmp_path: Path):
    mod = Mod("m")
    base_only = solid_texture("base_only")
    own = solid_texture("own")
    base = mod.create_block_model("base")
    base.create_cuboid().set_all_textures(base_only)
    child = mod.create_block_model("child")
    child.set_parent(base)
    child.create_cuboid().set_all_textures(own)
    mod.create_block("b").create_state().set_model(child)

    result = _write(mod, tmp_path)
    files = _files(result)
    # Each texture is emitted right before the model that owns it.
    assert files.index("textures/blocks/own.png") < files.index("models/blocks/child.json")
    assert files.index("models/blocks/child.json") < files.index(
        "textures/blocks/base_only.png"
    )
    child_json = _load(tmp_path / "m", "models/blocks/child.json")
    assert set(child_json["textures"]) == {"own"}


def test_external_parent_and_texture_not_written(tmp_path: Path):
    mod = Mod("m")
    model = mod.create_block_model("fancy")
    model.set_parent(Identifier("base", "models/blocks/cube.json"))
    model.create_cuboid().set_all_textures(Texture("dirt", "base:textures/blocks/dirt.png"))
    mod.create_block("b").create_state().set_model(model)
    result = _write(mod, tmp_path)
    assert "models/blocks/fancy.json" in _files(result)
    assert not any(f.startswith("textures/") for f in _files(result))
    fancy = _load(tmp_path / "m", "models/blocks/fancy.json")
    assert fancy["textures"]["dirt"] == {"fileName": "base:textures/blocks/dirt.png"}


def test_cyclic_model_parents_terminate(tmp_path: Path):
    mod = Mod("m")
    a, b = model_chain(mod, "a", "b")
    b.set_parent(a)
    mod.create_block("loop").create_state().set_model(a)
    result = _write(mod, tmp_path)
    assert result.counts["block_models"] == 2


def test_cyclic_trigger_sheet_parents_terminate(tmp_path: Path):
    mod = Mod("m")
    a = mod.create_trigger_sheet("a")
    b = mod.create_trigger_sheet("b")
    a.set_parent(b)
    b.set_parent(a)
    mod.create_block("loop").create_state().set_trigger_sheet(a)
    result = _write(mod, tmp_path)
    assert result.counts["trigger_sheets"] == 2
    assert sorted(f for f in _files(result) if f.startswith("block_events/")) == [
        "block_events/a.json",
        "block_events/b.json",
    ]
    assert _load(tmp_path / "m", "block_events/b.json")["parent"] == "m:a"


def test_fail_fast_names_offending_block(tmp_path: Path):
    mod = Mod("m")
    mod.create_block("first").create_state()
    bad = mod.create_block("broken")
    bad.create_state("facing=north")
    bad.create_state({"facing": "north"})
    mod.create_block("never").create_state()

    writer = ModWriter(mod)
    with pytest.raises(EntityWriteError) as ei:
        writer.write(tmp_path)
    err = ei.value
    assert err.kind == "block"
    assert err.entity_id == "m:broken"
    assert "m:broken" in str(err)
    assert isinstance(err.__cause__, DuplicateStateError)
    assert writer.stage is Stage.WRITE_BLOCKS
    # Earlier writes stay, later siblings are never reached.
    assert (tmp_path / "m" / "blocks" / "first.json").is_file()
    assert not (tmp_path / "m" / "blocks" / "never.json").exists()


def test_bad_state_lang_key_names_block(tmp_path: Path):
    mod = Mod("m")
    mod.create_block("bad").create_state().set_lang_key("m:bad")
    writer = ModWriter(mod)
    with pytest.raises(EntityWriteError) as ei:
        writer.write(tmp_path)
    assert ei.value.kind == "block"
    assert ei.value.entity_id == "m:bad"
    assert isinstance(ei.value.__cause__, AttributeError)
    assert writer.stage is Stage.WRITE_BLOCKS


def test_bad_item_lang_key_names_item(tmp_path: Path):
    mod = Mod("m")
    mod.create_item("gem").lang_key = "m:gem"
    with pytest.raises(EntityWriteError) as ei:
        _write(mod, tmp_path)
    assert ei.value.kind == "item"
    assert ei.value.entity_id == "m:gem"
    assert isinstance(ei.value.__cause__, AttributeError)


def test_write_failure_names_entity(tmp_path: Path):
    mod = cube_and_slab("m")
    out = tmp_path / "m"
    out.mkdir()
    (out / "models").write_text("in the way", encoding="utf-8")
    with pytest.raises(EntityWriteError) as ei:
        _write(mod, tmp_path, keep_old_folder=True)
    assert ei.value.kind == "block model"
    assert ei.value.entity_id == "m:models/blocks/slab.json"
    assert isinstance(ei.value.__cause__, EmitError)


def test_trigger_sheets_sounds_and_loot(tmp_path: Path):
    mod = Mod("m")
    chime = Sound("chime", b"OggS-chime")
    thud = Sound("thud", b"OggS-thud")
    loot = mod.create_loot_table("ore")
    loot.add_option(3, LootDrop("m:gem", 1, 2))

    base = mod.create_trigger_sheet("base_events")
    base.on_interact(PlaySound2DAction(chime), PlaySound2DAction("base:ui_click"))
    child = mod.create_trigger_sheet()
    child.set_parent(base)
    child.on_break(
        PlaySound3DAction(chime, x=1),
        PlaySound3DAction(thud),
        LootDropAction(loot),
        LootDropAction(loot, y=1),
    )
    mod.create_trigger_sheet("unused").on_place(PlaySound2DAction(Sound("x", b"x")))
    mod.create_block("ore").create_state().set_trigger_sheet(child)

    result = _write(mod, tmp_path)
    out = tmp_path / "m"
    files = _files(result)
    assert sorted(f for f in files if f.startswith("block_events/")) == [
        "block_events/base_events.json",
        "block_events/temp_sheet_0.json",
    ]
    assert files.count("sounds/blocks/chime.ogg") == 1
    assert "sounds/blocks/thud.ogg" in files
    assert "sounds/blocks/x.ogg" not in files
    assert files.count("loot/ore.json") == 1
    assert (out / "sounds" / "blocks" / "chime.ogg").read_bytes() == b"OggS-chime"

    sheet = _load(out, "block_events/temp_sheet_0.json")
    assert sheet["parent"] == "m:base_events"
    actions = sheet["triggers"]["onBreak"]
    assert actions[0]["actionId"] == "base:play_sound"
    assert actions[0]["parameters"]["sound"] == "m:sounds/blocks/chime.ogg"
    assert actions[0]["parameters"]["xOff"] == 1
    assert actions[2]["parameters"]["loot"] == "m:ore"
    assert _load(out, "loot/ore.json") == {
        "id": "m:ore",
        "options": [
            {"weight": 3, "items": [{"id": "m:gem", "min": 1, "max": 2}]}
        ],
    }
    assert result.counts["sounds"] == 2
    assert result.counts["loot_tables"] == 1


def test_sound_from_file(tmp_path: Path):
    src = tmp_path / "src.ogg"
    src.write_bytes(b"OggS-from-disk")
    mod = Mod("m")
    sheet = mod.create_trigger_sheet("events")
    sheet.on_place(PlaySound2DAction(Sound.load_from_file("place", src)))
    mod.create_block("b").create_state().set_trigger_sheet(sheet)
    _write(mod, tmp_path / "out")
    assert (tmp_path / "out" / "m" / "sounds" / "blocks" / "place.ogg").read_bytes() == (
        b"OggS-from-disk"
    )


def test_sound_file_closed_when_write_fails(tmp_path: Path):
    src = tmp_path / "src.ogg"
    src.write_bytes(b"OggS")
    sound = Sound.load_from_file("place", src)
    opened = []
    real_open = sound.create_ogg_stream

    def tracking_open():
        stream = real_open()
        opened.append(stream)
        return stream

    sound.create_ogg_stream = tracking_open
    mod = Mod("m")
    sheet = mod.create_trigger_sheet("events")
    sheet.on_place(PlaySound2DAction(sound))
    mod.create_block("b").create_state().set_trigger_sheet(sheet)
    out = tmp_path / "out" / "m"
    out.mkdir(parents=True)
    (out / "sounds").write_text("in the way", encoding="utf-8")
    with pytest.raises(EntityWriteError) as ei:
        _write(mod, tmp_path / "out", keep_old_folder=True)
    assert ei.value.kind == "block sound"
    assert len(opened) == 1
    assert opened[0].closed


def test_generators_seed_closures(tmp_path: Path):
    mod = Mod("m")
    post = mod.create_block_model("post")
    post.create_cuboid((6, 0, 6, 10, 16, 10)).set_all_textures(solid_texture("wood"))
    side = mod.create_block_model("side")
    side.set_parent(post)
    sheet = mod.create_trigger_sheet("fence_events")
    block = mod.create_block("fence")
    template = block.create_state().set_model(post).set_trigger_sheet(sheet)

    gen = mod.create_block_state_generator("fence_sides")
    gen.add_basic("north", side, "side=north")
    gen.add_templated("base", template)

    result = _write(mod, tmp_path)
    files = _files(result)
    assert "block_state_generators/fence_sides.json" in files
    assert {"models/blocks/side.json", "models/blocks/post.json"} <= set(files)
    assert "block_events/fence_events.json" in files
    data = _load(tmp_path / "m", "block_state_generators/fence_sides.json")
    assert data["stringId"] == "m:fence_sides"
    assert data["generators"][0]["modelName"] == "m:models/blocks/side.json"


def test_items_and_item_textures(tmp_path: Path):
    mod = Mod("m")
    gem = solid_texture("gem")
    ore = mod.create_block_model("gem_ore")
    ore.create_cuboid().set_all_textures(gem)
    mod.create_block("gem_ore").create_state().set_model(ore)
    item = mod.create_item("gem").set_texture(gem).set_property("stackLimit", 64)
    item.create_lang_key().set(Language.EN_US, "Gem").set(Language.FR_FR, "Gemme")
    # Same texture instance on a second item is written once.
    mod.create_item("gem_shard").set_texture(gem)

    result = _write(mod, tmp_path)
    out = tmp_path / "m"
    files = _files(result)
    assert "textures/blocks/gem.png" in files
    assert files.count("textures/items/gem.png") == 1
    assert _load(out, "items/gem.json") == {
        "id": "m:gem",
        "itemProperties": {"texture": "m:textures/items/gem.png", "stackLimit": 64},
    }
    assert _load(out, "lang/fr_fr/m_items.json") == {"m:gem": "Gemme"}
    assert _load(out, "lang/fr_fr/m_blocks.json") == {}
    assert not (out / "lang" / "de_de").exists()


def test_recipes(tmp_path: Path):
    mod = Mod("m")
    brick = mod.create_item("brick")
    mod.crafting.add_shaped("bricks", ["##", "##"], {"#": brick}, "m:bricks")
    mod.crafting.add_shapeless("dye", ["base:flower"], "m:dye", 2)
    mod.crafting.add_furnace("brick", "base:clay", brick)
    result = _write(mod, tmp_path)
    out = tmp_path / "m"
    assert _load(out, "recipes/crafting/bricks.json") == {
        "pattern": ["##", "##"],
        "inputs": {"#": "m:brick"},
        "output": {"item": "m:bricks", "amount": 1},
    }
    assert _load(out, "recipes/crafting/dye.json")["inputs"] == ["base:flower"]
    assert _load(out, "recipes/furnace/brick.json") == {
        "input": "base:clay",
        "output": {"item": "m:brick", "amount": 1},
    }
    assert result.counts["crafting_recipes"] == 2
    assert result.counts["furnace_recipes"] == 1


def test_run_does_not_mutate_mod_lang_map(tmp_path: Path):
    mod = Mod("m")
    block = mod.create_block("b")
    # A key set directly on a state, never registered on the mod.
    block.create_state().set_lang_key(LangKey("m:b").set(Language.EN_US, "B"))
    assert mod.lang_map.serialize() == {}
    _write(mod, tmp_path)
    assert _load(tmp_path / "m", "lang/en_us/m_blocks.json") == {"m:b": "B"}
    assert mod.lang_map.serialize() == {}


def test_clears_previous_output(tmp_path: Path):
    stale = tmp_path / "testmod" / "blocks" / "removed.json"
    stale.parent.mkdir(parents=True)
    stale.write_text("{}", encoding="utf-8")
    _write(cube_and_slab(), tmp_path)
    assert not stale.exists()
    assert (tmp_path / "testmod" / "blocks" / "stone_slab.json").is_file()


def test_keep_old_folder(tmp_path: Path):
    stale = tmp_path / "testmod" / "blocks" / "removed.json"
    stale.parent.mkdir(parents=True)
    stale.write_text("{}", encoding="utf-8")
    overwritten = tmp_path / "testmod" / "blocks" / "stone_slab.json"
    overwritten.write_text("old", encoding="utf-8")
    _write(cube_and_slab(), tmp_path, keep_old_folder=True)
    assert stale.read_text(encoding="utf-8") == "{}"
    assert _load(tmp_path / "testmod", "blocks/stone_slab.json")["stringId"] == (
        "testmod:stone_slab"
    )


def test_minified_output(tmp_path: Path):
    _write(cube_and_slab(), tmp_path, minify_json=True)
    text = (tmp_path / "testmod" / "blocks" / "stone_slab.json").read_text(
        encoding="utf-8"
    )
    assert "\n" not in text
    assert text.startswith('{"stringId":"testmod:stone_slab"')


def test_dry_run_matches_real_write(tmp_path: Path):
    result, plan = plan_dry_run(cube_and_slab(), tmp_path)
    assert not (tmp_path / "testmod").exists()
    assert plan["dry_run"] is True
    assert plan["mod"] == "testmod"

    written = _write(cube_and_slab(), tmp_path)
    assert _files(result) == _files(written)
    assert plan["files"] == _files(written)
    assert result.bytes_written == written.bytes_written
    assert plan["counts"] == written.counts


def test_repeated_runs_write_identical_files(tmp_path: Path):
    mod = cube_and_slab()
    first = _write(mod, tmp_path / "one")
    second = _write(mod, tmp_path / "two")
    assert _files(first) == _files(second)
    for rel in _files(first):
        assert (tmp_path / "one" / "testmod" / rel).read_bytes() == (
            tmp_path / "two" / "testmod" / rel
        ).read_bytes()


def test_writer_stage_done(tmp_path: Path):
    writer = ModWriter(Mod("empty"))
    assert writer.stage is Stage.INIT
    result = writer.write(tmp_path)
    assert writer.stage is Stage.DONE
    assert result.files == []
    assert all(v == 0 for v in result.counts.values())
