from pathlib import PurePosixPath

import pytest

from datamodgen.errors import E_PATH_ESCAPE, EmitError
from datamodgen.model import Language, Mod, Sound, Texture
from datamodgen.pipeline.paths import (
    BLOCK_ROLE,
    ITEM_ROLE,
    containing_folder,
    plan_lang_path,
    plan_path,
)

from mod_factory import solid_texture


def _p(text: str) -> PurePosixPath:
    return PurePosixPath(text)


def test_entity_conventions():
    mod = Mod("m")
    loot = mod.create_loot_table("ore_drops")
    assert plan_path(mod.create_block("ore")) == _p("blocks/ore.json")
    assert plan_path(mod.create_block_model("ore")) == _p("models/blocks/ore.json")
    assert plan_path(mod.create_trigger_sheet("ore")) == _p("block_events/ore.json")
    assert plan_path(mod.create_item("ingot")) == _p("items/ingot.json")
    assert plan_path(loot) == _p("loot/ore_drops.json")
    assert plan_path(mod.create_block_state_generator("slabs")) == _p(
        "block_state_generators/slabs.json"
    )
    assert plan_path(Sound("ding", b"")) == _p("sounds/blocks/ding.ogg")


def test_recipe_conventions():
    mod = Mod("m")
    shaped = mod.crafting.add_shaped("bricks", ["aa", "aa"], {"a": "m:brick"}, "m:bricks")
    smelt = mod.crafting.add_furnace("brick", "base:clay", "m:brick")
    assert plan_path(shaped) == _p("recipes/crafting/bricks.json")
    assert plan_path(smelt) == _p("recipes/furnace/brick.json")


def test_texture_role_decides_folder():
    tex = solid_texture("gem")
    assert plan_path(tex, BLOCK_ROLE) == _p("textures/blocks/gem.png")
    assert plan_path(tex, ITEM_ROLE) == _p("textures/items/gem.png")
    with pytest.raises(ValueError):
        plan_path(tex)


def test_lang_path():
    assert plan_lang_path("m", Language.DE_DE, "items") == _p("lang/de_de/m_items.json")
    assert plan_lang_path("m", Language.EN_US, "blocks") == _p("lang/en_us/m_blocks.json")
    with pytest.raises(ValueError):
        plan_lang_path("m", Language.EN_US, "sounds")


def test_distinct_ids_never_collide():
    mod = Mod("m")
    paths = {plan_path(mod.create_block(f"b{i}")) for i in range(50)}
    assert len(paths) == 50


def test_escaping_path_rejected():
    mod = Mod("m")
    sneaky = mod.create_block("../../etc/passwd")
    with pytest.raises(EmitError) as ei:
        plan_path(sneaky)
    assert ei.value.code == E_PATH_ESCAPE


def test_unknown_type():
    with pytest.raises(TypeError):
        plan_path(object())


def test_containing_folder():
    assert containing_folder(_p("textures/blocks/a.png")) == _p("textures/blocks")
    assert containing_folder(_p("a.json")) == _p(".")
