from datamodgen.model import BlockModel, Identifier, Mod, TriggerSheet
from datamodgen.pipeline.closure import resolve_closure

from mod_factory import model_chain


def test_follows_parent_chain():
    mod = Mod("m")
    a, b, c = model_chain(mod, "a", "b", "c")
    got = resolve_closure([a], mod.block_models, kind=BlockModel)
    assert got == [a, b, c]


def test_unreferenced_declared_models_are_left_out():
    mod = Mod("m")
    a, b = model_chain(mod, "a", "b")
    stray = mod.create_block_model("stray")
    got = resolve_closure([a], mod.block_models, kind=BlockModel)
    assert stray not in got
    assert set(got) == {a, b}


def test_declared_order_does_not_matter():
    mod = Mod("m")
    a, b, c, d = model_chain(mod, "a", "b", "c", "d")
    # Deepest ancestor first in the declared collection.
    mod.block_models.reverse()
    got = resolve_closure([a], mod.block_models, kind=BlockModel)
    assert set(got) == {a, b, c, d}
    assert got[0] is a


def test_each_entity_once_with_shared_parent():
    mod = Mod("m")
    base = mod.create_block_model("base")
    left = mod.create_block_model("left")
    right = mod.create_block_model("right")
    left.set_parent(base)
    right.set_parent(base)
    got = resolve_closure([left, right, left], mod.block_models, kind=BlockModel)
    assert got == [left, right, base]


def test_cycle_terminates():
    mod = Mod("m")
    a, b = model_chain(mod, "a", "b")
    b.set_parent(a)
    got = resolve_closure([a], mod.block_models, kind=BlockModel)
    assert got == [a, b]


def test_self_parent_terminates():
    mod = Mod("m")
    a = mod.create_block_model("a")
    a.set_parent(a)
    assert resolve_closure([a], kind=BlockModel) == [a]


def test_external_parent_ends_branch():
    mod = Mod("m")
    a = mod.create_block_model("a")
    a.set_parent(Identifier("base", "models/blocks/cube.json"))
    b = mod.create_block_model("b")
    b.set_parent("base:models/blocks/slab.json")
    assert resolve_closure([a, b], mod.block_models, kind=BlockModel) == [a, b]


def test_only_same_kind_is_followed():
    mod = Mod("m")
    sheet = mod.create_trigger_sheet("events")
    model = mod.create_block_model("odd")
    sheet.set_parent(model)  # not a TriggerSheet, so not an in-graph edge
    assert resolve_closure([sheet], kind=TriggerSheet) == [sheet]


def test_parent_outside_declared_collection_is_still_found():
    mod = Mod("m")
    a = mod.create_block_model("a")
    loose = BlockModel(mod, mod.identifier("loose"))
    a.set_parent(loose)
    assert resolve_closure([a], mod.block_models, kind=BlockModel) == [a, loose]
