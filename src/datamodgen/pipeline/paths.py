"""Relative output paths for every entity and resource kind.

Paths are pure functions of type and identifier and are relative to the
mod folder (``<output_root>/<mod_id>/``). Nothing here touches the file
system.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Callable, Dict, Optional, Type

from ..errors import E_PATH_ESCAPE, EmitError
from ..model.block import Block
from ..model.block_model import BlockModel
from ..model.block_state_generator import BlockStateGenerator
from ..model.item import Item
from ..model.lang import Language
from ..model.loot import LootTable
from ..model.recipe import CraftingRecipe, FurnaceRecipe
from ..model.sound import Sound
from ..model.texture import Texture
from ..model.trigger_sheet import TriggerSheet

__all__ = [
    "BLOCK_ROLE",
    "ITEM_ROLE",
    "LANG_SECTIONS",
    "plan_path",
    "plan_lang_path",
    "containing_folder",
]

BLOCK_ROLE = "block"
ITEM_ROLE = "item"
LANG_SECTIONS = ("items", "blocks")

_PATHS: Dict[Type[Any], Callable[[Any], str]] = {
    Block: lambda e: e.get_block_path(),
    BlockStateGenerator: lambda e: e.get_block_state_generator_path(),
    BlockModel: lambda e: e.get_block_model_path(),
    TriggerSheet: lambda e: e.get_trigger_sheet_path(),
    Sound: lambda e: e.get_as_block_sound_path(),
    LootTable: lambda e: e.get_loot_path(),
    Item: lambda e: e.get_item_path(),
    CraftingRecipe: lambda e: e.get_recipe_path(),
    FurnaceRecipe: lambda e: e.get_recipe_path(),
}

_TEXTURE_PATHS: Dict[str, Callable[[Texture], str]] = {
    BLOCK_ROLE: lambda t: t.get_as_block_texture_path(),
    ITEM_ROLE: lambda t: t.get_as_item_texture_path(),
}


def _checked(raw: str, owner: Any) -> PurePosixPath:
    path = PurePosixPath(raw)
    if path.is_absolute() or ".." in path.parts or not path.parts:
        raise EmitError(
            code=E_PATH_ESCAPE,
            message=f"Planned path {raw!r} leaves the mod folder",
            context={"path": raw, "entity": repr(owner)},
        )
    return path


def plan_path(entity: Any, role: Optional[str] = None) -> PurePosixPath:
    """Relative output path of ``entity``.

    Textures are planned per role (``"block"`` or ``"item"``) because the
    same image can be used as both.
    """
    if isinstance(entity, Texture):
        try:
            return _checked(_TEXTURE_PATHS[role or ""](entity), entity)
        except KeyError:
            raise ValueError(
                f"Texture paths need a role {tuple(_TEXTURE_PATHS)}, got {role!r}"
            ) from None
    for etype, planner in _PATHS.items():
        if isinstance(entity, etype):
            return _checked(planner(entity), entity)
    raise TypeError(f"No output path convention for {type(entity).__name__}")


def plan_lang_path(
    mod_id: str, language: Language, section: str
) -> PurePosixPath:
    if section not in LANG_SECTIONS:
        raise ValueError(f"Unknown lang section {section!r}")
    return _checked(f"lang/{language.value}/{mod_id}_{section}.json", language)


def containing_folder(path: PurePosixPath) -> PurePosixPath:
    return path.parent
