"""In-memory content model for a data-mod."""

from .identifier import Identifier, to_id_string
from .texture import Texture
from .sound import Sound
from .loot import LootDrop, LootOption, LootTable
from .block_model import BlockModel, BlockModelCuboid, BlockModelFace
from .block_state import BlockState
from .block import Block
from .block_state_generator import (
    BasicBlockStateGeneratorEntry,
    BlockStateGenerator,
    TemplatedBlockStateGeneratorEntry,
)
from .trigger_actions import (
    ActionKind,
    LootDropAction,
    PlaySound2DAction,
    PlaySound3DAction,
    ReplaceBlockStateAction,
    RunTriggerAction,
    TriggerAction,
)
from .trigger_sheet import TriggerSheet
from .item import Item
from .recipe import CraftingRecipe, CraftingRegistry, FurnaceRecipe
from .lang import LangKey, LangMap, Language
from .mod import Mod

__all__ = [
    "Identifier",
    "to_id_string",
    "Texture",
    "Sound",
    "LootDrop",
    "LootOption",
    "LootTable",
    "BlockModel",
    "BlockModelCuboid",
    "BlockModelFace",
    "BlockState",
    "Block",
    "BasicBlockStateGeneratorEntry",
    "BlockStateGenerator",
    "TemplatedBlockStateGeneratorEntry",
    "ActionKind",
    "LootDropAction",
    "PlaySound2DAction",
    "PlaySound3DAction",
    "ReplaceBlockStateAction",
    "RunTriggerAction",
    "TriggerAction",
    "TriggerSheet",
    "Item",
    "CraftingRecipe",
    "CraftingRegistry",
    "FurnaceRecipe",
    "LangKey",
    "LangMap",
    "Language",
    "Mod",
]
