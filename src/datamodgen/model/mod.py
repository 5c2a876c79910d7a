"""The authoring session: a mod owns every entity it creates."""

from __future__ import annotations

from typing import List

from .block import Block
from .block_model import BlockModel
from .block_state_generator import BlockStateGenerator
from .identifier import Identifier
from .item import Item
from .lang import LangMap
from .loot import LootTable
from .recipe import CraftingRegistry
from .trigger_sheet import TriggerSheet

__all__ = ["Mod"]


class Mod:
    def __init__(self, id: str) -> None:
        if not id or ":" in id or "/" in id:
            raise ValueError(f"Invalid mod id: {id!r}")
        self.id = id
        self.blocks: List[Block] = []
        self.block_state_generators: List[BlockStateGenerator] = []
        self.block_models: List[BlockModel] = []
        self.trigger_sheets: List[TriggerSheet] = []
        self.items: List[Item] = []
        self.loot_tables: List[LootTable] = []
        self.crafting = CraftingRegistry(self)
        self.lang_map = LangMap(id)
        self._temp_sheets_created = 0

    def identifier(self, item: str) -> Identifier:
        return Identifier(self.id, item)

    def next_temp_sheet_name(self) -> str:
        name = f"temp_sheet_{self._temp_sheets_created}"
        self._temp_sheets_created += 1
        return name

    def create_block(self, name: str) -> Block:
        block = Block(self, self.identifier(name))
        self.blocks.append(block)
        return block

    def create_block_model(self, name: str) -> BlockModel:
        model = BlockModel(self, self.identifier(name))
        self.block_models.append(model)
        return model

    def create_trigger_sheet(self, name: str | None = None) -> TriggerSheet:
        sheet = TriggerSheet(
            self, self.identifier(name) if name is not None else None
        )
        self.trigger_sheets.append(sheet)
        return sheet

    def create_block_state_generator(self, name: str) -> BlockStateGenerator:
        generator = BlockStateGenerator(self, self.identifier(name))
        self.block_state_generators.append(generator)
        return generator

    def create_item(self, name: str) -> Item:
        item = Item(self, self.identifier(name))
        self.items.append(item)
        return item

    def create_loot_table(self, name: str) -> LootTable:
        table = LootTable(self, self.identifier(name))
        self.loot_tables.append(table)
        return table

    def __repr__(self) -> str:
        return f"Mod({self.id!r})"
