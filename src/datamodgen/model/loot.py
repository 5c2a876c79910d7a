"""Loot tables dropped by trigger actions."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .identifier import Identifier, to_id_string

__all__ = ["LootDrop", "LootOption", "LootTable"]


@dataclass(slots=True)
class LootDrop:
    item: Any
    min: int = 1
    max: int = 1

    def serialize(self) -> Dict[str, Any]:
        return {"id": to_id_string(self.item), "min": self.min, "max": self.max}


@dataclass(slots=True)
class LootOption:
    weight: float = 1.0
    drops: List[LootDrop] = field(default_factory=list)

    def serialize(self) -> Dict[str, Any]:
        return {
            "weight": self.weight,
            "items": [d.serialize() for d in self.drops],
        }


class LootTable:
    def __init__(self, mod: Any, id: Identifier) -> None:
        self.mod = mod
        self.id = id
        self.options: List[LootOption] = []

    def add_option(self, weight: float = 1.0, *drops: LootDrop) -> LootOption:
        option = LootOption(weight, list(drops))
        self.options.append(option)
        return option

    def serialize(self) -> Dict[str, Any]:
        return {
            "id": self.get_loot_id(),
            "options": [o.serialize() for o in self.options],
        }

    def get_loot_path(self) -> str:
        return f"loot/{self.id.get_item()}.json"

    def get_loot_id(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"LootTable({self.get_loot_id()!r})"
