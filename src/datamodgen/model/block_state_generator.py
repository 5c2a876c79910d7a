"""Block state generators: derived state families built by the game."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .block_model import BlockModel, model_ref
from .block_state import BlockState, parse_params
from .identifier import Identifier
from .trigger_sheet import TriggerSheet

__all__ = [
    "BasicBlockStateGeneratorEntry",
    "TemplatedBlockStateGeneratorEntry",
    "BlockStateGenerator",
]


class BasicBlockStateGeneratorEntry:
    def __init__(self, id: str, model: Any, params: Any = None) -> None:
        self.id = id
        self.model = model
        self.params = parse_params(params)

    def used_model(self) -> Optional[BlockModel]:
        return self.model if isinstance(self.model, BlockModel) else None

    def used_trigger_sheet(self) -> Optional[TriggerSheet]:
        return None

    def serialize(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "modelName": model_ref(self.model),
            "params": dict(self.params),
        }


class TemplatedBlockStateGeneratorEntry:
    def __init__(self, id: str, state: BlockState, params: Any = None) -> None:
        self.id = id
        self.state = state
        self.params = parse_params(params)

    def used_model(self) -> Optional[BlockModel]:
        model = self.state.model
        return model if isinstance(model, BlockModel) else None

    def used_trigger_sheet(self) -> Optional[TriggerSheet]:
        sheet = self.state.trigger_sheet
        return sheet if isinstance(sheet, TriggerSheet) else None

    def serialize(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "blockStateTemplate": self.state.serialize(),
            "params": dict(self.params),
        }


class BlockStateGenerator:
    def __init__(self, mod: Any, id: Identifier) -> None:
        self.mod = mod
        self.id = id
        self.generators: List[Any] = []

    def add_basic(
        self, id: str, model: Any, params: Any = None
    ) -> BasicBlockStateGeneratorEntry:
        entry = BasicBlockStateGeneratorEntry(id, model, params)
        self.generators.append(entry)
        return entry

    def add_templated(
        self, id: str, state: BlockState, params: Any = None
    ) -> TemplatedBlockStateGeneratorEntry:
        entry = TemplatedBlockStateGeneratorEntry(id, state, params)
        self.generators.append(entry)
        return entry

    def serialize(self) -> Dict[str, Any]:
        return {
            "stringId": str(self.id),
            "generators": [g.serialize() for g in self.generators],
        }

    def get_block_state_generator_path(self) -> str:
        return f"block_state_generators/{self.id.get_item()}.json"

    def __repr__(self) -> str:
        return f"BlockStateGenerator({str(self.id)!r})"
