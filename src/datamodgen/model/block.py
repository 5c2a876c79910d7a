"""Blocks and their state sets."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..errors import E_DUP_BLOCK_STATE, DuplicateStateError
from .block_state import BlockState, parse_params
from .identifier import Identifier

__all__ = ["Block"]


class Block:
    def __init__(self, mod: Any, id: Identifier) -> None:
        self.mod = mod
        self.id = id
        self.fuel_ticks: Optional[int] = None
        self.default_state: Optional[BlockState] = None
        self.fallback_params: Optional[BlockState] = None
        self._states: List[BlockState] = []
        self._default_lang_key: Any = None

    def create_state(self, params: Any = None) -> BlockState:
        state = BlockState(self.mod, self)
        state.params.update(parse_params(params))
        if self.default_state is None:
            self.default_state = state
        if self._default_lang_key is not None:
            state.set_lang_key(self._default_lang_key)
        self._states.append(state)
        return state

    def get_states(self) -> List[BlockState]:
        return list(self._states)

    def create_default_lang_key(self) -> Any:
        key = self.mod.lang_map.create_block_key(self.id.get_item())
        self._default_lang_key = key
        return key

    def set_default_lang_key(self, key: Any) -> None:
        self._default_lang_key = key

    def serialize(self) -> Dict[str, Any]:
        states: Dict[str, Any] = {}
        for state in self._states:
            key = state.compile_params()
            if key in states:
                raise DuplicateStateError(
                    code=E_DUP_BLOCK_STATE,
                    message=f"Duplicate block state {key}",
                    context={"block": self.get_block_id(), "state": key},
                )
            states[key] = state.serialize()
        out: Dict[str, Any] = {"stringId": self.get_block_id()}
        if self.fallback_params is not None:
            out["defaultProperties"] = self.fallback_params.serialize()
        if self.fuel_ticks is not None:
            out["fuelTicks"] = self.fuel_ticks
        out["blockStates"] = states
        return out

    def get_block_path(self) -> str:
        return f"blocks/{self.id.get_item()}.json"

    def get_block_id(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"Block({self.get_block_id()!r})"
