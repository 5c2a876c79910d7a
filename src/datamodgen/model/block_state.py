"""Block states: one parameter combination of a block."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .block_model import model_ref
from .trigger_sheet import sheet_ref

__all__ = ["BlockState", "parse_params"]

DEFAULT_STATE_KEY = "default"


def parse_params(params: Any) -> Dict[str, str]:
    """Accept a mapping or a ``"k=v,k2=v2"`` string."""
    if params is None:
        return {}
    if isinstance(params, str):
        out: Dict[str, str] = {}
        for pair in params.split(","):
            if not pair.strip():
                continue
            key, sep, value = pair.partition("=")
            if not sep:
                raise ValueError(f"Malformed block state parameter {pair!r}")
            out[key.strip()] = value.strip()
        return out
    return {str(k): str(v) for k, v in dict(params).items()}


class BlockState:
    def __init__(self, mod: Any, block: Any) -> None:
        self.mod = mod
        self.block = block
        self.params: Dict[str, str] = {}
        self.model: Any = None
        self.trigger_sheet: Any = None
        self.lang_key: Any = None
        self.is_opaque = True
        self.catalog_hidden = False
        self.light_attenuation = 15
        self.hardness: Optional[float] = None
        self.drop_id: Optional[str] = None
        self.tags: List[str] = []

    def set_model(self, model: Any) -> "BlockState":
        self.model = model
        return self

    def set_trigger_sheet(self, sheet: Any) -> "BlockState":
        self.trigger_sheet = sheet
        return self

    def set_lang_key(self, key: Any) -> "BlockState":
        self.lang_key = key
        return self

    def set_param(self, key: str, value: Any) -> "BlockState":
        self.params[key] = str(value)
        return self

    def compile_params(self) -> str:
        if not self.params:
            return DEFAULT_STATE_KEY
        return ",".join(f"{k}={v}" for k, v in self.params.items())

    def get_state_id(self) -> str:
        return f"{self.block.id}[{self.compile_params()}]"

    def serialize(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.model is not None:
            out["modelName"] = model_ref(self.model)
        if self.trigger_sheet is not None:
            out["blockEventsId"] = sheet_ref(self.trigger_sheet)
        if self.lang_key is not None:
            out["langKey"] = self.lang_key.id
        out["isOpaque"] = self.is_opaque
        out["lightAttenuation"] = self.light_attenuation
        if self.catalog_hidden:
            out["catalogHidden"] = True
        if self.hardness is not None:
            out["hardness"] = self.hardness
        if self.drop_id is not None:
            out["dropId"] = self.drop_id
        if self.tags:
            out["tags"] = list(self.tags)
        return out

    def __repr__(self) -> str:
        return f"BlockState({self.get_state_id()!r})"
