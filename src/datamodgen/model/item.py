"""Items."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .identifier import Identifier
from .texture import Texture

__all__ = ["Item"]


class Item:
    def __init__(self, mod: Any, id: Identifier) -> None:
        self.mod = mod
        self.id = id
        self.texture: Optional[Texture] = None
        self.lang_key: Any = None
        self.properties: Dict[str, Any] = {}

    def set_texture(self, texture: Texture) -> "Item":
        self.texture = texture
        return self

    def set_property(self, key: str, value: Any) -> "Item":
        self.properties[key] = value
        return self

    def create_lang_key(self) -> Any:
        self.lang_key = self.mod.lang_map.create_item_key(self.id.get_item())
        return self.lang_key

    def serialize(self) -> Dict[str, Any]:
        props: Dict[str, Any] = {}
        if self.texture is not None:
            props["texture"] = str(self.texture.get_as_item_texture_id(self.mod))
        props.update(self.properties)
        return {"id": self.get_item_id(), "itemProperties": props}

    def get_item_path(self) -> str:
        return f"items/{self.id.get_item()}.json"

    def get_item_id(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"Item({self.get_item_id()!r})"
