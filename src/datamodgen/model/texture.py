"""Block and item textures.

A texture is either *embedded* (a Pillow image that the writer encodes to
PNG inside the mod folder) or *external* (a string id or
:class:`Identifier` pointing at a texture another mod or the base game
ships). Only embedded textures produce files.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image

from .identifier import Identifier

__all__ = ["Texture"]

TextureSource = Union[Image.Image, Identifier, str, None]


class Texture:
    def __init__(self, id: str, source: TextureSource = None) -> None:
        self.id = id
        self.source = source

    @classmethod
    def load_from_file(cls, id: str, path: str | Path) -> "Texture":
        with Image.open(path) as img:
            return cls(id, img.convert("RGBA"))

    @property
    def is_embedded(self) -> bool:
        return isinstance(self.source, Image.Image)

    def get_image(self) -> Optional[Image.Image]:
        return self.source if self.is_embedded else None  # type: ignore[return-value]

    def _external_id(self, folder: str) -> Optional[Identifier]:
        if isinstance(self.source, Identifier):
            return self.source.derive(
                f"textures/{folder}/{self.source.get_item()}.png"
            )
        if isinstance(self.source, str):
            return Identifier.from_id(self.source)
        return None

    def get_as_block_texture_path(self) -> str:
        return f"textures/blocks/{self.id}.png"

    def get_as_block_texture_id(self, mod: Any) -> Identifier:
        return self._external_id("blocks") or Identifier(
            mod, self.get_as_block_texture_path()
        )

    def get_as_item_texture_path(self) -> str:
        return f"textures/items/{self.id}.png"

    def get_as_item_texture_id(self, mod: Any) -> Identifier:
        return self._external_id("items") or Identifier(
            mod, self.get_as_item_texture_path()
        )

    def create_texture_stream(self) -> Optional[io.BytesIO]:
        """PNG-encode the embedded image; ``None`` for external textures."""
        image = self.get_image()
        if image is None:
            return None
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        buf.seek(0)
        return buf

    def __repr__(self) -> str:
        kind = "embedded" if self.is_embedded else "external"
        return f"Texture({self.id!r}, {kind})"
