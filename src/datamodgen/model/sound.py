"""Sound resources played by trigger actions."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from .identifier import Identifier

__all__ = ["Sound"]

SoundSource = Union[bytes, bytearray, Path, Identifier, str]


class Sound:
    """An ``.ogg`` sound.

    ``bytes`` and :class:`~pathlib.Path` sources are embedded and written
    into the mod folder; ``str`` and :class:`Identifier` sources refer to a
    sound shipped elsewhere.
    """

    def __init__(self, id: str, source: SoundSource) -> None:
        self.id = id
        self.source = source

    @classmethod
    def load_from_file(cls, id: str, path: str | Path) -> "Sound":
        return cls(id, Path(path))

    @property
    def is_embedded(self) -> bool:
        return isinstance(self.source, (bytes, bytearray, Path))

    def get_as_block_sound_path(self) -> str:
        return f"sounds/blocks/{self.id}.ogg"

    def get_as_block_sound_id(self, mod: Any) -> Identifier:
        if isinstance(self.source, Identifier):
            return self.source
        if isinstance(self.source, str):
            return Identifier.from_id(self.source)
        return Identifier(mod, self.get_as_block_sound_path())

    def create_ogg_stream(self) -> Optional[BinaryIO]:
        if isinstance(self.source, (bytes, bytearray)):
            return io.BytesIO(bytes(self.source))
        if isinstance(self.source, Path):
            return self.source.open("rb")
        return None

    def __repr__(self) -> str:
        kind = "embedded" if self.is_embedded else "external"
        return f"Sound({self.id!r}, {kind})"
