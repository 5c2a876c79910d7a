"""Error definitions for datamodgen."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_DUP_BLOCK_STATE = "E_DUP_BLOCK_STATE"
E_WRITE_IO = "E_WRITE_IO"
E_PAYLOAD_TYPE = "E_PAYLOAD_TYPE"
E_PATH_ESCAPE = "E_PATH_ESCAPE"
E_ENTITY_WRITE = "E_ENTITY_WRITE"
E_CONFIG = "E_CONFIG"
E_MOD_LOAD = "E_MOD_LOAD"
E_INTERNAL = "E_INTERNAL"


@dataclass(eq=False)
class ModError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class DuplicateStateError(ModError):
    pass


class EmitError(ModError):
    pass


class EntityWriteError(ModError):
    """A single entity failed to serialize or write.

    ``context`` always carries ``kind`` and ``id``; the original failure is
    available as ``__cause__``.
    """

    @property
    def kind(self) -> str:
        return (self.context or {}).get("kind", "")

    @property
    def entity_id(self) -> str:
        return (self.context or {}).get("id", "")


class ConfigError(ModError):
    pass


class ModLoadError(ModError):
    pass


def entity_error(kind: str, entity_id: str) -> EntityWriteError:
    return EntityWriteError(
        code=E_ENTITY_WRITE,
        message=f"Error while processing {kind} {entity_id}",
        context={"kind": kind, "id": entity_id},
    )


def internal_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ModError:
    return ModError(code=E_INTERNAL, message=message, context=context)


__all__ = [
    "ModError",
    "DuplicateStateError",
    "EmitError",
    "EntityWriteError",
    "ConfigError",
    "ModLoadError",
    "entity_error",
    "internal_error",
    "E_DUP_BLOCK_STATE",
    "E_WRITE_IO",
    "E_PAYLOAD_TYPE",
    "E_PATH_ESCAPE",
    "E_ENTITY_WRITE",
    "E_CONFIG",
    "E_MOD_LOAD",
    "E_INTERNAL",
]
