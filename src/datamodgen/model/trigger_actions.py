"""Trigger actions.

Actions form a closed set of kinds (:class:`ActionKind`). Every concrete
action class declares its kind; code that needs per-kind behaviour
dispatches on ``action.kind`` rather than on the Python class.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any, ClassVar, Dict

from .identifier import Identifier
from .loot import LootTable
from .sound import Sound

__all__ = [
    "ActionKind",
    "TriggerAction",
    "PlaySound2DAction",
    "PlaySound3DAction",
    "LootDropAction",
    "ReplaceBlockStateAction",
    "RunTriggerAction",
]


class ActionKind(Enum):
    PLAY_SOUND_2D = "base:play_sound_2d"
    PLAY_SOUND_3D = "base:play_sound"
    LOOT_DROP = "base:loot_drop"
    REPLACE_BLOCK_STATE = "base:replace_block_state"
    RUN_TRIGGER = "base:run_trigger"


def _parameter_value(value: Any, mod: Any) -> Any:
    if isinstance(value, Sound):
        return str(value.get_as_block_sound_id(mod))
    if isinstance(value, LootTable):
        return value.get_loot_id()
    if isinstance(value, Identifier):
        return str(value)
    state_id = getattr(value, "get_state_id", None)
    if callable(state_id):
        return state_id()
    return value


class TriggerAction:
    kind: ClassVar[ActionKind]

    def __init__(self, **parameters: Any) -> None:
        self.parameters: Dict[str, Any] = dict(parameters)

    def serialize(self, mod: Any) -> Dict[str, Any]:
        return {
            "actionId": self.kind.value,
            "parameters": {
                k: _parameter_value(v, mod) for k, v in self.parameters.items()
            },
        }

    def copy(self) -> "TriggerAction":
        # Parameter values (sounds, loot tables) are shared, not cloned.
        dup = copy.copy(self)
        dup.parameters = dict(self.parameters)
        return dup

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameters!r})"


class PlaySound2DAction(TriggerAction):
    kind = ActionKind.PLAY_SOUND_2D

    def __init__(
        self,
        sound: Sound | Identifier | str,
        volume: float = 1.0,
        pitch: float = 1.0,
        pan: float = 0.0,
    ) -> None:
        super().__init__(sound=sound, volume=volume, pitch=pitch, pan=pan)


class PlaySound3DAction(TriggerAction):
    kind = ActionKind.PLAY_SOUND_3D

    def __init__(
        self,
        sound: Sound | Identifier | str,
        volume: float = 1.0,
        pitch: float = 1.0,
        x: int = 0,
        y: int = 0,
        z: int = 0,
    ) -> None:
        super().__init__(
            sound=sound, volume=volume, pitch=pitch, xOff=x, yOff=y, zOff=z
        )


class LootDropAction(TriggerAction):
    kind = ActionKind.LOOT_DROP

    def __init__(
        self, loot: LootTable | Identifier | str, x: int = 0, y: int = 0, z: int = 0
    ) -> None:
        super().__init__(loot=loot, xOff=x, yOff=y, zOff=z)


class ReplaceBlockStateAction(TriggerAction):
    kind = ActionKind.REPLACE_BLOCK_STATE

    def __init__(
        self, block_state: Any, x: int = 0, y: int = 0, z: int = 0
    ) -> None:
        super().__init__(blockStateId=block_state, xOff=x, yOff=y, zOff=z)


class RunTriggerAction(TriggerAction):
    kind = ActionKind.RUN_TRIGGER

    def __init__(self, trigger_id: str, x: int = 0, y: int = 0, z: int = 0) -> None:
        super().__init__(triggerId=trigger_id, xOff=x, yOff=y, zOff=z)
