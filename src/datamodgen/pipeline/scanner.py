"""Resource references embedded in block models and trigger sheets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

from ..errors import internal_error
from ..model.block_model import BlockModel
from ..model.loot import LootTable
from ..model.sound import Sound
from ..model.texture import Texture
from ..model.trigger_actions import ActionKind, TriggerAction
from ..model.trigger_sheet import TriggerSheet

__all__ = [
    "References",
    "ACTION_RESOURCE_PARAMETERS",
    "action_resource",
    "scan_block_model",
    "scan_trigger_sheet",
    "scan_references",
]


@dataclass(slots=True)
class References:
    textures: List[Texture] = field(default_factory=list)
    sounds: List[Sound] = field(default_factory=list)
    loot_tables: List[LootTable] = field(default_factory=list)


# Every action kind, with the (parameter, resource type) it may embed.
ACTION_RESOURCE_PARAMETERS: Dict[ActionKind, Optional[Tuple[str, Type[Any]]]] = {
    ActionKind.PLAY_SOUND_2D: ("sound", Sound),
    ActionKind.PLAY_SOUND_3D: ("sound", Sound),
    ActionKind.LOOT_DROP: ("loot", LootTable),
    ActionKind.REPLACE_BLOCK_STATE: None,
    ActionKind.RUN_TRIGGER: None,
}


def _unique(values) -> list:
    return list(dict.fromkeys(values))


def action_resource(action: TriggerAction) -> Optional[Any]:
    """The live resource instance embedded in ``action``, if any.

    String and Identifier parameters name resources shipped elsewhere and
    yield ``None``.
    """
    try:
        entry = ACTION_RESOURCE_PARAMETERS[action.kind]
    except KeyError:
        raise internal_error(
            f"Unhandled trigger action kind {action.kind!r}",
            {"action": repr(action)},
        ) from None
    if entry is None:
        return None
    parameter, resource_type = entry
    value = action.parameters.get(parameter)
    return value if isinstance(value, resource_type) else None


def scan_block_model(model: BlockModel) -> References:
    textures = model.get_used_textures()
    textures.extend(model.get_texture_overrides().values())
    return References(textures=_unique(textures))


def scan_trigger_sheet(sheet: TriggerSheet) -> References:
    refs = References()
    for action in sheet.get_all_actions():
        resource = action_resource(action)
        if isinstance(resource, Sound):
            refs.sounds.append(resource)
        elif isinstance(resource, LootTable):
            refs.loot_tables.append(resource)
    refs.sounds = _unique(refs.sounds)
    refs.loot_tables = _unique(refs.loot_tables)
    return refs


def scan_references(entity: Any) -> References:
    if isinstance(entity, BlockModel):
        return scan_block_model(entity)
    if isinstance(entity, TriggerSheet):
        return scan_trigger_sheet(entity)
    return References()
