"""Trigger sheets: event name -> ordered trigger actions, with inheritance."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .identifier import Identifier
from .trigger_actions import TriggerAction

__all__ = ["TriggerSheet", "sheet_ref"]

EVENT_BLOCK_UPDATE = "relayOnBlockUpdate"
EVENT_INTERACT = "onInteract"
EVENT_PLACE = "onPlace"
EVENT_BREAK = "onBreak"

SheetParent = Union["TriggerSheet", Identifier, str, None]


def sheet_ref(sheet: Any) -> Optional[str]:
    if sheet is None:
        return None
    if isinstance(sheet, TriggerSheet):
        return sheet.get_trigger_sheet_id()
    return str(sheet)


class TriggerSheet:
    def __init__(self, mod: Any, id: Optional[Identifier] = None) -> None:
        self.mod = mod
        # Anonymous sheets are numbered by their mod.
        self.id = id if id is not None else Identifier(
            mod, mod.next_temp_sheet_name()
        )
        self.parent: SheetParent = None
        self.triggers: Dict[str, List[TriggerAction]] = {}

    def set_parent(self, parent: SheetParent) -> None:
        self.parent = parent

    def add_trigger(self, event: str, *actions: TriggerAction) -> None:
        self.triggers.setdefault(event, []).extend(actions)

    def on_update(self, *actions: TriggerAction) -> None:
        self.add_trigger(EVENT_BLOCK_UPDATE, *actions)

    def on_interact(self, *actions: TriggerAction) -> None:
        self.add_trigger(EVENT_INTERACT, *actions)

    def on_place(self, *actions: TriggerAction) -> None:
        self.add_trigger(EVENT_PLACE, *actions)

    def on_break(self, *actions: TriggerAction) -> None:
        self.add_trigger(EVENT_BREAK, *actions)

    def clone(self, new_id: Optional[str] = None) -> "TriggerSheet":
        sheet = TriggerSheet(
            self.mod, self.id.derive(new_id or self.mod.next_temp_sheet_name())
        )
        sheet.add_trigger_sheet(self)
        return sheet

    def add_trigger_sheet(self, *sheets: "TriggerSheet") -> None:
        """Append copies of every action of ``sheets`` to this sheet."""
        for sheet in sheets:
            for event, actions in sheet.triggers.items():
                self.add_trigger(event, *(a.copy() for a in actions))

    def get_all_actions(self) -> List[TriggerAction]:
        return [a for actions in self.triggers.values() for a in actions]

    def serialize(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "stringId": self.get_trigger_sheet_id(),
            "triggers": {
                event: [a.serialize(self.mod) for a in actions]
                for event, actions in self.triggers.items()
            },
        }
        if self.parent is not None:
            out["parent"] = sheet_ref(self.parent)
        return out

    def get_trigger_sheet_path(self) -> str:
        return f"block_events/{self.id.get_item()}.json"

    def get_trigger_sheet_id(self) -> str:
        # The game loader reserves '/' in sheet ids.
        return str(self.id).replace("/", "•")

    def __repr__(self) -> str:
        return f"TriggerSheet({str(self.id)!r})"
