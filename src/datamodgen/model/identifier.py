"""Namespaced identifiers (``namespace:item``)."""

from __future__ import annotations
from typing import Any

__all__ = ["Identifier", "DEFAULT_NAMESPACE", "to_id_string"]

DEFAULT_NAMESPACE = "base"


class Identifier:
    __slots__ = ("namespace", "item")

    def __init__(self, namespace: Any, item: str) -> None:
        # Accept a Mod (anything carrying a string ``id``) as the namespace.
        ns = getattr(namespace, "id", namespace)
        if not isinstance(ns, str) or not ns:
            raise ValueError(f"Invalid namespace: {namespace!r}")
        if not item:
            raise ValueError("Identifier item must not be empty")
        self.namespace = ns
        self.item = item

    @classmethod
    def from_id(cls, text: str) -> "Identifier":
        if ":" in text:
            ns, item = text.split(":", 1)
            return cls(ns, item)
        return cls(DEFAULT_NAMESPACE, text)

    def derive(self, item: str) -> "Identifier":
        return Identifier(self.namespace, item)

    def get_item(self) -> str:
        return self.item

    def __str__(self) -> str:
        return f"{self.namespace}:{self.item}"

    def __repr__(self) -> str:
        return f"Identifier({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return (self.namespace, self.item) == (other.namespace, other.item)

    def __hash__(self) -> int:
        return hash((self.namespace, self.item))


def to_id_string(ref: Any) -> str:
    """String id for an item/block reference used inside recipes and drops."""
    if isinstance(ref, str):
        return ref
    if isinstance(ref, Identifier):
        return str(ref)
    ident = getattr(ref, "id", None)
    if isinstance(ident, Identifier):
        return str(ident)
    raise TypeError(f"Cannot reference {ref!r} by id")
