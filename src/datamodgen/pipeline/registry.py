"""Identity-based "already written" registries for shared resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterator, TypeVar

__all__ = ["ResourceRegistry", "RunRegistries"]

T = TypeVar("T")


class ResourceRegistry(Generic[T]):
    """Records which resource *instances* were materialized in a run.

    Membership is by identity: two textures with identical pixels are two
    resources.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        # id() -> instance; holding the instance keeps its id from being reused.
        self._seen: Dict[int, T] = {}

    def mark_written(self, resource: T) -> bool:
        """Return True the first time ``resource`` is passed, False after."""
        key = id(resource)
        if key in self._seen:
            return False
        self._seen[key] = resource
        return True

    def __contains__(self, resource: object) -> bool:
        return id(resource) in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[T]:
        return iter(self._seen.values())

    def __repr__(self) -> str:
        return f"ResourceRegistry({self.kind!r}, size={len(self)})"


@dataclass(slots=True)
class RunRegistries:
    """One registry per resource kind, scoped to a single write run."""

    block_textures: ResourceRegistry[Any] = field(
        default_factory=lambda: ResourceRegistry("block texture")
    )
    item_textures: ResourceRegistry[Any] = field(
        default_factory=lambda: ResourceRegistry("item texture")
    )
    sounds: ResourceRegistry[Any] = field(
        default_factory=lambda: ResourceRegistry("sound")
    )
    loot_tables: ResourceRegistry[Any] = field(
        default_factory=lambda: ResourceRegistry("loot table")
    )
