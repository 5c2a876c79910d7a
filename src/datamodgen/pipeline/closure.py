"""Parent-chain closure for block models and trigger sheets.

Only live instances of the same type are followed; a parent given as an
``Identifier`` or string is resolved by the game, not by us, and ends the
branch.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Type, TypeVar

from ..logging import get_logger

__all__ = ["resolve_closure"]

E = TypeVar("E")


def _parent(entity: object) -> object:
    return getattr(entity, "parent", None)


def resolve_closure(
    seeds: Iterable[E],
    declared: Iterable[E] = (),
    *,
    kind: Type[E],
    parent_of: Callable[[E], object] = _parent,
) -> List[E]:
    """Return ``seeds`` plus every live ancestor, each exactly once.

    Fixed-point passes over ``declared + discovered``: each pass adds the
    missing live parents of discovered entities and the loop stops after a
    pass that adds nothing. Membership is tracked in a set, so a cyclic
    parent chain converges instead of recursing. Seeds keep their order;
    ancestors follow in discovery order.
    """
    logger = get_logger()
    discovered: Dict[E, None] = dict.fromkeys(seeds)
    declared = list(declared)
    passes = 0
    while True:
        passes += 1
        added = 0
        for entity in declared + list(discovered):
            if entity not in discovered:
                continue
            parent = parent_of(entity)
            if not isinstance(parent, kind) or parent in discovered:
                continue
            discovered[parent] = None
            added += 1
        if added == 0:
            break
    logger.debug(
        "%s closure: %d entities after %d passes",
        kind.__name__,
        len(discovered),
        passes,
    )
    return list(discovered)
