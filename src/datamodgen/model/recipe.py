"""Crafting and furnace recipes."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .identifier import Identifier, to_id_string

__all__ = ["CraftingRecipe", "FurnaceRecipe", "CraftingRegistry"]


def _output(item: Any, amount: int) -> Dict[str, Any]:
    return {"item": to_id_string(item), "amount": amount}


class CraftingRecipe:
    """Shaped when ``pattern`` is given (inputs keyed by pattern symbol),
    shapeless otherwise (inputs is a list)."""

    def __init__(
        self,
        mod: Any,
        id: Identifier,
        output: Any,
        amount: int = 1,
        pattern: Optional[Sequence[str]] = None,
        inputs: Any = None,
    ) -> None:
        self.mod = mod
        self.id = id
        self.output = output
        self.amount = amount
        self.pattern: Optional[List[str]] = list(pattern) if pattern else None
        if self.pattern is not None:
            if not isinstance(inputs, Mapping):
                raise TypeError("Shaped recipes need a symbol -> item mapping")
            self.inputs: Any = dict(inputs)
        else:
            self.inputs = list(inputs or [])

    @property
    def shaped(self) -> bool:
        return self.pattern is not None

    def serialize(self) -> Dict[str, Any]:
        if self.shaped:
            return {
                "pattern": list(self.pattern or []),
                "inputs": {k: to_id_string(v) for k, v in self.inputs.items()},
                "output": _output(self.output, self.amount),
            }
        return {
            "inputs": [to_id_string(v) for v in self.inputs],
            "output": _output(self.output, self.amount),
        }

    def get_recipe_path(self) -> str:
        return f"recipes/crafting/{self.id.get_item()}.json"

    def __repr__(self) -> str:
        return f"CraftingRecipe({str(self.id)!r})"


class FurnaceRecipe:
    def __init__(
        self, mod: Any, id: Identifier, input: Any, output: Any, amount: int = 1
    ) -> None:
        self.mod = mod
        self.id = id
        self.input = input
        self.output = output
        self.amount = amount

    def serialize(self) -> Dict[str, Any]:
        return {
            "input": to_id_string(self.input),
            "output": _output(self.output, self.amount),
        }

    def get_recipe_path(self) -> str:
        return f"recipes/furnace/{self.id.get_item()}.json"

    def __repr__(self) -> str:
        return f"FurnaceRecipe({str(self.id)!r})"


class CraftingRegistry:
    def __init__(self, mod: Any) -> None:
        self.mod = mod
        self.crafting_recipes: List[CraftingRecipe] = []
        self.furnace_recipes: List[FurnaceRecipe] = []

    def add_shaped(
        self,
        name: str,
        pattern: Sequence[str],
        inputs: Mapping[str, Any],
        output: Any,
        amount: int = 1,
    ) -> CraftingRecipe:
        recipe = CraftingRecipe(
            self.mod, Identifier(self.mod, name), output, amount, pattern, inputs
        )
        self.crafting_recipes.append(recipe)
        return recipe

    def add_shapeless(
        self, name: str, inputs: Sequence[Any], output: Any, amount: int = 1
    ) -> CraftingRecipe:
        recipe = CraftingRecipe(
            self.mod, Identifier(self.mod, name), output, amount, None, inputs
        )
        self.crafting_recipes.append(recipe)
        return recipe

    def add_furnace(
        self, name: str, input: Any, output: Any, amount: int = 1
    ) -> FurnaceRecipe:
        recipe = FurnaceRecipe(
            self.mod, Identifier(self.mod, name), input, output, amount
        )
        self.furnace_recipes.append(recipe)
        return recipe
