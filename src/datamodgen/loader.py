"""Locate the Mod an authoring script builds."""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from .errors import E_MOD_LOAD, ModLoadError
from .logging import get_logger
from .model.mod import Mod

__all__ = ["load_mod", "DEFAULT_ATTRIBUTE"]

DEFAULT_ATTRIBUTE = "mod"


def _load_error(target: str, message: str) -> ModLoadError:
    return ModLoadError(
        code=E_MOD_LOAD, message=message, context={"target": target}
    )


def _split_target(target: str) -> tuple[str, str]:
    # Split on the last colon only when an identifier follows, so drive
    # letters ("C:\\mods\\x.py") stay part of the path.
    head, sep, tail = target.rpartition(":")
    if sep and head and tail.isidentifier():
        return head, tail
    return target, DEFAULT_ATTRIBUTE


def _import_script(target: str, script: Path) -> ModuleType:
    if not script.is_file():
        raise _load_error(target, f"Script not found: {script}")
    name = f"_datamodgen_script_{script.stem}"
    spec = importlib.util.spec_from_file_location(name, script)
    if spec is None or spec.loader is None:
        raise _load_error(target, f"Cannot import {script}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(name, None)
        raise _load_error(target, f"Error while running {script}: {e}") from e
    return module


def _import_module(target: str, name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as e:
        raise _load_error(target, f"Cannot import module {name}: {e}") from e


def load_mod(target: str) -> Mod:
    """Resolve ``module[:attr]`` or ``script.py[:attr]`` to a Mod.

    The attribute (``mod`` unless named) may be a Mod or a zero-argument
    callable returning one.
    """
    location, attr = _split_target(target)
    if location.endswith(".py"):
        module = _import_script(target, Path(location))
    else:
        module = _import_module(target, location)
    try:
        value: Any = getattr(module, attr)
    except AttributeError:
        raise _load_error(
            target, f"{location} has no attribute '{attr}'"
        ) from None
    if callable(value) and not isinstance(value, Mod):
        try:
            value = value()
        except Exception as e:
            raise _load_error(target, f"{attr}() failed: {e}") from e
    if not isinstance(value, Mod):
        raise _load_error(
            target,
            f"{location}:{attr} is a {type(value).__name__}, expected Mod",
        )
    get_logger().debug("loaded mod %s from %s", value.id, target)
    return value
