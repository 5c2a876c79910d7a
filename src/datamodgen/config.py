"""Project file loading (YAML/JSON) for datamodgen."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import E_CONFIG, ConfigError

__all__ = ["ProjectConfig", "load_config", "REPORTERS"]

REPORTERS = ("plain", "rich", "json", "silent")


@dataclass(slots=True)
class ProjectConfig:
    mod: str
    output: Path
    keep_old_folder: bool = False
    minify_json: bool = False
    reporter: str | None = None
    verbose: int = 0


def _config_error(path: Path, message: str, **context: Any) -> ConfigError:
    return ConfigError(
        code=E_CONFIG,
        message=message,
        context={"path": str(path), **context},
    )


def _flag(data: dict[str, Any], key: str, path: Path) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise _config_error(path, f"'{key}' must be true or false", value=value)
    return value


def load_config(path: str | Path) -> ProjectConfig:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise _config_error(p, f"Cannot read project file: {e}") from e
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise _config_error(p, f"Malformed project file: {e}") from e
    if not isinstance(data, dict):
        raise _config_error(p, "Root of project file must be an object")

    for key in ("mod", "output"):
        if not isinstance(data.get(key), str) or not data[key]:
            raise _config_error(p, f"Missing required key '{key}'")
    reporter = data.get("reporter")
    if reporter is not None and reporter not in REPORTERS:
        raise _config_error(
            p, f"Unknown reporter {reporter!r}", choices=list(REPORTERS)
        )
    verbose = data.get("verbose", 0)
    if isinstance(verbose, bool) or not isinstance(verbose, int) or verbose < 0:
        raise _config_error(p, "'verbose' must be a non-negative integer")

    base = p.parent
    mod_target = data["mod"]
    # Script targets are relative to the project file, like the output folder.
    script, sep, attr = mod_target.partition(":")
    if script.endswith(".py") and not Path(script).is_absolute():
        mod_target = str(base / script) + sep + attr
    return ProjectConfig(
        mod=mod_target,
        output=(base / data["output"]).resolve(),
        keep_old_folder=_flag(data, "keep_old_folder", p),
        minify_json=_flag(data, "minify_json", p),
        reporter=reporter,
        verbose=verbose,
    )
