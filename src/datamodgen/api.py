"""High-level API for datamodgen."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .model.mod import Mod
from .pipeline.driver import ModWriter, WriteResult

__all__ = [
    "WriteOptions",
    "WriteResult",
    "write_mod",
    "plan_dry_run",
]


@dataclass(slots=True)
class WriteOptions:
    mod: Mod
    output_root: Path
    # Keep files from a previous run instead of clearing <output_root>/<mod id>
    keep_old_folder: bool = False
    minify_json: bool = False
    # Plan every file and byte count without touching the file system
    dry_run: bool = False


def write_mod(options: WriteOptions) -> WriteResult:
    writer = ModWriter(options.mod, minify_json=options.minify_json)
    return writer.write(
        options.output_root,
        options.keep_old_folder,
        dry_run=options.dry_run,
    )


def plan_dry_run(
    mod: Mod, output_root: str | Path = "."
) -> tuple[WriteResult, Dict[str, Any]]:
    """Run the pipeline without writing anything.

    Returns (WriteResult, plan_dict) where plan_dict is JSON-serialisable.
    """
    result = write_mod(
        WriteOptions(mod=mod, output_root=Path(output_root), dry_run=True)
    )
    return result, result.to_dict()

